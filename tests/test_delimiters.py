import pytest

from scope_grep.constants import DELIMITER_PAIRS
from scope_grep.delimiters import DELIMITERS, get_delimiter, is_partner


def test_registry_holds_both_members_of_every_pair():
    assert set(DELIMITERS) == {b"(", b")", b"[", b"]", b"{", b"}", b"/*", b"*/"}
    for opening, closing in DELIMITER_PAIRS:
        assert DELIMITERS[opening].opening is True
        assert DELIMITERS[opening].partner == closing
        assert DELIMITERS[closing].opening is False
        assert DELIMITERS[closing].partner == opening


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        DELIMITERS[b"<"] = DELIMITERS[b"("]


def test_get_delimiter_returns_shared_entries():
    assert get_delimiter(b"{") is DELIMITERS[b"{"]
    assert get_delimiter(b"*/").text == b"*/"


def test_get_delimiter_rejects_unknown_text():
    with pytest.raises(KeyError):
        get_delimiter(b"<")


@pytest.mark.parametrize(
    ("opening", "closing", "expected"),
    [
        (b"(", b")", True),
        (b"[", b"]", True),
        (b"/*", b"*/", True),
        (b"(", b"]", False),
        (b"{", b")", False),
        (b")", b"(", False),
        (b"(", b"(", False),
    ],
)
def test_is_partner(opening, closing, expected):
    assert is_partner(get_delimiter(opening), get_delimiter(closing)) is expected
