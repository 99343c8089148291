from __future__ import annotations

import io

import pytest

from scope_grep.exceptions import InputReadError, LineTooLongError
from scope_grep.streams import MAX_LINE_LENGTH_ENV_VAR, get_max_line_length, iter_lines


class _FailingStream(io.RawIOBase):
    def readline(self, size=-1):
        raise OSError("device unplugged")


def test_iter_lines_keeps_terminators_and_partial_last_line():
    assert list(iter_lines(io.BytesIO(b"a\nb\nc"))) == [b"a\n", b"b\n", b"c"]


def test_iter_lines_empty_stream():
    assert list(iter_lines(io.BytesIO(b""))) == []


def test_line_at_limit_is_accepted():
    assert list(iter_lines(io.BytesIO(b"abc\nde\n"), max_line_length=3)) == [b"abc\n", b"de\n"]


def test_line_over_limit_is_rejected():
    lines = iter_lines(io.BytesIO(b"ok\nabcd\n"), max_line_length=3)

    assert next(lines) == b"ok\n"
    with pytest.raises(LineTooLongError) as excinfo:
        next(lines)

    assert excinfo.value.line_number == 1
    assert excinfo.value.max_line_length == 3
    assert "exceeds maximum allowed length of 3 bytes" in str(excinfo.value)


def test_read_errors_are_wrapped():
    with pytest.raises(InputReadError) as excinfo:
        list(iter_lines(_FailingStream()))

    assert isinstance(excinfo.value, OSError)
    assert "device unplugged" in str(excinfo.value)


def test_max_line_length_defaults_without_env(monkeypatch):
    monkeypatch.delenv(MAX_LINE_LENGTH_ENV_VAR, raising=False)

    assert get_max_line_length(default=42) == 42


def test_max_line_length_from_env(monkeypatch):
    monkeypatch.setenv(MAX_LINE_LENGTH_ENV_VAR, "4096")

    assert get_max_line_length(default=42) == 4096


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_max_line_length_rejects_invalid_env(monkeypatch, value):
    monkeypatch.setenv(MAX_LINE_LENGTH_ENV_VAR, value)

    with pytest.raises(ValueError, match=MAX_LINE_LENGTH_ENV_VAR):
        get_max_line_length()
