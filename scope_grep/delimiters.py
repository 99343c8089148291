"""Registry of the delimiters that open and close scopes."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .constants import DELIMITER_PAIRS
from .models import Delimiter


def _build_registry(pairs: tuple[tuple[bytes, bytes], ...]) -> Mapping[bytes, Delimiter]:
    registry: dict[bytes, Delimiter] = {}
    for opening, closing in pairs:
        registry[opening] = Delimiter(text=opening, partner=closing, opening=True)
        registry[closing] = Delimiter(text=closing, partner=opening, opening=False)
    return MappingProxyType(registry)


DELIMITERS = _build_registry(DELIMITER_PAIRS)


def get_delimiter(text: bytes) -> Delimiter:
    """Look up a registered delimiter by its literal bytes.

    Args:
        text: Delimiter bytes, such as ``b"("`` or ``b"*/"``.

    Returns:
        Delimiter: The shared registry entry.

    Raises:
        KeyError: If `text` is not a registered delimiter.

    Examples:
        get_delimiter(b"{").partner  # b"}"
    """
    return DELIMITERS[text]


def is_partner(opening: Delimiter, closing: Delimiter) -> bool:
    """Return True when `closing` closes scopes opened by `opening`."""
    return opening.opening and not closing.opening and opening.partner == closing.text
