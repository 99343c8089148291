"""Delimiter occurrence discovery within a single line."""

from __future__ import annotations

from collections.abc import Iterable

from .delimiters import DELIMITERS
from .models import Delimiter, Line, Marker


def find_markers(line: Line, delimiters: Iterable[Delimiter] | None = None) -> list[Marker]:
    """Locate every delimiter occurrence in a line, ordered by column.

    Each delimiter is searched independently and the cursor advances by one
    byte past every hit, so adjacent identical delimiters are all reported
    and occurrences of different delimiters may overlap (``/*/`` yields both
    ``/*`` and ``*/``).

    Args:
        line: The line to scan.
        delimiters: Delimiters to search for; defaults to the registry.

    Returns:
        list[Marker]: Markers sorted by ascending column.

    Examples:
        [m.column for m in find_markers(Line(0, b"f(g(x))\\n"))]  # [1, 3, 5, 6]
    """
    if delimiters is None:
        delimiters = DELIMITERS.values()

    content = line.content
    markers: list[Marker] = []
    for delimiter in delimiters:
        base = 0
        while base < len(content):
            index = content.find(delimiter.text, base)
            if index == -1:
                break
            markers.append(Marker(delimiter=delimiter, line=line, column=index))
            base = index + 1

    markers.sort(key=lambda marker: marker.column)
    return markers
