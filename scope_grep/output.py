"""Rendering of emitted scope ranges."""

from __future__ import annotations

import click

from .models import ScopeRange

START_COLOR = "green"
END_COLOR = "cyan"
UNTERMINATED_COLOR = "yellow"


def format_range(scope_range: ScopeRange, pretty: bool = False) -> str:
    """Render one emitted range as an output line (without line feed).

    With `pretty`, both ends are wrapped in ANSI colors. The visible text is
    the same in both modes, and `click.echo` strips the colors when the
    output is not a terminal.

    Args:
        scope_range: Range to render.
        pretty: Whether to colorize the range ends.

    Returns:
        str: ``"<line>:<col> - <line>:<col>"`` or ``"<line>:<col> - *"``.

    Examples:
        format_range(ScopeRange(0, 3, 0, 7))  # "0:3 - 0:7"
    """
    if not pretty:
        return str(scope_range)

    end_color = UNTERMINATED_COLOR if scope_range.unterminated else END_COLOR
    start = click.style(scope_range.start, fg=START_COLOR, bold=True)
    end = click.style(scope_range.end, fg=end_color, bold=True)
    return f"{start} - {end}"
