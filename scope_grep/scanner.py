"""Streaming scan driver: per-line processing and flush checkpoints."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from typing import BinaryIO

from .config import ScanConfig, validate_config
from .constants import LINE_TERMINATOR
from .exceptions import PatternError
from .markers import find_markers
from .models import Line, ScanContext, ScopeRange
from .scopes import consolidate_closed, locate_match, mark_scopes, parse_scopes
from .streams import iter_lines

logger = logging.getLogger(__name__)


def compile_pattern(pattern: str) -> re.Pattern[bytes]:
    """Compile a user pattern for matching against raw line bytes.

    Args:
        pattern: Regular expression text, as received on the command line.

    Returns:
        re.Pattern[bytes]: Compiled byte pattern.

    Raises:
        PatternError: If the pattern does not compile.

    Examples:
        compile_pattern(r"foo\\(").search(b"foo(bar)")
    """
    try:
        return re.compile(os.fsencode(pattern))
    except re.error as error:
        raise PatternError(pattern, str(error)) from error


def flush(ctx: ScanContext, include_open: bool = False) -> list[ScopeRange]:
    """Emit flagged scopes and release closed-scope state.

    Consolidates the closed list, returns the surviving closed ranges, then
    empties the closed list whether or not its scopes were flagged. When no
    scope is open the whole context is reset.

    Args:
        ctx: Scan context to flush.
        include_open: Also emit flagged scopes that are still open, outermost
            first, as unterminated ranges. Used once at end of input.

    Returns:
        list[ScopeRange]: Ranges to output, in emission order.
    """
    selected = consolidate_closed(ctx)
    ranges = [ctx.scopes[index].to_range() for index in selected]
    logger.debug(
        "Flushing %d closed scope(s), emitting %d", len(ctx.closed), len(ranges)
    )
    ctx.closed.clear()

    if include_open:
        unterminated = [ctx.scopes[index] for index in ctx.open if ctx.scopes[index].matched]
        if unterminated:
            logger.debug("Emitting %d unterminated scope(s)", len(unterminated))
        ranges.extend(scope.to_range() for scope in unterminated)

    if ctx.depth == 0:
        ctx.reset()
    return ranges


def process_line(
    ctx: ScanContext, line: Line, pattern: re.Pattern[bytes], scopes: int
) -> list[ScopeRange]:
    """Advance the scan by one line.

    Args:
        ctx: Scan context to update.
        line: The line just read.
        pattern: Compiled byte pattern.
        scopes: Number of scopes to flag per match.

    Returns:
        list[ScopeRange]: Ranges emitted at this line; non-empty only when the
            line leaves no scope open.
    """
    parse_scopes(ctx, find_markers(line))

    if ctx.depth:
        ctx.buffer.append(line)

    span = locate_match(pattern, line)
    if span is not None:
        mark_scopes(ctx, scopes, line.number, *span)

    if ctx.depth:
        return []
    return flush(ctx)


def scan_lines(
    lines: Iterable[bytes],
    pattern: re.Pattern[bytes] | str,
    config: ScanConfig | None = None,
) -> Iterator[ScopeRange]:
    """Scan raw lines and yield the scopes around pattern matches.

    Ranges are yielded as soon as the nesting depth returns to zero, so the
    input is consumed lazily. Lines must keep their line feed; the first line
    without one is treated as a truncated final line and ends the scan
    unprocessed.

    Args:
        lines: Raw input lines, terminators included.
        pattern: Compiled byte pattern, or pattern text to compile.
        config: Scan configuration. Defaults to a new `ScanConfig`.

    Yields:
        ScopeRange: Emitted ranges in output order.

    Raises:
        ConfigError: If the configuration fails validation.
        PatternError: If `pattern` is text that does not compile.

    Examples:
        [str(r) for r in scan_lines([b"foo(bar)\\n"], "bar")]  # ["0:3 - 0:7"]
    """
    config = config or ScanConfig()
    validate_config(config)
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)

    ctx = ScanContext()
    for number, raw in enumerate(lines):
        if not raw.endswith(LINE_TERMINATOR):
            logger.debug("Dropping unterminated line %d", number)
            break
        yield from process_line(ctx, Line(number, raw), pattern, config.scopes)

    yield from flush(ctx, include_open=True)


def scan_stream(
    stream: BinaryIO,
    pattern: re.Pattern[bytes] | str,
    config: ScanConfig | None = None,
) -> Iterator[ScopeRange]:
    """Scan a binary stream; see `scan_lines`.

    Raises:
        InputReadError: If reading the stream fails or a line is too long.
    """
    config = config or ScanConfig()
    yield from scan_lines(iter_lines(stream, config.max_line_length), pattern, config)
