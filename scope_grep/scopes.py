"""Scope tree construction, match marking, and consolidation."""

from __future__ import annotations

import logging
import re

from .delimiters import is_partner
from .models import Line, Marker, ScanContext, Scope

logger = logging.getLogger(__name__)


def _open_scope(ctx: ScanContext, marker: Marker) -> int:
    """Create a scope for an opening marker and push it on the open stack.

    Args:
        ctx: Scan context to update.
        marker: Opening delimiter marker.

    Returns:
        int: Arena index of the new scope.
    """
    scope = Scope(start=marker)
    index = len(ctx.scopes)
    if ctx.open:
        parent_index = ctx.open[-1]
        ctx.scopes[parent_index].children.append(index)
        scope.parent = parent_index
    ctx.scopes.append(scope)
    ctx.open.append(index)
    return index


def _close_scope(ctx: ScanContext, marker: Marker) -> int | None:
    """Close the innermost open scope if `marker` is its partner.

    A closer that does not match the innermost open scope, or that arrives
    with no scope open, leaves the context untouched.

    Args:
        ctx: Scan context to update.
        marker: Closing delimiter marker.

    Returns:
        int | None: Arena index of the closed scope, or None when the marker
            was ignored.
    """
    if not ctx.open:
        logger.debug("Ignoring stray %r at %d:%d", marker.delimiter.text, *marker.position)
        return None

    top = ctx.scopes[ctx.open[-1]]
    if not is_partner(top.start.delimiter, marker.delimiter):
        logger.debug(
            "Ignoring mismatched %r at %d:%d (innermost scope opened by %r)",
            marker.delimiter.text,
            *marker.position,
            top.start.delimiter.text,
        )
        return None

    index = ctx.open.pop()
    top.end = marker
    ctx.closed.append(index)
    return index


def parse_scopes(ctx: ScanContext, markers: list[Marker]) -> None:
    """Apply a line's markers to the open stack and closed list.

    Single pass, no lookahead: opening markers always start a new scope,
    closing markers either close the innermost scope or are dropped.

    Args:
        ctx: Scan context to update.
        markers: Markers of one line, ordered by column.

    Examples:
        ctx = ScanContext()
        parse_scopes(ctx, find_markers(Line(0, b"(a)\\n")))
        ctx.closed  # [0]
    """
    for marker in markers:
        if marker.delimiter.opening:
            _open_scope(ctx, marker)
        else:
            _close_scope(ctx, marker)


def locate_match(pattern: re.Pattern[bytes], line: Line) -> tuple[int, int] | None:
    """Return the span of the leftmost pattern match on a line.

    Only the first match is considered; later matches on the same line are
    not located.

    Args:
        pattern: Compiled byte pattern.
        line: Line to search, terminator included.

    Returns:
        tuple[int, int] | None: Start (inclusive) and end (exclusive) columns,
            or None when the line does not match.
    """
    match = pattern.search(line.content)
    if match is None:
        return None
    return match.span()


def scope_contains(scope: Scope, line_number: int, start: int, end: int) -> bool:
    """Check whether a scope encloses a match span.

    An open scope encloses everything after its start.

    Args:
        scope: Scope to test.
        line_number: Line of the match.
        start: First column of the match.
        end: Column just past the match.

    Returns:
        bool: True when the span lies inside the scope.
    """
    if scope.start.position > (line_number, start):
        return False
    return scope.end is None or scope.end.position >= (line_number, end)


def find_tightest_scope(ctx: ScanContext, line_number: int, start: int, end: int) -> int | None:
    """Find the innermost scope that encloses a match span.

    Closed scopes are searched first, in closing order (tightest first), then
    open scopes from innermost to outermost.

    Args:
        ctx: Scan context to search.
        line_number: Line of the match.
        start: First column of the match.
        end: Column just past the match.

    Returns:
        int | None: Arena index of the enclosing scope, or None when the match
            lies outside every delimiter pair.
    """
    for index in ctx.closed:
        if scope_contains(ctx.scopes[index], line_number, start, end):
            return index
    for index in reversed(ctx.open):
        if scope_contains(ctx.scopes[index], line_number, start, end):
            return index
    return None


def mark_scopes(ctx: ScanContext, depth: int, line_number: int, start: int, end: int) -> int:
    """Flag the scope enclosing a match and up to `depth - 1` of its ancestors.

    Args:
        ctx: Scan context holding the scopes.
        depth: Number of scopes to flag, counting the enclosing one. Zero
            flags nothing.
        line_number: Line of the match.
        start: First column of the match.
        end: Column just past the match.

    Returns:
        int: Number of scopes visited and flagged.
    """
    index = find_tightest_scope(ctx, line_number, start, end)
    marked = 0
    while index is not None and marked < depth:
        scope = ctx.scopes[index]
        scope.matched = True
        marked += 1
        index = scope.parent
    return marked


def consolidate_closed(ctx: ScanContext) -> list[int]:
    """Collapse chains of flagged scopes to their outermost flagged member.

    Each flagged closed scope is replaced by its highest ancestor reachable
    through flagged parents. Every result is kept once, in closed-list order,
    and only if that scope is itself closed; an open result is left for the
    end-of-input flush.

    Args:
        ctx: Scan context holding the closed list.

    Returns:
        list[int]: Arena indices of the closed scopes to emit.

    Examples:
        # "(a(b)c)" with both pairs flagged yields only the outer pair.
    """
    selected: list[int] = []
    seen: set[int] = set()
    for index in ctx.closed:
        if not ctx.scopes[index].matched:
            continue
        parent = ctx.scopes[index].parent
        while parent is not None and ctx.scopes[parent].matched:
            index = parent
            parent = ctx.scopes[index].parent
        if index in seen or ctx.scopes[index].is_open:
            continue
        seen.add(index)
        selected.append(index)
    return selected
