"""Data models for scope-grep."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import UNTERMINATED_END


@dataclass(frozen=True)
class Delimiter:
    """A registered delimiter string.

    Attributes:
        text: Literal bytes of the delimiter.
        partner: Literal bytes of the delimiter that pairs with this one.
        opening: True for the opening member of the pair.
    """

    text: bytes
    partner: bytes
    opening: bool


@dataclass(frozen=True)
class Line:
    """One input line.

    Attributes:
        number: Zero-based line number.
        content: Raw bytes of the line, including its terminator.
    """

    number: int
    content: bytes


@dataclass(frozen=True)
class Marker:
    """A delimiter occurrence at a given line and column.

    Attributes:
        delimiter: The registered delimiter found.
        line: Line the occurrence belongs to.
        column: Zero-based byte offset of the occurrence within the line.
    """

    delimiter: Delimiter
    line: Line
    column: int

    @property
    def position(self) -> tuple[int, int]:
        return (self.line.number, self.column)


@dataclass
class Scope:
    """A node of the scope tree.

    `parent` and `children` are indices into `ScanContext.scopes`; the parent
    index is only used for lookups while walking towards the root.

    Attributes:
        start: Marker of the opening delimiter.
        end: Marker of the closing delimiter, or None while still open.
        parent: Index of the enclosing scope, or None for a root scope.
        children: Indices of directly nested scopes, in opening order.
        matched: Whether the scope is flagged for output.
    """

    start: Marker
    end: Marker | None = None
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    matched: bool = False

    @property
    def is_open(self) -> bool:
        return self.end is None

    def to_range(self) -> ScopeRange:
        if self.end is None:
            return ScopeRange(self.start.line.number, self.start.column)
        return ScopeRange(
            self.start.line.number,
            self.start.column,
            self.end.line.number,
            self.end.column,
        )


@dataclass
class ScanContext:
    """Mutable per-run state of a scan.

    Attributes:
        scopes: Arena holding every scope created since the last balanced
            checkpoint.
        open: Indices of open scopes, outermost first.
        closed: Indices of closed scopes in closing order, so the tightest
            scope of a nested run comes first.
        buffer: Lines read while at least one scope was open.
    """

    scopes: list[Scope] = field(default_factory=list)
    open: list[int] = field(default_factory=list)
    closed: list[int] = field(default_factory=list)
    buffer: list[Line] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.open)

    def reset(self) -> None:
        """Drop all scope and line state; only valid when no scope is open."""
        self.scopes.clear()
        self.closed.clear()
        self.buffer.clear()


@dataclass(frozen=True)
class ScopeRange:
    """An emitted scope range.

    Attributes:
        start_line: Zero-based line of the opening delimiter.
        start_column: Zero-based byte column of the opening delimiter.
        end_line: Zero-based line of the closing delimiter, or None when the
            scope was still open at end of input.
        end_column: Zero-based byte column of the closing delimiter, or None.

    Examples:
        str(ScopeRange(0, 3, 0, 7))  # "0:3 - 0:7"
        str(ScopeRange(4, 0))  # "4:0 - *"
    """

    start_line: int
    start_column: int
    end_line: int | None = None
    end_column: int | None = None

    @property
    def unterminated(self) -> bool:
        return self.end_line is None

    @property
    def start(self) -> str:
        return f"{self.start_line}:{self.start_column}"

    @property
    def end(self) -> str:
        if self.end_line is None:
            return UNTERMINATED_END
        return f"{self.end_line}:{self.end_column}"

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"
