"""Package-specific exception types."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for errors that abort a scan.

    Malformed delimiter nesting is never reported through this hierarchy;
    stray closers and unbalanced input are recovered from silently.
    """


class PatternError(ScanError, ValueError):
    """Raised when the search pattern is not a valid regular expression.

    Args:
        pattern: The pattern as supplied by the caller.
        reason: Message from the regular expression compiler.
    """

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class InputReadError(ScanError, OSError):
    """Raised when reading the input stream fails for a reason other than EOF."""


class LineTooLongError(InputReadError):
    """Raised when an input line exceeds the configured maximum length.

    Args:
        line_number: Zero-based index of the offending line.
        max_line_length: Maximum allowed line length in bytes.
    """

    def __init__(self, line_number: int, max_line_length: int):
        self.line_number = line_number
        self.max_line_length = max_line_length
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} exceeds maximum allowed length "
            f"of {self.max_line_length} bytes"
        )
