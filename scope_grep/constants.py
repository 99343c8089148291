"""Constants used across the scope-grep package."""

from __future__ import annotations

# Registered delimiter pairs as (opening, closing).
# Matched literally; no awareness of strings, escapes or comment nesting.
DELIMITER_PAIRS: tuple[tuple[bytes, bytes], ...] = (
    (b"(", b")"),
    (b"[", b"]"),
    (b"{", b"}"),
    (b"/*", b"*/"),
)

LINE_TERMINATOR = b"\n"

# Defaults
DEFAULT_SCOPES = 1
DEFAULT_MAX_LINE_LENGTH = 1024 * 1024

# Environment overrides
MAX_LINE_LENGTH_ENV_VAR = "SCOPE_GREP_MAX_LINE_LENGTH"

# Configuration lookup
CONFIG_TABLE = "scope-grep"
CONFIG_DOTFILE = ".scope-grep.toml"

# Output
UNTERMINATED_END = "*"
