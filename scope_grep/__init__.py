"""
scope-grep: report the delimiter scopes that enclose pattern matches.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    scope-grep -n 2 "needle" < source.c

Library Usage:
    from pathlib import Path
    from scope_grep import scan_lines

    lines = Path("source.c").read_bytes().splitlines(keepends=True)
    for scope_range in scan_lines(lines, "needle"):
        print(scope_range)
"""

from .config import ConfigError, ScanConfig
from .exceptions import InputReadError, LineTooLongError, PatternError, ScanError
from .markers import find_markers
from .models import ScanContext, ScopeRange
from .scanner import compile_pattern, scan_lines, scan_stream

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "scan_lines",
    "scan_stream",
    "compile_pattern",
    "find_markers",
    # Data models
    "ScanConfig",
    "ScanContext",
    "ScopeRange",
    # Exceptions
    "ConfigError",
    "InputReadError",
    "LineTooLongError",
    "PatternError",
    "ScanError",
    # Version
    "__version__",
]
