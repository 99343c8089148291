"""Line-oriented reading of binary input streams."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import BinaryIO

from .constants import DEFAULT_MAX_LINE_LENGTH, LINE_TERMINATOR, MAX_LINE_LENGTH_ENV_VAR
from .exceptions import InputReadError, LineTooLongError


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in bytes when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["SCOPE_GREP_MAX_LINE_LENGTH"] = "4096"
        limit = get_max_line_length(default=1024)
    """
    env_value = os.environ.get(MAX_LINE_LENGTH_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_length = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_LINE_LENGTH_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_length <= 0:
        error_message = f"{MAX_LINE_LENGTH_ENV_VAR} must be a positive integer, got {max_length}."
        raise ValueError(error_message)

    return max_length


def iter_lines(
    stream: BinaryIO, max_line_length: int = DEFAULT_MAX_LINE_LENGTH
) -> Iterator[bytes]:
    """Yield raw lines from a binary stream, terminators included.

    The last chunk is yielded as read, so a final line without a line feed
    comes out without one.

    Args:
        stream: Binary stream to read from.
        max_line_length: Maximum line length in bytes, excluding the line feed.

    Yields:
        bytes: One raw line per iteration.

    Raises:
        LineTooLongError: If a line exceeds `max_line_length`.
        InputReadError: If the stream raises an `OSError`.

    Examples:
        list(iter_lines(io.BytesIO(b"a\\nb")))  # [b"a\\n", b"b"]
    """
    line_number = 0
    while True:
        try:
            chunk = stream.readline(max_line_length + 1)
        except OSError as error:
            raise InputReadError(f"Failed to read input at line {line_number}: {error}") from error

        if not chunk:
            return

        length = len(chunk)
        if chunk.endswith(LINE_TERMINATOR):
            length -= 1
        if length > max_line_length:
            raise LineTooLongError(line_number, max_line_length)

        yield chunk
        line_number += 1
