"""
Reports the delimiter scopes enclosing matches of a pattern in standard input.
Each emitted scope is printed as `<line>:<col> - <line>:<col>`, or
`<line>:<col> - *` when it was still open at end of input.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import InputReadError, PatternError
from .output import format_range
from .scanner import compile_pattern, scan_stream
from .streams import get_max_line_length

__all__ = ["cli"]

LOG_FORMAT = "%(levelname)s: %(message)s"


@click.command()
@click.version_option(package_name="scope-grep")
@click.option(
    "-n",
    "--scopes",
    type=click.IntRange(min=0),
    help="Number of enclosing scopes to output per match (default: 1)",
)
@click.option("--only/--no-only", default=None, help="Don't print the surrounding line context")
@click.option("--pretty/--no-pretty", default=None, help="Use colors")
@click.option("-v", "--verbose", is_flag=True, help="Log scan progress to stderr")
@click.argument("pattern")
def cli(
    pattern: str,
    scopes: int | None = None,
    only: bool | None = None,
    pretty: bool | None = None,
    verbose: bool = False,
):
    """
    Entry point for scanning standard input for scopes around PATTERN.

    Args:
        pattern: Regular expression matched against each input line.
        scopes: Override for the number of scopes flagged per match.
        only: Override for context suppression.
        pretty: Override for colorized output.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If the pattern does not compile or the
            configuration is invalid.
        click.ClickException: If reading standard input fails.

    Examples:
        cat main.c | scope-grep -n 2 "TODO"
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        compiled = compile_pattern(pattern)
    except PatternError as error:
        raise click.BadParameter(str(error), param_hint="'PATTERN'") from error

    try:
        config = build_config(Path.cwd(), scopes=scopes, only=only, pretty=pretty)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    config = replace(config, max_line_length=max_line_length)

    try:
        for scope_range in scan_stream(sys.stdin.buffer, compiled, config):
            click.echo(format_range(scope_range, pretty=config.pretty))
    except InputReadError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
