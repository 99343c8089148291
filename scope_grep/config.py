"""Configuration loading and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import CONFIG_DOTFILE, CONFIG_TABLE, DEFAULT_MAX_LINE_LENGTH, DEFAULT_SCOPES

logger = logging.getLogger(__name__)


@dataclass
class ScanConfig:
    """Configuration for a scope scan.

    Attributes:
        scopes: Number of scopes flagged per match, counting the tightest
            enclosing scope. Zero flags nothing.
        only: Suppress surrounding context. Accepted and stored; the range
            output carries no context, so it has no visible effect.
        pretty: Colorize emitted ranges when writing to a terminal.
        max_line_length: Maximum length in bytes of one input line.

    Examples:
        ScanConfig(scopes=2, pretty=True)
    """

    scopes: int = DEFAULT_SCOPES
    only: bool = False
    pretty: bool = False

    # Limits
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`scopes` must be a non-negative integer")
    """


# Checked in order in each directory; the first file holding a table wins.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", CONFIG_TABLE),)),
    (CONFIG_DOTFILE, ((CONFIG_TABLE,), ("tool", CONFIG_TABLE))),
)

_SETTING_NAMES = frozenset(field.name for field in fields(ScanConfig))


def load_config(search_path: Path) -> ScanConfig:
    """Load configuration from the nearest config file.

    Looks in `search_path` and then each parent directory for the files in
    `CONFIG_SOURCES`: the ``[tool.scope-grep]`` table of `pyproject.toml`, then
    the ``[scope-grep]`` or ``[tool.scope-grep]`` table of `.scope-grep.toml`.
    Files that cannot be read or decoded, and files without a matching table,
    are passed over.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ScanConfig: Loaded configuration, or defaults when no table is found.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path.cwd())
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            found = _find_settings(config_file, table_paths)
            if found is not None:
                table_path, settings = found
                logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
                return _settings_to_config(settings, config_file, table_path)
    return ScanConfig()


def _find_settings(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[tuple[str, ...], object] | None:
    if not config_file.is_file():
        return None
    try:
        with open(config_file, "rb") as stream:
            document = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        *parents, name = table_path
        table = document
        for key in parents:
            table = table.get(key)
            if not isinstance(table, dict):
                break
        else:
            if name in table:
                return table_path, table[name]
    return None


def _settings_to_config(
    settings: object, config_file: Path, table_path: tuple[str, ...]
) -> ScanConfig:
    table = ".".join(table_path)
    if not isinstance(settings, dict):
        raise ConfigError(f"`[{table}]` in {config_file} must be a table")

    unknown = sorted(set(settings) - _SETTING_NAMES)
    if unknown:
        raise ConfigError(
            f"Unsupported keys in `[{table}]` of {config_file}: {', '.join(unknown)}"
        )
    return ScanConfig(**settings)


def validate_config(config: ScanConfig) -> None:
    """Validate a `ScanConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If `scopes` is negative, a flag is not a boolean, or the
            line-length limit is not a positive integer.

    Examples:
        validate_config(ScanConfig(scopes=3))
    """
    for key, minimum, requirement in (
        ("scopes", 0, "a non-negative"),
        ("max_line_length", 1, "a positive"),
    ):
        value = getattr(config, key)
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
        if value < minimum:
            raise ConfigError(f"`{key}` must be {requirement} integer")

    for key in ("only", "pretty"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")


def apply_overrides(config: ScanConfig, **overrides: object) -> ScanConfig:
    """Return `config` with the non-None `overrides` applied.

    The same object is returned when every override is None, which is what
    the command line passes for options the user did not give.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> ScanConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Command-line values keyed by `ScanConfig` field; None
            values are ignored.

    Returns:
        ScanConfig: Validated configuration ready for scanning.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), scopes=2)
    """
    config = apply_overrides(load_config(search_path), **overrides)
    validate_config(config)
    return config
