from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from scope_grep.config import (
    ConfigError,
    ScanConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".scope-grep.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        scopes = 3
        only = true
        pretty = true
        max_line_length = 128
        """,
    )

    config = load_config(tmp_path)

    assert config == ScanConfig(scopes=3, only=True, pretty=True, max_line_length=128)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [scope-grep]
        scopes = 2
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.scopes == 2
    assert config.pretty is False


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.scope-grep]
        pretty = true
        """,
    )

    assert load_config(tmp_path).pretty is True


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        scopes = 4
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [scope-grep]
        scopes = 5
        """,
    )

    assert load_config(tmp_path).scopes == 4


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        scopes = 7
        """,
    )
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert load_config(nested).scopes == 7


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        scopes = 9
        """,
    )
    nested = tmp_path / "pkg"
    nested.mkdir()
    _write_dotfile(
        nested,
        """
        [scope-grep]
        scopes = 2
        """,
    )

    assert load_config(nested).scopes == 2


def test_empty_table_yields_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        """,
    )

    assert load_config(tmp_path) == ScanConfig()


def test_invalid_toml_is_ignored(tmp_path: Path):
    (tmp_path / ".scope-grep.toml").write_text("[scope-grep\n", encoding="utf-8")

    assert load_config(tmp_path) == ScanConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        colour = "always"
        """,
    )

    with pytest.raises(ConfigError, match=r"Unsupported keys in `\[tool.scope-grep\]`.*: colour$"):
        load_config(tmp_path)


def test_non_table_value_raises(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        scope-grep = 3
        """,
    )

    with pytest.raises(ConfigError, match=r"`\[scope-grep\]` in .* must be a table"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("config", "message"),
    [
        (ScanConfig(scopes=-1), "`scopes` must be a non-negative integer"),
        (ScanConfig(scopes=True), "`scopes` must be an integer"),
        (ScanConfig(scopes="2"), "`scopes` must be an integer"),
        (ScanConfig(max_line_length=0), "`max_line_length` must be a positive integer"),
        (ScanConfig(pretty="yes"), "`pretty` must be a boolean"),
        (ScanConfig(only=1), "`only` must be a boolean"),
    ],
)
def test_validate_config_rejects_invalid_values(config: ScanConfig, message: str):
    with pytest.raises(ConfigError, match=message):
        validate_config(config)


def test_validate_config_accepts_zero_scopes():
    validate_config(ScanConfig(scopes=0))


def test_apply_overrides_ignores_none():
    config = ScanConfig(scopes=2)

    assert apply_overrides(config, scopes=None, pretty=None) is config
    assert apply_overrides(config, pretty=True) == ScanConfig(scopes=2, pretty=True)


def test_build_config_applies_overrides_after_loading(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        scopes = 3
        pretty = true
        """,
    )

    config = build_config(tmp_path, scopes=1, only=None)

    assert config == ScanConfig(scopes=1, pretty=True)


def test_build_config_validates_loaded_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.scope-grep]
        scopes = -2
        """,
    )

    with pytest.raises(ConfigError):
        build_config(tmp_path)
