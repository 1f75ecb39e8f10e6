# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from catbrowse.catalog import SearchField
from catbrowse.config import CatalogConfig, ConfigError, ConfigLoader, TomlConfigSource


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults_without_any_files(tmp_path: Path) -> None:
    result = ConfigLoader.for_root(tmp_path).load_with_trace()

    assert result.config == CatalogConfig()
    assert result.config.search.fields == [SearchField.TITLE, SearchField.SUMMARY]
    assert result.config.output.json_output is False
    assert result.updates == []
    assert result.warnings == []


def test_sources_apply_in_precedence_order(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    user_config = _write(
        tmp_path / "user.toml",
        """
[search]
case_sensitive = true
limit = 5

[output]
emoji = false
""",
    )
    _write(
        project_root / "pyproject.toml",
        """
[project]
name = "demo"

[tool.catbrowse.search]
limit = 7
fields = ["title", "content"]
""",
    )
    _write(
        project_root / ".catbrowse.toml",
        """
[search]
limit = 9
""",
    )

    result = ConfigLoader.for_root(project_root, user_config=user_config).load_with_trace()
    config = result.config

    assert config.search.limit == 9
    assert config.search.case_sensitive is True
    assert config.search.fields == [SearchField.TITLE, SearchField.CONTENT]
    assert config.output.emoji is False
    assert result.source_of("search", "limit") == "project"
    assert result.source_of("search", "case_sensitive") == "home"
    assert result.source_of("search", "fields") == str((project_root / "pyproject.toml").resolve())
    assert result.source_of("output", "color") is None
    assert [update.value for update in result.updates if update.field == "limit"] == [5, 7, 9]


def test_relative_dataset_path_resolves_against_declaring_file(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    dataset = _write(project_root / "data" / "catalog.json", '{"entries": []}')
    _write(
        project_root / ".catbrowse.toml",
        """
[dataset]
path = "data/catalog.json"
validate_schema = false
""",
    )

    config = ConfigLoader.for_root(project_root).load()

    assert config.dataset.path == dataset.resolve()
    assert config.dataset.validate_schema is False


def test_json_key_maps_to_output_flag(tmp_path: Path) -> None:
    _write(tmp_path / ".catbrowse.toml", "[output]\njson = true\n")

    config = ConfigLoader.for_root(tmp_path).load()

    assert config.output.json_output is True
    assert config.to_dict()["output"]["json"] is True


def test_unknown_section_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path / ".catbrowse.toml", "[display]\nwidth = 3\n")

    with pytest.raises(ConfigError, match="unknown configuration section 'display'"):
        ConfigLoader.for_root(tmp_path).load()


def test_unknown_field_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path / ".catbrowse.toml", "[search]\nfuzzy = true\n")

    with pytest.raises(ConfigError, match=r"search\.fuzzy"):
        ConfigLoader.for_root(tmp_path).load()


@pytest.mark.parametrize(
    "body",
    ["[search]\nlimit = 0\n", "[search]\nfields = []\n", '[search]\nfields = ["body"]\n'],
)
def test_invalid_values_are_rejected(tmp_path: Path, body: str) -> None:
    _write(tmp_path / ".catbrowse.toml", body)

    with pytest.raises(ConfigError, match="Invalid configuration"):
        ConfigLoader.for_root(tmp_path).load()


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    _write(tmp_path / ".catbrowse.toml", "[search\n")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        ConfigLoader.for_root(tmp_path).load()


def test_missing_dataset_path_is_a_warning_or_strict_error(tmp_path: Path) -> None:
    _write(tmp_path / ".catbrowse.toml", '[dataset]\npath = "missing.json"\n')

    result = ConfigLoader.for_root(tmp_path).load_with_trace()
    assert result.warnings == [f"dataset.path does not exist: {(tmp_path / 'missing.json').resolve()}"]

    with pytest.raises(ConfigError, match="dataset.path does not exist"):
        ConfigLoader.for_root(tmp_path).load(strict=True)


def test_includes_and_environment_expansion(tmp_path: Path) -> None:
    _write(tmp_path / "shared" / "base.toml", '[dataset]\npath = "catalog.json"\n')
    main = _write(
        tmp_path / "main.toml",
        """
include = ["shared/base.toml"]

[output]
color = false
""",
    )
    env_file = _write(tmp_path / "env.toml", '[dataset]\npath = "${CATALOG_HOME}/c.json"\n')

    included = TomlConfigSource(main).load()
    expanded = TomlConfigSource(env_file, env={"CATALOG_HOME": "/srv/catalogs"}).load()

    assert included["dataset"]["path"] == str(tmp_path / "shared" / "catalog.json")
    assert included["output"] == {"color": False}
    assert expanded["dataset"]["path"] == "/srv/catalogs/c.json"


def test_circular_include_is_rejected(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.toml", 'include = "b.toml"\n')
    _write(tmp_path / "b.toml", 'include = "a.toml"\n')

    with pytest.raises(ConfigError, match="Circular include"):
        TomlConfigSource(first).load()


def test_pyproject_includes_are_read_as_plain_toml(tmp_path: Path) -> None:
    _write(tmp_path / "shared.toml", '[search]\ncase_sensitive = true\n\n[dataset]\npath = "data/c.json"\n')
    _write(tmp_path / "pyproject.toml", '[tool.catbrowse]\ninclude = ["shared.toml"]\n\n[tool.catbrowse.search]\nlimit = 3\n')

    config = ConfigLoader.for_root(tmp_path).load()

    assert config.search.case_sensitive is True
    assert config.search.limit == 3
    assert config.dataset.path == (tmp_path / "data" / "c.json").resolve()
