# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Layered configuration loading with provenance tracking."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, ValidationError

from .models import SECTION_NAMES, CatalogConfig, ConfigError
from .sources import ConfigSource, PyProjectConfigSource, TomlConfigSource, deep_merge

LOGGER = logging.getLogger(__name__)

USER_CONFIG_FILENAME: Final[str] = ".catbrowse.toml"
PROJECT_CONFIG_FILENAME: Final[str] = ".catbrowse.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"


class FieldUpdate(BaseModel):
    """Describe a configuration field update originating from a source."""

    model_config = ConfigDict(frozen=True)

    section: str
    field: str
    source: str
    value: Any


class ConfigLoadResult(BaseModel):
    """Return value for configuration loading including provenance details."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: CatalogConfig
    updates: list[FieldUpdate]
    warnings: list[str]

    def source_of(self, section: str, field: str) -> str | None:
        """Return the name of the last source that set ``section.field``."""

        for update in reversed(self.updates):
            if update.section == section and update.field == field:
                return update.source
        return None


class ConfigLoader:
    """Load configuration from defaults, user files, and project files."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        root: Path,
        *,
        user_config: Path | None = None,
        project_config: Path | None = None,
    ) -> ConfigLoader:
        """Return a loader reading the standard sources for ``root``.

        Later sources override earlier ones: ``~/.catbrowse.toml``, then
        ``[tool.catbrowse]`` in ``pyproject.toml``, then
        ``<root>/.catbrowse.toml``.

        Args:
            root: Project directory that anchors project-level sources.
            user_config: Override for the per-user configuration path.
            project_config: Override for the project configuration path.

        Returns:
            ConfigLoader: Loader configured with the standard sources.
        """

        root = root.resolve()
        home_config = user_config or (Path.home() / USER_CONFIG_FILENAME)
        sources: list[ConfigSource] = [
            TomlConfigSource(home_config, name="home"),
            PyProjectConfigSource(root / PYPROJECT_FILENAME),
            TomlConfigSource(project_config or (root / PROJECT_CONFIG_FILENAME), name="project"),
        ]
        return cls(sources=sources)

    def load(self, *, strict: bool = False) -> CatalogConfig:
        """Return the merged configuration, discarding provenance."""

        return self.load_with_trace(strict=strict).config

    def load_with_trace(self, *, strict: bool = False) -> ConfigLoadResult:
        """Return the merged configuration along with the updates that built it.

        Args:
            strict: Promote warnings to :class:`ConfigError`.

        Returns:
            ConfigLoadResult: Validated configuration, update trail, and warnings.

        Raises:
            ConfigError: If a source holds unknown keys or invalid values.
        """

        merged: dict[str, Any] = {}
        updates: list[FieldUpdate] = []
        for source in self._sources:
            fragment = source.load()
            if not fragment:
                continue
            LOGGER.debug("Applying configuration from %s", source.describe())
            updates.extend(_collect_updates(fragment, source.name))
            merged = deep_merge(merged, fragment)

        try:
            config = CatalogConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(_format_validation_error(exc)) from exc

        warnings = _collect_warnings(config)
        if strict and warnings:
            raise ConfigError("; ".join(warnings))
        for message in warnings:
            LOGGER.warning(message)
        return ConfigLoadResult(config=config, updates=updates, warnings=warnings)


def _collect_updates(fragment: Mapping[str, Any], source: str) -> list[FieldUpdate]:
    updates: list[FieldUpdate] = []
    for section, values in fragment.items():
        if section not in SECTION_NAMES:
            raise ConfigError(f"{source}: unknown configuration section '{section}'")
        if not isinstance(values, Mapping):
            raise ConfigError(f"{source}: section '{section}' must be a table")
        updates.extend(
            FieldUpdate(section=section, field=field, source=source, value=value) for field, value in values.items()
        )
    return updates


def _collect_warnings(config: CatalogConfig) -> list[str]:
    warnings: list[str] = []
    path = config.dataset.path
    if path is not None and not path.exists():
        warnings.append(f"dataset.path does not exist: {path}")
    return warnings


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "Invalid configuration: " + "; ".join(parts)


__all__ = [
    "ConfigLoadResult",
    "ConfigLoader",
    "FieldUpdate",
]
