# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the catbrowse command-line interface."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from ..catalog.query import DEFAULT_SEARCH_FIELDS, SearchField


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


_SECTION_CONFIG: Final = ConfigDict(extra="forbid", validate_assignment=True, populate_by_name=True)


class DatasetConfig(BaseModel):
    """Where the dataset lives and how strictly it is checked on load."""

    model_config = _SECTION_CONFIG

    path: Path | None = None
    validate_schema: bool = True


class SearchConfig(BaseModel):
    """Default search contract applied when the CLI does not override it."""

    model_config = _SECTION_CONFIG

    fields: list[SearchField] = Field(default_factory=lambda: list(DEFAULT_SEARCH_FIELDS), min_length=1)
    case_sensitive: bool = False
    limit: PositiveInt | None = None


class OutputConfig(BaseModel):
    """Presentation preferences for rendered output."""

    model_config = _SECTION_CONFIG

    emoji: bool = True
    color: bool = True
    json_output: bool = Field(default=False, alias="json")


class CatalogConfig(BaseModel):
    """Root configuration object assembled from layered TOML sources."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-compatible mapping using configuration file keys."""

        return self.model_dump(mode="json", by_alias=True)


SECTION_NAMES: Final[tuple[str, ...]] = tuple(CatalogConfig.model_fields)


__all__ = [
    "SECTION_NAMES",
    "CatalogConfig",
    "ConfigError",
    "DatasetConfig",
    "OutputConfig",
    "SearchConfig",
]
