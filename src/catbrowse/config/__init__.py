# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration models and layered loaders for catbrowse."""

from __future__ import annotations

from .loader import ConfigLoader, ConfigLoadResult, FieldUpdate
from .models import CatalogConfig, ConfigError, DatasetConfig, OutputConfig, SearchConfig
from .sources import PyProjectConfigSource, TomlConfigSource

__all__ = [
    "CatalogConfig",
    "ConfigError",
    "ConfigLoadResult",
    "ConfigLoader",
    "DatasetConfig",
    "FieldUpdate",
    "OutputConfig",
    "PyProjectConfigSource",
    "SearchConfig",
    "TomlConfigSource",
]
