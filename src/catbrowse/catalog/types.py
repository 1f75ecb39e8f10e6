# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for the catalog engine."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

EntryId: TypeAlias = str

DATASET_SCHEMA_FILENAME: Final[str] = "dataset.schema.json"
BUNDLED_DATASET_FILENAME: Final[str] = "catalog.json"

__all__ = [
    "BUNDLED_DATASET_FILENAME",
    "DATASET_SCHEMA_FILENAME",
    "EntryId",
    "JSONPrimitive",
    "JSONValue",
]
