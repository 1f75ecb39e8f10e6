# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the catalog index and query engine."""

from __future__ import annotations

from typing import Final

from .errors import (
    CatalogError,
    DuplicateIdError,
    EmptyCandidateSetError,
    MalformedDatasetError,
    NotFoundError,
)
from .index import CatalogIndex
from .loader import DatasetLoader, load_snapshot_from_mapping
from .models import Category, DatasetSnapshot, Entry, Tag
from .query import (
    ClassifierKind,
    FilterCriteria,
    NameCount,
    SearchField,
    SearchOptions,
    categories,
    list_entries,
    matched_fields,
    random_entry,
    search,
    show,
    suggest_names,
    tags,
)
from .validator import Finding, FindingKind, ValidationReport, validate_document, validate_snapshot

__all__: Final[tuple[str, ...]] = (
    "CatalogError",
    "CatalogIndex",
    "Category",
    "ClassifierKind",
    "DatasetLoader",
    "DatasetSnapshot",
    "DuplicateIdError",
    "EmptyCandidateSetError",
    "Entry",
    "FilterCriteria",
    "Finding",
    "FindingKind",
    "MalformedDatasetError",
    "NameCount",
    "NotFoundError",
    "SearchField",
    "SearchOptions",
    "Tag",
    "ValidationReport",
    "categories",
    "list_entries",
    "load_snapshot_from_mapping",
    "matched_fields",
    "random_entry",
    "search",
    "show",
    "suggest_names",
    "tags",
    "validate_document",
    "validate_snapshot",
)
