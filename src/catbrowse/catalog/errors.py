# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised by catalog loading, indexing, and queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .query import FilterCriteria


class CatalogError(RuntimeError):
    """Base class for every failure surfaced by the catalog engine."""

    code = "catalog_error"


class MalformedDatasetError(CatalogError):
    """Raised when a dataset document is structurally invalid."""

    code = "malformed_dataset"


class DuplicateIdError(CatalogError):
    """Raised when index construction encounters a repeated entry id."""

    code = "duplicate_id"

    def __init__(self, entry_id: str, *, first: int, second: int) -> None:
        """Create the error for ``entry_id`` seen at two dataset positions.

        Args:
            entry_id: Identifier shared by more than one entry.
            first: Dataset position of the first occurrence.
            second: Dataset position of the repeated occurrence.
        """

        super().__init__(f"Duplicate entry id '{entry_id}' at entries[{first}] and entries[{second}]")
        self.entry_id = entry_id
        self.positions = (first, second)


class NotFoundError(CatalogError):
    """Raised when no entry carries the requested id."""

    code = "not_found"

    def __init__(self, entry_id: str) -> None:
        super().__init__(f"No entry with id '{entry_id}'")
        self.entry_id = entry_id


class EmptyCandidateSetError(CatalogError):
    """Raised when a random draw has no candidates to choose from."""

    code = "no_entries"

    def __init__(self, criteria: FilterCriteria) -> None:
        super().__init__(f"No matching entries ({criteria.describe()})")
        self.criteria = criteria


__all__ = (
    "CatalogError",
    "DuplicateIdError",
    "EmptyCandidateSetError",
    "MalformedDatasetError",
    "NotFoundError",
)
