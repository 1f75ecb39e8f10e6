# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Search, filter, and random-selection operations over a catalog index.

Every operation is a pure function of an immutable :class:`CatalogIndex` and
explicit parameters. Results always follow dataset-declaration order; there is
no relevance ranking.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from .errors import EmptyCandidateSetError, NotFoundError
from .index import CatalogIndex
from .models import Entry
from .types import EntryId

LOGGER = logging.getLogger(__name__)

Seed = int | str | None


class SearchField(str, Enum):
    """Entry text fields that search can match against."""

    TITLE = "title"
    SUMMARY = "summary"
    TAGS = "tags"
    CATEGORIES = "categories"
    CONTENT = "content"
    ID = "id"


class ClassifierKind(str, Enum):
    """Enumerate the classifier families exposed for enumeration."""

    CATEGORY = "category"
    TAG = "tag"


DEFAULT_SEARCH_FIELDS: Final[tuple[SearchField, ...]] = (SearchField.TITLE, SearchField.SUMMARY)


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """Optional category and tag filters combined with AND semantics."""

    category: str | None = None
    tag: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when no filter is set."""

        return self.category is None and self.tag is None

    def describe(self) -> str:
        """Return a short human-readable summary of the active filters."""

        parts: list[str] = []
        if self.category is not None:
            parts.append(f"category={self.category}")
        if self.tag is not None:
            parts.append(f"tag={self.tag}")
        return ", ".join(parts) if parts else "no filters"


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Search contract: which fields to scan and how to compare text.

    Case-insensitive comparison casefolds both sides; accents are compared as
    written.
    """

    fields: tuple[SearchField, ...] = DEFAULT_SEARCH_FIELDS
    case_sensitive: bool = False
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    limit: int | None = None

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError("search requires at least one field")
        if self.limit is not None and self.limit <= 0:
            raise ValueError("search limit must be a positive integer")
        object.__setattr__(self, "fields", tuple(dict.fromkeys(SearchField(item) for item in self.fields)))


@dataclass(frozen=True, slots=True)
class NameCount:
    """Classifier name paired with the size of its entry back-set."""

    name: str
    count: int


def list_entries(index: CatalogIndex, criteria: FilterCriteria | None = None) -> tuple[Entry, ...]:
    """Return entries matching every supplied filter in dataset order.

    Args:
        index: Catalog index to query.
        criteria: Optional filters; ``None`` or empty returns the whole dataset.

    Returns:
        tuple[Entry, ...]: Matching entries, possibly empty.
    """

    criteria = criteria or FilterCriteria()
    if criteria.is_empty:
        return index.entries
    candidate_ids: tuple[EntryId, ...] | None = None
    if criteria.category is not None:
        candidate_ids = index.by_category.get(criteria.category, ())
    if criteria.tag is not None:
        tagged = index.by_tag.get(criteria.tag, ())
        if candidate_ids is None:
            candidate_ids = tagged
        else:
            allowed = set(tagged)
            candidate_ids = tuple(entry_id for entry_id in candidate_ids if entry_id in allowed)
    return index.entries_for(candidate_ids or ())


def search(index: CatalogIndex, query: str, *, options: SearchOptions | None = None) -> tuple[Entry, ...]:
    """Return entries whose selected fields contain ``query``.

    An empty or whitespace-only ``query`` returns the filtered dataset
    unchanged.

    Args:
        index: Catalog index to query.
        query: Substring to look for.
        options: Field selection, case policy, filters, and result limit.

    Returns:
        tuple[Entry, ...]: Matching entries in dataset order.
    """

    options = options or SearchOptions()
    candidates = list_entries(index, options.criteria)
    needle = query.strip()
    if needle:
        matcher = _matcher(needle, case_sensitive=options.case_sensitive)
        candidates = tuple(entry for entry in candidates if _matches_any(entry, options.fields, matcher))
    if options.limit is not None:
        candidates = candidates[: options.limit]
    LOGGER.debug("search query=%r fields=%s results=%d", needle, ",".join(options.fields), len(candidates))
    return candidates


def matched_fields(entry: Entry, query: str, options: SearchOptions | None = None) -> tuple[SearchField, ...]:
    """Return the selected fields of ``entry`` that contain ``query``.

    Args:
        entry: Entry to inspect.
        query: Substring used for the search.
        options: Search options describing fields and case policy.

    Returns:
        tuple[SearchField, ...]: Matching fields in option order; empty for a blank query.
    """

    options = options or SearchOptions()
    needle = query.strip()
    if not needle:
        return ()
    matcher = _matcher(needle, case_sensitive=options.case_sensitive)
    return tuple(item for item in options.fields if any(matcher(text) for text in _field_texts(entry, item)))


def show(index: CatalogIndex, entry_id: EntryId) -> Entry:
    """Return the entry registered under ``entry_id``.

    Args:
        index: Catalog index to query.
        entry_id: Identifier to resolve.

    Returns:
        Entry: The matching entry.

    Raises:
        NotFoundError: If no entry carries ``entry_id``.
    """

    try:
        return index.by_id[entry_id]
    except KeyError as exc:
        raise NotFoundError(entry_id) from exc


def random_entry(
    index: CatalogIndex,
    criteria: FilterCriteria | None = None,
    *,
    seed: Seed = None,
) -> Entry:
    """Return one entry drawn uniformly from the filtered candidates.

    Candidates follow the exact ordering of :func:`list_entries`, so a given
    seed and candidate set always yield the same entry.

    Args:
        index: Catalog index to query.
        criteria: Optional filters restricting the candidate set.
        seed: Optional seed for a reproducible draw.

    Returns:
        Entry: The selected entry.

    Raises:
        EmptyCandidateSetError: If the filters match no entries.
    """

    criteria = criteria or FilterCriteria()
    candidates = list_entries(index, criteria)
    if not candidates:
        raise EmptyCandidateSetError(criteria)
    rng = random.Random(seed)
    choice = candidates[rng.randrange(len(candidates))]
    LOGGER.debug("random draw candidates=%d seed=%r id=%s", len(candidates), seed, choice.id)
    return choice


def categories(index: CatalogIndex) -> tuple[NameCount, ...]:
    """Return declared categories with entry counts in declaration order."""

    return _name_counts(index.snapshot.category_names, index.by_category)


def tags(index: CatalogIndex) -> tuple[NameCount, ...]:
    """Return declared tags with entry counts in declaration order."""

    return _name_counts(index.snapshot.tag_names, index.by_tag)


def suggest_names(index: CatalogIndex, kind: ClassifierKind, prefix: str = "") -> tuple[str, ...]:
    """Return declared names of ``kind`` starting with ``prefix``.

    Args:
        index: Catalog index to query.
        kind: Classifier family to enumerate.
        prefix: Case-insensitive prefix typed so far.

    Returns:
        tuple[str, ...]: Matching names in declaration order.
    """

    counts = categories(index) if kind is ClassifierKind.CATEGORY else tags(index)
    folded = prefix.casefold()
    return tuple(item.name for item in counts if item.name.casefold().startswith(folded))


def _name_counts(names: Iterable[str], table: Mapping[str, tuple[EntryId, ...]]) -> tuple[NameCount, ...]:
    return tuple(NameCount(name=name, count=len(table.get(name, ()))) for name in dict.fromkeys(names))


def _matcher(needle: str, *, case_sensitive: bool) -> Callable[[str], bool]:
    if case_sensitive:
        return lambda text: needle in text
    folded = needle.casefold()
    return lambda text: folded in text.casefold()


def _matches_any(entry: Entry, fields: tuple[SearchField, ...], matcher: Callable[[str], bool]) -> bool:
    return any(matcher(text) for item in fields for text in _field_texts(entry, item))


def _field_texts(entry: Entry, item: SearchField) -> tuple[str, ...]:
    if item is SearchField.TITLE:
        return (entry.title,)
    if item is SearchField.SUMMARY:
        return (entry.summary,)
    if item is SearchField.TAGS:
        return entry.tags
    if item is SearchField.CATEGORIES:
        return entry.categories
    if item is SearchField.CONTENT:
        return (entry.content,) if entry.content else ()
    return (entry.id,)


__all__ = [
    "DEFAULT_SEARCH_FIELDS",
    "ClassifierKind",
    "FilterCriteria",
    "NameCount",
    "SearchField",
    "SearchOptions",
    "categories",
    "list_entries",
    "matched_fields",
    "random_entry",
    "search",
    "show",
    "suggest_names",
    "tags",
]
