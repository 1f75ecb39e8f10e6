# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typed records describing catalog entries, classifiers, and snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final, TypeVar

from .errors import MalformedDatasetError
from .types import EntryId, JSONValue
from .utils import (
    expect_array,
    expect_identifier,
    expect_mapping,
    expect_string,
    optional_string,
    string_array,
)

_ENTRIES_KEY: Final[str] = "entries"
_CATEGORIES_KEY: Final[str] = "categories"
_TAGS_KEY: Final[str] = "tags"


@dataclass(frozen=True, slots=True)
class Classifier:
    """Named classifier shared by categories and tags."""

    name: str
    description: str | None = None

    @classmethod
    def from_json(cls, value: JSONValue, *, context: str) -> Classifier:
        """Return a classifier from a bare name or a ``{"name": ...}`` object.

        Args:
            value: Raw declaration extracted from the dataset payload.
            context: Human-friendly prefix describing the validation context.

        Returns:
            Classifier: Parsed declaration of the calling subclass.

        Raises:
            MalformedDatasetError: If the declaration is neither form.
        """

        if isinstance(value, str):
            name = value
            description = None
        elif isinstance(value, Mapping):
            name = expect_string(value.get("name"), key="name", context=context)
            description = optional_string(value.get("description"), key="description", context=context)
        else:
            raise MalformedDatasetError(f"{context}: expected a name or an object with 'name'")
        if not name.strip():
            raise MalformedDatasetError(f"{context}: expected 'name' to be non-empty")
        return cls(name=name, description=description)


@dataclass(frozen=True, slots=True)
class Category(Classifier):
    """Declared category; its entry back-set lives in the catalog index."""


@dataclass(frozen=True, slots=True)
class Tag(Classifier):
    """Declared tag; its entry back-set lives in the catalog index."""


@dataclass(frozen=True, slots=True)
class Entry:
    """Single catalog item."""

    id: EntryId
    title: str
    summary: str = ""
    categories: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    resource: str | None = None
    author: str | None = None
    content: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, JSONValue], *, context: str) -> Entry:
        """Parse an entry record.

        ``category`` is accepted as a single-valued alias of ``categories`` and
        ``description`` as an alias of ``summary``.

        Args:
            data: Raw entry mapping.
            context: Location prefix used in error messages.

        Returns:
            Entry: Parsed entry; category and tag references are not resolved.

        Raises:
            MalformedDatasetError: If required fields are missing or mistyped.
        """

        entry_id = expect_identifier(data.get("id"), key="id", context=context)
        title = expect_string(data.get("title"), key="title", context=context)
        summary_key = "summary" if "summary" in data else "description"
        summary = optional_string(data.get(summary_key), key=summary_key, context=context) or ""
        categories = string_array(data.get(_CATEGORIES_KEY), key=_CATEGORIES_KEY, context=context)
        single = optional_string(data.get("category"), key="category", context=context)
        if single is not None:
            categories = tuple(dict.fromkeys((single, *categories)))
        return cls(
            id=entry_id,
            title=title,
            summary=summary,
            categories=categories,
            tags=string_array(data.get(_TAGS_KEY), key=_TAGS_KEY, context=context),
            resource=optional_string(data.get("resource"), key="resource", context=context),
            author=optional_string(data.get("author"), key="author", context=context),
            content=optional_string(data.get("content"), key="content", context=context),
        )

    def to_dict(self) -> dict[str, JSONValue]:
        """Return a JSON-friendly mapping of the entry."""

        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "categories": list(self.categories),
            "tags": list(self.tags),
            "resource": self.resource,
            "author": self.author,
            "content": self.content,
        }


ClassifierT = TypeVar("ClassifierT", bound=Classifier)


@dataclass(frozen=True, slots=True)
class DatasetSnapshot:
    """Immutable collection of entries and declared classifiers for one run."""

    entries: tuple[Entry, ...]
    categories: tuple[Category, ...]
    tags: tuple[Tag, ...]
    name: str = "catalog"
    version: str | None = None
    source: str = "<memory>"
    checksum: str = ""

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, JSONValue],
        *,
        source: str,
        checksum: str = "",
    ) -> DatasetSnapshot:
        """Parse a dataset document into typed records.

        Referential integrity and id uniqueness are deliberately left to the
        validator and the index. When ``categories`` or ``tags`` is absent the
        declarations are implied from entry references in first-seen order.

        Args:
            payload: Decoded dataset document.
            source: Human-readable origin used in error messages.
            checksum: Optional digest of the source document.

        Returns:
            DatasetSnapshot: Parsed snapshot.

        Raises:
            MalformedDatasetError: If required fields are missing or mistyped.
        """

        root = expect_mapping(payload, key="<root>", context=source)
        raw_entries = expect_array(root.get(_ENTRIES_KEY), key=_ENTRIES_KEY, context=source)
        entries: list[Entry] = []
        for index, raw in enumerate(raw_entries):
            context = f"{source}: {_ENTRIES_KEY}[{index}]"
            entries.append(Entry.from_mapping(expect_mapping(raw, key="<entry>", context=context), context=context))

        name = optional_string(root.get("name"), key="name", context=source) or "catalog"
        version = optional_string(root.get("version"), key="version", context=source)
        return cls(
            entries=tuple(entries),
            categories=_declarations(
                Category,
                root.get(_CATEGORIES_KEY),
                implied=(ref for entry in entries for ref in entry.categories),
                key=_CATEGORIES_KEY,
                source=source,
            ),
            tags=_declarations(
                Tag,
                root.get(_TAGS_KEY),
                implied=(ref for entry in entries for ref in entry.tags),
                key=_TAGS_KEY,
                source=source,
            ),
            name=name,
            version=version,
            source=source,
            checksum=checksum,
        )

    @property
    def category_names(self) -> tuple[str, ...]:
        """Return declared category names in declaration order."""

        return tuple(category.name for category in self.categories)

    @property
    def tag_names(self) -> tuple[str, ...]:
        """Return declared tag names in declaration order."""

        return tuple(tag.name for tag in self.tags)


def _declarations(
    kind: type[ClassifierT],
    raw: JSONValue | None,
    *,
    implied: Iterable[str],
    key: str,
    source: str,
) -> tuple[ClassifierT, ...]:
    if raw is None:
        return tuple(kind(name=name) for name in dict.fromkeys(implied))
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes, bytearray)):
        raise MalformedDatasetError(f"{source}: expected '{key}' to be an array")
    return tuple(kind.from_json(item, context=f"{source}: {key}[{index}]") for index, item in enumerate(raw))


__all__ = [
    "Category",
    "Classifier",
    "DatasetSnapshot",
    "Entry",
    "Tag",
]
