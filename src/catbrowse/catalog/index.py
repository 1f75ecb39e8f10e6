# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Read-only lookup structures derived from a dataset snapshot."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import DuplicateIdError
from .models import DatasetSnapshot, Entry
from .types import EntryId

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogIndex:
    """Lookup tables built once over a :class:`DatasetSnapshot`.

    ``by_category`` and ``by_tag`` map a classifier name to the ids of the
    entries referencing it, in dataset order. Every declared name has a
    (possibly empty) back-set; undeclared names referenced by entries are
    indexed too so filters on them keep working. The index holds references
    into the snapshot and never copies entries.
    """

    snapshot: DatasetSnapshot
    by_id: Mapping[EntryId, Entry]
    by_category: Mapping[str, tuple[EntryId, ...]]
    by_tag: Mapping[str, tuple[EntryId, ...]]
    positions: Mapping[EntryId, int]

    @classmethod
    def build(cls, snapshot: DatasetSnapshot) -> CatalogIndex:
        """Build every lookup table in one pass over the entries.

        Args:
            snapshot: Dataset snapshot to index.

        Returns:
            CatalogIndex: Immutable index over ``snapshot``.

        Raises:
            DuplicateIdError: If two entries share an id.
        """

        by_id: dict[EntryId, Entry] = {}
        positions: dict[EntryId, int] = {}
        by_category: dict[str, list[EntryId]] = {name: [] for name in snapshot.category_names}
        by_tag: dict[str, list[EntryId]] = {name: [] for name in snapshot.tag_names}
        for position, entry in enumerate(snapshot.entries):
            if entry.id in by_id:
                raise DuplicateIdError(entry.id, first=positions[entry.id], second=position)
            by_id[entry.id] = entry
            positions[entry.id] = position
            for name in entry.categories:
                by_category.setdefault(name, []).append(entry.id)
            for name in entry.tags:
                by_tag.setdefault(name, []).append(entry.id)

        LOGGER.debug(
            "built catalog index entries=%d categories=%d tags=%d",
            len(by_id),
            len(by_category),
            len(by_tag),
        )
        return cls(
            snapshot=snapshot,
            by_id=MappingProxyType(by_id),
            by_category=_freeze(by_category),
            by_tag=_freeze(by_tag),
            positions=MappingProxyType(positions),
        )

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Return all entries in dataset order."""

        return self.snapshot.entries

    def __len__(self) -> int:
        return len(self.by_id)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self.by_id

    def entries_for(self, entry_ids: tuple[EntryId, ...]) -> tuple[Entry, ...]:
        """Return the entries for ``entry_ids`` preserving their order."""

        return tuple(self.by_id[entry_id] for entry_id in entry_ids)


def _freeze(table: dict[str, list[EntryId]]) -> Mapping[str, tuple[EntryId, ...]]:
    return MappingProxyType({name: tuple(ids) for name, ids in table.items()})


__all__ = ["CatalogIndex"]
