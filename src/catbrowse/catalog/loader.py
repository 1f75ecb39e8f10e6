# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""High-level loader that materialises dataset snapshots."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .checksum import compute_dataset_checksum, compute_payload_checksum
from .errors import MalformedDatasetError
from .io import load_document, load_package_document
from .models import DatasetSnapshot
from .schema import DatasetSchema
from .types import BUNDLED_DATASET_FILENAME, JSONValue
from .utils import expect_mapping

LOGGER = logging.getLogger(__name__)

_DATA_PACKAGE = "catbrowse.data"


@dataclass(slots=True)
class DatasetLoader:
    """Loader that reads, validates, and parses a dataset document.

    When ``path`` is ``None`` the dataset bundled with the package is used.
    """

    path: Path | None = None
    validate_schema: bool = True
    _schema: DatasetSchema | None = field(default=None, init=False, repr=False)

    @property
    def source(self) -> str:
        """Return a human-readable description of the dataset origin."""

        if self.path is None:
            return f"{_DATA_PACKAGE}/{BUNDLED_DATASET_FILENAME}"
        return str(self.path)

    def schema(self) -> DatasetSchema:
        """Return the dataset schema, loading it on first use."""

        if self._schema is None:
            self._schema = DatasetSchema.load()
        return self._schema

    def load_document(self) -> tuple[JSONValue, bytes]:
        """Read the raw dataset document.

        Returns:
            tuple[JSONValue, bytes]: Decoded document and its raw bytes.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            MalformedDatasetError: If the document is not valid JSON.
        """

        if self.path is None:
            return load_package_document(_DATA_PACKAGE, BUNDLED_DATASET_FILENAME)
        return load_document(self.path)

    def load_snapshot(self) -> DatasetSnapshot:
        """Produce an immutable dataset snapshot.

        Returns:
            DatasetSnapshot: Parsed snapshot with its checksum populated.

        Raises:
            MalformedDatasetError: If the document is structurally invalid.
        """

        document, data = self.load_document()
        if self.validate_schema:
            self.schema().validate(document, source=self.source)
        mapping = expect_mapping(document, key="<root>", context=self.source)
        snapshot = DatasetSnapshot.from_mapping(
            mapping,
            source=self.source,
            checksum=compute_dataset_checksum(data),
        )
        LOGGER.debug(
            "loaded dataset source=%s entries=%d categories=%d tags=%d",
            self.source,
            len(snapshot.entries),
            len(snapshot.categories),
            len(snapshot.tags),
        )
        return snapshot


def load_snapshot_from_mapping(
    payload: Mapping[str, JSONValue],
    *,
    source: str = "<memory>",
    schema: DatasetSchema | None = None,
) -> DatasetSnapshot:
    """Parse an in-memory dataset document.

    Args:
        payload: Decoded dataset document.
        source: Origin used in error messages.
        schema: Optional schema applied before parsing.

    Returns:
        DatasetSnapshot: Parsed snapshot.

    Raises:
        MalformedDatasetError: If the payload is structurally invalid.
    """

    if not isinstance(payload, Mapping):
        raise MalformedDatasetError(f"{source}: expected a JSON object")
    if schema is not None:
        schema.validate(payload, source=source)
    return DatasetSnapshot.from_mapping(payload, source=source, checksum=compute_payload_checksum(payload))


__all__ = ["DatasetLoader", "load_snapshot_from_mapping"]
