# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Schema loading utilities for validating dataset documents."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from .errors import MalformedDatasetError
from .io import load_package_document
from .types import DATASET_SCHEMA_FILENAME, JSONValue

_DATA_PACKAGE = "catbrowse.data"


@dataclass(frozen=True, slots=True)
class SchemaProblem:
    """Single structural problem reported by the dataset schema."""

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass(slots=True)
class DatasetSchema:
    """Wrap the Draft 2020-12 validator for dataset documents."""

    validator: Draft202012Validator

    @classmethod
    def load(cls) -> DatasetSchema:
        """Load the dataset schema bundled with the package.

        Returns:
            DatasetSchema: Schema ready to validate documents.
        """

        document, _ = load_package_document(_DATA_PACKAGE, DATASET_SCHEMA_FILENAME)
        if not isinstance(document, Mapping):
            raise MalformedDatasetError(f"{DATASET_SCHEMA_FILENAME}: expected a JSON object")
        return cls(validator=Draft202012Validator(document))

    def iter_problems(self, document: JSONValue) -> Iterator[SchemaProblem]:
        """Yield every schema violation in document order.

        Args:
            document: Decoded dataset document.

        Yields:
            SchemaProblem: One problem per jsonschema validation error.
        """

        for error in sorted(self.validator.iter_errors(document), key=_path_key):
            yield SchemaProblem(location=_format_path(error), message=error.message)

    def validate(self, document: JSONValue, *, source: str) -> None:
        """Raise when ``document`` violates the schema.

        Args:
            document: Decoded dataset document.
            source: Origin of the document used in the error message.

        Raises:
            MalformedDatasetError: With the first problem's location and message.
        """

        for problem in self.iter_problems(document):
            raise MalformedDatasetError(f"{source}: {problem}")


def _path_key(error: ValidationError) -> list[tuple[int, int, str]]:
    return [(0, segment, "") if isinstance(segment, int) else (1, 0, str(segment)) for segment in error.absolute_path]


def _format_path(error: ValidationError) -> str:
    parts: list[str] = []
    for segment in error.absolute_path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}" if parts else str(segment))
    return "".join(parts) or "<root>"


__all__ = ["DatasetSchema", "SchemaProblem"]
