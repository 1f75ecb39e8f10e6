# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Integrity checks over dataset snapshots used by the ``doctor`` command.

Checks accumulate every finding instead of stopping at the first problem and
never raise: callers decide the exit status from the returned report.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum

from ..severity import Severity
from .errors import MalformedDatasetError
from .models import Classifier, DatasetSnapshot
from .schema import DatasetSchema
from .types import JSONValue


class FindingKind(str, Enum):
    """Enumerate the problems the validator can report."""

    SCHEMA = "schema"
    DUPLICATE_ID = "duplicate-id"
    DUPLICATE_DECLARATION = "duplicate-declaration"
    UNKNOWN_CATEGORY = "unknown-category"
    UNKNOWN_TAG = "unknown-tag"
    ORPHAN_CATEGORY = "orphan-category"
    ORPHAN_TAG = "orphan-tag"
    EMPTY_TITLE = "empty-title"


@dataclass(frozen=True, slots=True)
class Finding:
    """Single validation problem with the ids and names it implicates."""

    kind: FindingKind
    severity: Severity
    message: str
    entry_ids: tuple[str, ...] = ()
    names: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, JSONValue]:
        """Return a JSON-friendly mapping of the finding."""

        return {
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "entry_ids": list(self.entry_ids),
            "names": list(self.names),
        }


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Ordered collection of findings; empty means the dataset is healthy."""

    findings: tuple[Finding, ...] = ()

    @property
    def errors(self) -> tuple[Finding, ...]:
        """Return findings with :attr:`Severity.ERROR`."""

        return tuple(finding for finding in self.findings if finding.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Finding, ...]:
        """Return findings with :attr:`Severity.WARNING`."""

        return tuple(finding for finding in self.findings if finding.severity is Severity.WARNING)

    @property
    def has_errors(self) -> bool:
        """Return ``True`` when any finding is an error."""

        return any(finding.severity is Severity.ERROR for finding in self.findings)

    @property
    def is_healthy(self) -> bool:
        """Return ``True`` when the report holds no findings at all."""

        return not self.findings

    @property
    def exit_code(self) -> int:
        """Return the conventional process exit status for the report."""

        return 1 if self.has_errors else 0

    def of_kind(self, kind: FindingKind) -> tuple[Finding, ...]:
        """Return findings of ``kind`` in report order."""

        return tuple(finding for finding in self.findings if finding.kind is kind)

    def merged(self, other: ValidationReport) -> ValidationReport:
        """Return a report containing this report's findings followed by ``other``'s."""

        return ValidationReport(findings=self.findings + other.findings)


def validate_snapshot(snapshot: DatasetSnapshot) -> ValidationReport:
    """Walk ``snapshot`` and report every integrity problem.

    Args:
        snapshot: Parsed dataset; no index is required, so duplicate ids are
            reported rather than raised.

    Returns:
        ValidationReport: All findings in a stable order: declarations first,
        then entries in dataset order, then orphan declarations.
    """

    findings: list[Finding] = []
    findings.extend(_duplicate_declarations(snapshot.categories, label="category"))
    findings.extend(_duplicate_declarations(snapshot.tags, label="tag"))

    declared_categories = set(snapshot.category_names)
    declared_tags = set(snapshot.tag_names)
    referenced_categories: set[str] = set()
    referenced_tags: set[str] = set()
    first_positions: dict[str, int] = {}

    for position, entry in enumerate(snapshot.entries):
        if entry.id in first_positions:
            findings.append(
                Finding(
                    kind=FindingKind.DUPLICATE_ID,
                    severity=Severity.ERROR,
                    message=(
                        f"entry id '{entry.id}' at entries[{position}] repeats entries[{first_positions[entry.id]}]"
                    ),
                    entry_ids=(entry.id,),
                ),
            )
        else:
            first_positions[entry.id] = position
        for name in entry.categories:
            referenced_categories.add(name)
            if name not in declared_categories:
                findings.append(
                    Finding(
                        kind=FindingKind.UNKNOWN_CATEGORY,
                        severity=Severity.ERROR,
                        message=f"entry '{entry.id}' references undeclared category '{name}'",
                        entry_ids=(entry.id,),
                        names=(name,),
                    ),
                )
        for name in entry.tags:
            referenced_tags.add(name)
            if name not in declared_tags:
                findings.append(
                    Finding(
                        kind=FindingKind.UNKNOWN_TAG,
                        severity=Severity.ERROR,
                        message=f"entry '{entry.id}' references undeclared tag '{name}'",
                        entry_ids=(entry.id,),
                        names=(name,),
                    ),
                )
        if not entry.title.strip():
            findings.append(
                Finding(
                    kind=FindingKind.EMPTY_TITLE,
                    severity=Severity.WARNING,
                    message=f"entry '{entry.id}' has an empty title",
                    entry_ids=(entry.id,),
                ),
            )

    findings.extend(
        _orphans(snapshot.category_names, referenced_categories, kind=FindingKind.ORPHAN_CATEGORY, label="category"),
    )
    findings.extend(_orphans(snapshot.tag_names, referenced_tags, kind=FindingKind.ORPHAN_TAG, label="tag"))
    return ValidationReport(findings=tuple(findings))


def validate_document(
    document: JSONValue,
    *,
    source: str,
    schema: DatasetSchema | None = None,
) -> tuple[ValidationReport, DatasetSnapshot | None]:
    """Validate a raw dataset document end to end.

    Schema problems are reported as findings. When the document still parses,
    the snapshot checks run as well so a single pass surfaces everything.

    Args:
        document: Decoded dataset document.
        source: Origin used in finding messages.
        schema: Optional schema; ``None`` skips structural schema checks.

    Returns:
        tuple[ValidationReport, DatasetSnapshot | None]: The report and the
        parsed snapshot, or ``None`` when parsing failed.
    """

    findings: list[Finding] = []
    if schema is not None:
        findings.extend(
            Finding(kind=FindingKind.SCHEMA, severity=Severity.ERROR, message=str(problem))
            for problem in schema.iter_problems(document)
        )
    if not isinstance(document, Mapping):
        findings.append(Finding(kind=FindingKind.SCHEMA, severity=Severity.ERROR, message=f"{source}: not an object"))
        return ValidationReport(findings=tuple(findings)), None
    try:
        snapshot = DatasetSnapshot.from_mapping(document, source=source)
    except MalformedDatasetError as exc:
        if findings:
            # The schema already described the structural break.
            return ValidationReport(findings=tuple(findings)), None
        findings.append(Finding(kind=FindingKind.SCHEMA, severity=Severity.ERROR, message=str(exc)))
        return ValidationReport(findings=tuple(findings)), None
    return ValidationReport(findings=tuple(findings)).merged(validate_snapshot(snapshot)), snapshot


def _duplicate_declarations(declarations: Iterable[Classifier], *, label: str) -> Iterator[Finding]:
    seen: set[str] = set()
    for declaration in declarations:
        if declaration.name in seen:
            yield Finding(
                kind=FindingKind.DUPLICATE_DECLARATION,
                severity=Severity.ERROR,
                message=f"{label} '{declaration.name}' is declared more than once",
                names=(declaration.name,),
            )
        seen.add(declaration.name)


def _orphans(declared: Iterable[str], referenced: set[str], *, kind: FindingKind, label: str) -> Iterator[Finding]:
    for name in dict.fromkeys(declared):
        if name not in referenced:
            yield Finding(
                kind=kind,
                severity=Severity.WARNING,
                message=f"{label} '{name}' is declared but no entry references it",
                names=(name,),
            )


__all__ = [
    "Finding",
    "FindingKind",
    "ValidationReport",
    "validate_document",
    "validate_snapshot",
]
