# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich renderables and JSON payloads for catbrowse commands."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..catalog import DatasetSnapshot, Entry, NameCount, SearchField, ValidationReport
from ..catalog.models import Classifier
from ..catalog.types import JSONValue
from ..severity import SEVERITY_STYLE


def build_entries_table(
    entries: Sequence[Entry],
    *,
    title: str,
    matches: Mapping[str, Sequence[SearchField]] | None = None,
) -> Table:
    """Return a table listing ``entries`` in the order given.

    Args:
        entries: Entries to render.
        title: Table caption.
        matches: Optional mapping of entry id to the fields that matched a
            search; adds a "Matched" column when provided.

    Returns:
        Table: Rich table ready for printing.
    """

    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Title", overflow="fold")
    table.add_column("Categories", overflow="fold")
    table.add_column("Tags", overflow="fold")
    if matches is not None:
        table.add_column("Matched", overflow="fold")
    for entry in entries:
        row = [
            escape(entry.id),
            escape(entry.title),
            escape(", ".join(entry.categories)) or "-",
            escape(", ".join(entry.tags)) or "-",
        ]
        if matches is not None:
            row.append(", ".join(item.value for item in matches.get(entry.id, ())) or "-")
        table.add_row(*row)
    return table


def build_entry_panel(entry: Entry, *, title: str | None = None) -> Panel:
    """Return a detail panel for a single entry."""

    details = Table(box=None, show_header=False, expand=True, pad_edge=False)
    details.add_column("Field", style="bold", no_wrap=True)
    details.add_column("Value", overflow="fold")
    details.add_row("ID", escape(entry.id))
    details.add_row("Summary", escape(entry.summary) or "-")
    details.add_row("Categories", escape(", ".join(entry.categories)) or "-")
    details.add_row("Tags", escape(", ".join(entry.tags)) or "-")
    details.add_row("Author", escape(entry.author or "-"))
    details.add_row("Resource", escape(entry.resource or "-"))

    body: Table | Group = details
    if entry.content:
        body = Group(details, Text(""), Text(entry.content))
    return Panel(body, title=title or escape(entry.title), title_align="left", border_style="cyan")


def build_name_count_table(
    rows: Sequence[NameCount],
    *,
    title: str,
    declarations: Sequence[Classifier] = (),
) -> Table:
    """Return a name/count table, including descriptions when declared."""

    descriptions = {item.name: item.description for item in declarations}
    table = Table(title=title, box=box.SIMPLE, expand=True)
    table.add_column("Name", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Description", overflow="fold")
    for row in rows:
        table.add_row(escape(row.name), str(row.count), escape(descriptions.get(row.name) or "-"))
    return table


def build_dataset_table(snapshot: DatasetSnapshot) -> Table:
    """Return a summary table describing the loaded dataset."""

    table = Table(title="Dataset", box=box.SIMPLE, expand=True)
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")
    table.add_row("Name", escape(snapshot.name))
    table.add_row("Version", escape(snapshot.version or "-"))
    table.add_row("Source", escape(snapshot.source))
    table.add_row("Checksum", snapshot.checksum or "-")
    table.add_row("Entries", str(len(snapshot.entries)))
    table.add_row("Categories", str(len(snapshot.categories)))
    table.add_row("Tags", str(len(snapshot.tags)))
    return table


def build_findings_table(report: ValidationReport) -> Table:
    """Return a table of validation findings in report order."""

    table = Table(title="Findings", box=box.SIMPLE, expand=True)
    table.add_column("Severity", style="bold", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Message", overflow="fold")
    for finding in report.findings:
        style = SEVERITY_STYLE[finding.severity]
        table.add_row(f"[{style}]{finding.severity.value}[/]", finding.kind.value, escape(finding.message))
    return table


def entries_payload(entries: Sequence[Entry]) -> dict[str, JSONValue]:
    """Return the JSON payload for a list of entries."""

    return {"count": len(entries), "entries": [entry.to_dict() for entry in entries]}


def search_payload(
    query: str,
    entries: Sequence[Entry],
    matches: Mapping[str, Sequence[SearchField]],
) -> dict[str, JSONValue]:
    """Return the JSON payload for search results including matched fields."""

    results: list[JSONValue] = []
    for entry in entries:
        record = entry.to_dict()
        record["matched_fields"] = [item.value for item in matches.get(entry.id, ())]
        results.append(record)
    return {"query": query, "count": len(entries), "results": results}


def name_counts_payload(
    key: str,
    rows: Sequence[NameCount],
    declarations: Sequence[Classifier] = (),
) -> dict[str, JSONValue]:
    """Return the JSON payload for category or tag counts."""

    descriptions = {item.name: item.description for item in declarations}
    return {
        key: [
            {"name": row.name, "count": row.count, "description": descriptions.get(row.name)}
            for row in rows
        ],
    }


def dataset_payload(snapshot: DatasetSnapshot | None, *, source: str) -> dict[str, JSONValue]:
    """Return dataset identity and counts; only ``source`` when unparsed."""

    dataset: dict[str, JSONValue] = {"source": source}
    if snapshot is not None:
        dataset.update(
            {
                "name": snapshot.name,
                "version": snapshot.version,
                "checksum": snapshot.checksum,
                "entries": len(snapshot.entries),
                "categories": len(snapshot.categories),
                "tags": len(snapshot.tags),
            },
        )
    return dataset


def doctor_payload(report: ValidationReport, snapshot: DatasetSnapshot | None, *, source: str) -> dict[str, JSONValue]:
    """Return the JSON payload for a doctor run."""

    return {
        "dataset": dataset_payload(snapshot, source=source),
        "healthy": report.is_healthy,
        "errors": len(report.errors),
        "warnings": len(report.warnings),
        "findings": [finding.to_dict() for finding in report.findings],
    }


__all__ = [
    "build_dataset_table",
    "build_entries_table",
    "build_entry_panel",
    "build_findings_table",
    "build_name_count_table",
    "dataset_payload",
    "doctor_payload",
    "entries_payload",
    "name_counts_payload",
    "search_payload",
]
