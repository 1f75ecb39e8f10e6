# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``doctor`` command: validate the dataset and report every problem found."""

from __future__ import annotations

from dataclasses import replace

import typer
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule

from ...catalog import DatasetSnapshot, MalformedDatasetError, ValidationReport, validate_document
from ...catalog.checksum import compute_dataset_checksum
from ...severity import SEVERITY_STYLE, highest_severity
from ..options import (
    COLOR_OPTION,
    DATASET_OPTION,
    EMOJI_OPTION,
    JSON_OPTION,
    ROOT_OPTION,
    STRICT_OPTION,
    common_options,
)
from ..rendering import build_dataset_table, build_findings_table, doctor_payload
from ..session import DATASET_NOT_FOUND_CODE, FATAL_EXIT_CODE, CatalogSession, open_session
from ..shared import CLIError, register_command


def run_doctor(session: CatalogSession) -> tuple[ValidationReport, DatasetSnapshot | None]:
    """Validate the session's dataset document end to end.

    Args:
        session: Active session describing which dataset to read.

    Returns:
        tuple[ValidationReport, DatasetSnapshot | None]: Report plus the parsed
        snapshot (with checksum) when the document could be parsed.

    Raises:
        CLIError: With exit status 2 when the document is missing or not JSON.
    """

    loader = session.loader
    try:
        document, data = loader.load_document()
    except FileNotFoundError as exc:
        raise session.error(
            DATASET_NOT_FOUND_CODE,
            f"Dataset not found: {loader.source}",
            exit_code=FATAL_EXIT_CODE,
        ) from exc
    except MalformedDatasetError as exc:
        raise session.error(exc.code, str(exc), exit_code=FATAL_EXIT_CODE) from exc

    schema = loader.schema() if loader.validate_schema else None
    report, snapshot = validate_document(document, source=loader.source, schema=schema)
    if snapshot is not None:
        snapshot = replace(snapshot, checksum=compute_dataset_checksum(data))
    return report, snapshot


def render_doctor(
    console: Console,
    report: ValidationReport,
    snapshot: DatasetSnapshot | None,
    *,
    strict: bool = False,
) -> int:
    """Print the doctor report and return the exit status it implies."""

    console.print(Rule("[bold cyan]catbrowse doctor[/bold cyan]"))
    if snapshot is not None:
        console.print(build_dataset_table(snapshot))
    if report.findings:
        console.print(build_findings_table(report))

    exit_code = _exit_code(report, strict=strict)
    worst = highest_severity(finding.severity for finding in report.findings)
    if worst is None:
        message, style = "No problems found", "green"
    else:
        style = "red" if exit_code else SEVERITY_STYLE[worst]
        message = f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    console.print(Panel(f"[{style}]{message}[/]", title="Doctor", border_style=style))
    return exit_code


def doctor_command(
    strict: STRICT_OPTION = False,
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Check the dataset for schema, reference and uniqueness problems."""

    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        report, snapshot = run_doctor(session)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if session.json_output:
        session.emit(doctor_payload(report, snapshot, source=session.loader.source))
        raise typer.Exit(code=_exit_code(report, strict=strict))
    raise typer.Exit(code=render_doctor(session.console, report, snapshot, strict=strict))


def _exit_code(report: ValidationReport, *, strict: bool) -> int:
    if strict and report.warnings:
        return 1
    return report.exit_code


def register(app: typer.Typer) -> None:
    """Register the ``doctor`` command on ``app``."""

    register_command(app, doctor_command, name="doctor")


__all__ = ["doctor_command", "register", "render_doctor", "run_doctor"]
