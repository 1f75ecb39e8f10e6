# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``list`` command: show entries matching optional category and tag filters."""

from __future__ import annotations

import typer

from ...catalog import FilterCriteria, list_entries
from ..options import (
    CATEGORY_OPTION,
    COLOR_OPTION,
    DATASET_OPTION,
    EMOJI_OPTION,
    JSON_OPTION,
    ROOT_OPTION,
    TAG_OPTION,
    common_options,
)
from ..rendering import build_entries_table, entries_payload
from ..session import open_session
from ..shared import CLIError, register_command


def list_command(
    category: CATEGORY_OPTION = None,
    tag: TAG_OPTION = None,
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """List catalog entries, optionally filtered by category and tag."""

    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        index = session.index()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    criteria = FilterCriteria(category=category, tag=tag)
    entries = list_entries(index, criteria)
    if session.json_output:
        session.emit(entries_payload(entries))
        return
    if not entries:
        session.logger.info(f"No entries match {criteria.describe()}.")
        return
    title = "Entries" if criteria.is_empty else f"Entries ({criteria.describe()})"
    session.console.print(build_entries_table(entries, title=title))


def register(app: typer.Typer) -> None:
    """Register the ``list`` command on ``app``."""

    register_command(app, list_command, name="list")


__all__ = ["list_command", "register"]
