# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``show`` command: display one entry by id."""

from __future__ import annotations

import typer

from ...catalog import NotFoundError, show
from ..options import (
    COLOR_OPTION,
    DATASET_OPTION,
    EMOJI_OPTION,
    ENTRY_ID_ARGUMENT,
    JSON_OPTION,
    RESOURCE_OPTION,
    ROOT_OPTION,
    common_options,
)
from ..rendering import build_entry_panel
from ..session import open_session
from ..shared import CLIError, register_command


def show_command(
    entry_id: ENTRY_ID_ARGUMENT,
    resource: RESOURCE_OPTION = False,
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Show the entry registered under ENTRY_ID."""

    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        index = session.index()
        try:
            entry = show(index, entry_id)
        except NotFoundError as exc:
            raise session.error(exc.code, str(exc)) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if resource:
        if session.json_output:
            session.emit({"id": entry.id, "resource": entry.resource})
        elif entry.resource:
            typer.echo(entry.resource)
        else:
            session.logger.warn(f"Entry '{entry.id}' has no resource.")
        return
    if session.json_output:
        session.emit(entry.to_dict())
        return
    session.console.print(build_entry_panel(entry))


def register(app: typer.Typer) -> None:
    """Register the ``show`` command on ``app``."""

    register_command(app, show_command, name="show")


__all__ = ["register", "show_command"]
