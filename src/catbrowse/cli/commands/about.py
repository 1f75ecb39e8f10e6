# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``about`` command: identify catbrowse and the dataset it is reading."""

from __future__ import annotations

import typer

from ... import __version__
from ..options import COLOR_OPTION, DATASET_OPTION, EMOJI_OPTION, JSON_OPTION, ROOT_OPTION, common_options
from ..rendering import build_dataset_table, dataset_payload
from ..session import open_session
from ..shared import CLIError, register_command


def about_command(
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Show the catbrowse version and the active dataset's name, version and checksum."""

    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        snapshot = session.load_snapshot()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if session.json_output:
        session.emit(
            {
                "name": "catbrowse",
                "version": __version__,
                "dataset": dataset_payload(snapshot, source=session.loader.source),
            },
        )
        return
    session.console.print(f"[bold]catbrowse[/bold] {__version__}")
    session.console.print(build_dataset_table(snapshot))


def register(app: typer.Typer) -> None:
    """Register the ``about`` command on ``app``."""

    register_command(app, about_command, name="about")


__all__ = ["about_command", "register"]
