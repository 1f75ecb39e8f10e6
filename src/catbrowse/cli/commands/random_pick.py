# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``random`` command: draw one entry from the filtered candidates."""

from __future__ import annotations

import typer

from ...catalog import EmptyCandidateSetError, FilterCriteria, random_entry
from ..options import (
    CATEGORY_OPTION,
    COLOR_OPTION,
    DATASET_OPTION,
    EMOJI_OPTION,
    JSON_OPTION,
    ROOT_OPTION,
    SEED_OPTION,
    TAG_OPTION,
    common_options,
    parse_seed,
)
from ..rendering import build_entry_panel
from ..session import open_session
from ..shared import CLIError, register_command


def random_command(
    category: CATEGORY_OPTION = None,
    tag: TAG_OPTION = None,
    seed: SEED_OPTION = None,
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Pick a random entry, optionally restricted by category and tag."""

    criteria = FilterCriteria(category=category, tag=tag)
    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        index = session.index()
        try:
            entry = random_entry(index, criteria, seed=parse_seed(seed))
        except EmptyCandidateSetError as exc:
            raise session.error(exc.code, str(exc)) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if session.json_output:
        session.emit(entry.to_dict())
        return
    session.console.print(build_entry_panel(entry))


def register(app: typer.Typer) -> None:
    """Register the ``random`` command on ``app``."""

    register_command(app, random_command, name="random")


__all__ = ["random_command", "register"]
