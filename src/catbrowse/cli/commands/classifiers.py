# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``categories`` and ``tags`` commands: declared names with entry counts."""

from __future__ import annotations

import typer

from ...catalog import ClassifierKind, categories, tags
from ..options import COLOR_OPTION, DATASET_OPTION, EMOJI_OPTION, JSON_OPTION, ROOT_OPTION, common_options
from ..rendering import build_name_count_table, name_counts_payload
from ..session import CommonOptions, open_session
from ..shared import CLIError, register_command


def categories_command(
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """List declared categories with the number of entries in each."""

    _render_counts(ClassifierKind.CATEGORY, common_options(dataset, root, json_output, emoji, color))


def tags_command(
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """List declared tags with the number of entries carrying each."""

    _render_counts(ClassifierKind.TAG, common_options(dataset, root, json_output, emoji, color))


def _render_counts(kind: ClassifierKind, options: CommonOptions) -> None:
    try:
        session = open_session(options)
        index = session.index()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    if kind is ClassifierKind.CATEGORY:
        rows, declarations, key = categories(index), index.snapshot.categories, "categories"
    else:
        rows, declarations, key = tags(index), index.snapshot.tags, "tags"

    if session.json_output:
        session.emit(name_counts_payload(key, rows, declarations))
        return
    if not rows:
        session.logger.info(f"No {key} declared.")
        return
    session.console.print(build_name_count_table(rows, title=key.capitalize(), declarations=declarations))


def register(app: typer.Typer) -> None:
    """Register the ``categories`` and ``tags`` commands on ``app``."""

    register_command(app, categories_command, name="categories")
    register_command(app, tags_command, name="tags")


__all__ = ["categories_command", "register", "tags_command"]
