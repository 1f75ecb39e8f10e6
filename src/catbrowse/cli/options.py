# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer option declarations shared by catbrowse commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from ..catalog import CatalogError, ClassifierKind, SearchField, suggest_names
from ..config import ConfigError
from .session import CommonOptions, load_index_quietly

LOGGER = logging.getLogger(__name__)


def complete_category(ctx: typer.Context, incomplete: str) -> list[str]:
    """Return declared category names starting with ``incomplete``."""

    return _complete(ctx, ClassifierKind.CATEGORY, incomplete)


def complete_tag(ctx: typer.Context, incomplete: str) -> list[str]:
    """Return declared tag names starting with ``incomplete``."""

    return _complete(ctx, ClassifierKind.TAG, incomplete)


def _complete(ctx: typer.Context, kind: ClassifierKind, incomplete: str) -> list[str]:
    options = CommonOptions(dataset=ctx.params.get("dataset"), root=ctx.params.get("root"))
    try:
        index = load_index_quietly(options)
    except (CatalogError, ConfigError, OSError) as exc:
        LOGGER.debug("completion unavailable: %s", exc)
        return []
    return list(suggest_names(index, kind, incomplete))


DATASET_OPTION = Annotated[
    Path | None,
    typer.Option("--dataset", "-d", help="Dataset JSON file (defaults to the bundled catalog).", dir_okay=False),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Directory used for configuration discovery.", file_okay=False),
]
JSON_OPTION = Annotated[
    bool | None,
    typer.Option("--json/--no-json", help="Emit machine-readable JSON instead of tables."),
]
EMOJI_OPTION = Annotated[
    bool | None,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in status messages."),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Toggle ANSI colour output."),
]
CATEGORY_OPTION = Annotated[
    str | None,
    typer.Option("--category", "-c", help="Only entries in this category.", autocompletion=complete_category),
]
TAG_OPTION = Annotated[
    str | None,
    typer.Option("--tag", "-t", help="Only entries carrying this tag.", autocompletion=complete_tag),
]
QUERY_ARGUMENT = Annotated[str, typer.Argument(help="Substring to look for; blank lists every entry.")]
ENTRY_ID_ARGUMENT = Annotated[str, typer.Argument(help="Identifier of the entry to display.")]
FIELD_OPTION = Annotated[
    list[SearchField] | None,
    typer.Option("--field", "-f", help="Field to search; repeat for several (defaults from config)."),
]
CASE_SENSITIVE_OPTION = Annotated[
    bool | None,
    typer.Option("--case-sensitive/--ignore-case", help="Match letter case exactly."),
]
LIMIT_OPTION = Annotated[
    int | None,
    typer.Option("--limit", "-n", min=1, help="Return at most this many results."),
]
SEED_OPTION = Annotated[
    str | None,
    typer.Option("--seed", help="Seed for a reproducible draw."),
]
RESOURCE_OPTION = Annotated[
    bool,
    typer.Option("--resource", help="Print only the entry's resource locator."),
]
STRICT_OPTION = Annotated[
    bool,
    typer.Option("--strict", help="Treat warnings as failures."),
]


def common_options(
    dataset: Path | None,
    root: Path | None,
    json_output: bool | None,
    emoji: bool | None,
    color: bool | None,
) -> CommonOptions:
    """Bundle the shared option values into :class:`CommonOptions`."""

    return CommonOptions(dataset=dataset, root=root, json_output=json_output, emoji=emoji, color=color)


def parse_seed(raw: str | None) -> int | str | None:
    """Return ``raw`` as an integer when it is one, otherwise unchanged."""

    if raw is None:
        return None
    stripped = raw.strip()
    try:
        return int(stripped)
    except ValueError:
        return stripped


__all__ = [
    "CASE_SENSITIVE_OPTION",
    "CATEGORY_OPTION",
    "COLOR_OPTION",
    "DATASET_OPTION",
    "EMOJI_OPTION",
    "ENTRY_ID_ARGUMENT",
    "FIELD_OPTION",
    "JSON_OPTION",
    "LIMIT_OPTION",
    "QUERY_ARGUMENT",
    "RESOURCE_OPTION",
    "ROOT_OPTION",
    "SEED_OPTION",
    "STRICT_OPTION",
    "TAG_OPTION",
    "common_options",
    "complete_category",
    "complete_tag",
    "parse_seed",
]
