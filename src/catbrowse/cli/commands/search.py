# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""``search`` command: substring search over selected entry fields."""

from __future__ import annotations

from collections.abc import Sequence

import typer

from ...catalog import FilterCriteria, SearchField, SearchOptions, matched_fields, search
from ...config import SearchConfig
from ..options import (
    CASE_SENSITIVE_OPTION,
    CATEGORY_OPTION,
    COLOR_OPTION,
    DATASET_OPTION,
    EMOJI_OPTION,
    FIELD_OPTION,
    JSON_OPTION,
    LIMIT_OPTION,
    QUERY_ARGUMENT,
    ROOT_OPTION,
    TAG_OPTION,
    common_options,
)
from ..rendering import build_entries_table, search_payload
from ..session import open_session
from ..shared import CLIError, register_command


def build_search_options(
    defaults: SearchConfig,
    *,
    fields: Sequence[SearchField] | None,
    case_sensitive: bool | None,
    limit: int | None,
    criteria: FilterCriteria,
) -> SearchOptions:
    """Merge CLI overrides onto the configured search defaults.

    Args:
        defaults: ``[search]`` section of the active configuration.
        fields: Fields passed with ``--field``; empty or ``None`` keeps the default.
        case_sensitive: ``--case-sensitive`` flag value, ``None`` when unset.
        limit: ``--limit`` value, ``None`` when unset.
        criteria: Category and tag filters.

    Returns:
        SearchOptions: Options for :func:`catbrowse.catalog.search`.
    """

    return SearchOptions(
        fields=tuple(fields or defaults.fields),
        case_sensitive=defaults.case_sensitive if case_sensitive is None else case_sensitive,
        criteria=criteria,
        limit=defaults.limit if limit is None else limit,
    )


def search_command(
    query: QUERY_ARGUMENT,
    field: FIELD_OPTION = None,
    case_sensitive: CASE_SENSITIVE_OPTION = None,
    limit: LIMIT_OPTION = None,
    category: CATEGORY_OPTION = None,
    tag: TAG_OPTION = None,
    dataset: DATASET_OPTION = None,
    root: ROOT_OPTION = None,
    json_output: JSON_OPTION = None,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
) -> None:
    """Search entries whose selected fields contain QUERY."""

    try:
        session = open_session(common_options(dataset, root, json_output, emoji, color))
        index = session.index()
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    options = build_search_options(
        session.config.search,
        fields=field,
        case_sensitive=case_sensitive,
        limit=limit,
        criteria=FilterCriteria(category=category, tag=tag),
    )
    results = search(index, query, options=options)
    matches = {entry.id: matched_fields(entry, query, options) for entry in results}

    if session.json_output:
        session.emit(search_payload(query, results, matches))
        return
    if not results:
        session.logger.info(f"No entries match '{query.strip()}'.")
        return
    table = build_entries_table(results, title=f"Search results for '{query.strip()}'", matches=matches)
    session.console.print(table)


def register(app: typer.Typer) -> None:
    """Register the ``search`` command on ``app``."""

    register_command(app, search_command, name="search")


__all__ = ["build_search_options", "register", "search_command"]
