# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Typer classes that list catbrowse options alphabetically in ``--help``.

Every command repeats the shared ``--dataset``/``--root``/``--json`` family
after its own filters; sorting keeps the help screens comparable between
commands.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Final, TypeVar

import typer
from click.core import Context, Parameter
from click.formatting import HelpFormatter
from typer.core import TyperCommand, TyperGroup

ARGUMENT_PARAM_TYPE: Final[str] = "argument"

CommandCallback = TypeVar("CommandCallback", bound=Callable[..., Any])


class SortedTyperCommand(TyperCommand):
    """Command whose help shows arguments first, then options by long name."""

    def format_options(self, ctx: Context, formatter: HelpFormatter) -> None:
        arguments: list[tuple[str, str]] = []
        options: list[tuple[str, int, tuple[str, str]]] = []
        for position, param in enumerate(self.get_params(ctx)):
            record = param.get_help_record(ctx)
            if record is None:
                continue
            if param.param_type_name == ARGUMENT_PARAM_TYPE:
                arguments.append(record)
            else:
                options.append((_sort_key(param), position, record))

        if arguments:
            with formatter.section("Arguments"):
                formatter.write_dl(arguments)
        if options:
            with formatter.section("Options"):
                formatter.write_dl([record for *_, record in sorted(options)])


class SortedTyperGroup(TyperGroup):
    command_class = SortedTyperCommand


class SortedTyper(typer.Typer):
    """Root catbrowse application; commands default to :class:`SortedTyperCommand`."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(cls=SortedTyperGroup, **kwargs)

    def command(
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Callable[[CommandCallback], CommandCallback]:
        return super().command(name, cls=cls or SortedTyperCommand, **kwargs)


def create_typer(**kwargs: Any) -> SortedTyper:
    """Return the application object commands register against.

    Help uses Click's plain formatter; Rich help would bypass the sorted listing.
    """

    kwargs.setdefault("rich_markup_mode", None)
    return SortedTyper(**kwargs)


def _sort_key(param: Parameter) -> str:
    # --json/--no-json sorts under "json"; short-only flags fall back to the first spelling.
    names = [*getattr(param, "opts", ()), *getattr(param, "secondary_opts", ())]
    long_names = [name for name in names if name.startswith("--")]
    candidate = long_names[0] if long_names else (names[0] if names else param.name or "")
    return candidate.lstrip("-").lower()


__all__ = [
    "SortedTyper",
    "SortedTyperCommand",
    "SortedTyperGroup",
    "create_typer",
]
