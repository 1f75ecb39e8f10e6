# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring commands and shared services."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from .. import __version__
from ..console import get_console_manager
from .commands import register_commands
from .typer_ext import create_typer

app = create_typer(
    name="catbrowse",
    help="Browse, search and validate a curated catalog of entries.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"catbrowse {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show the version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Enable diagnostic logging on stderr.")] = False,
) -> None:
    """Browse, search and validate a curated catalog of entries."""

    if debug:
        configure_debug_logging()


def configure_debug_logging() -> None:
    """Route ``catbrowse`` diagnostic records to stderr through Rich."""

    console = get_console_manager().get(color=True, emoji=False, stderr=True)
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger = logging.getLogger("catbrowse")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False


register_commands(app)


def run() -> None:
    """Console-script entry point."""

    app()


__all__ = ["app", "configure_debug_logging", "run"]
