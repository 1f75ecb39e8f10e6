# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for tables (stdout) and status messages (stderr)."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console

ConsoleKey = tuple[bool, bool, bool, bool]


def detect_tty() -> bool:
    """Return whether stdout is a terminal; closed or replaced streams count as not."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Hand out one console per ``(color, emoji, tty, stderr)`` combination.

    Colour is only emitted when requested *and* stdout is a terminal, so
    piping ``catbrowse list`` into a file yields plain text even with
    ``[output] color = true``.
    """

    def __init__(self) -> None:
        self._consoles: dict[ConsoleKey, Console] = {}

    def get(self, *, color: bool, emoji: bool, stderr: bool = False) -> Console:
        tty = detect_tty()
        key: ConsoleKey = (color, emoji, tty, stderr)
        console = self._consoles.get(key)
        if console is None:
            colored = color and tty
            console = Console(
                color_system="auto" if colored else None,
                force_terminal=tty,
                no_color=not colored,
                emoji=emoji,
                soft_wrap=True,
                stderr=stderr,
                highlight=False,
            )
            self._consoles[key] = console
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    return RichConsoleManager()


__all__ = [
    "RichConsoleManager",
    "detect_tty",
    "get_console_manager",
]
