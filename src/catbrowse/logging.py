# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

from rich.markup import escape

from .console import get_console_manager

STYLES = {
    "info": "cyan",
    "warn": "yellow",
    "fail": "red",
}


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def info(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit an informational message."""

    _emit(f"{emoji('ℹ️ ', use_emoji)}{msg}", "info", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit a warning message on standard error."""

    _emit(f"{emoji('⚠️ ', use_emoji)}{msg}", "warn", use_emoji=use_emoji, use_color=use_color, stderr=True)


def fail(msg: str, *, use_emoji: bool, use_color: bool = True) -> None:
    """Emit an error message on standard error."""

    _emit(f"{emoji('❌ ', use_emoji)}{msg}", "fail", use_emoji=use_emoji, use_color=use_color, stderr=True)


def _emit(text: str, level: str, *, use_emoji: bool, use_color: bool, stderr: bool = False) -> None:
    console = get_console_manager().get(color=use_color, emoji=use_emoji, stderr=stderr)
    console.print(escape(text), style=STYLES[level] if use_color else None)
