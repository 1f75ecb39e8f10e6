# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, registration)."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

import typer

from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import warn as core_warn


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    use_emoji: bool
    use_color: bool = True

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji, use_color=self.use_color)


def build_cli_logger(*, emoji: bool, color: bool = True) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided presentation flags.

    Args:
        emoji: Whether log output may include emoji glyphs.
        color: Whether terminal colour output is allowed.

    Returns:
        CLILogger: Logger writing through the shared Rich consoles.
    """

    return CLILogger(use_emoji=emoji, use_color=color)


CommandResult = int | None
CommandCallable = Callable[..., CommandResult]


def register_command(
    app: typer.Typer,
    callback: CommandCallable,
    *,
    name: str | None = None,
    help_text: str | None = None,
) -> CommandCallable:
    """Register ``callback`` as a command on ``app`` with consistent metadata handling.

    Args:
        app: Typer application receiving the command registration.
        callback: Command callable registered immediately.
        name: Optional explicit command name.
        help_text: Help text shown in CLI usage output; defaults to the
            callback docstring.

    Returns:
        CommandCallable: Registered command callable returned by Typer.
    """

    return app.command(name=name, help=help_text)(callback)


__all__: Final = [
    "CLIError",
    "CLILogger",
    "build_cli_logger",
    "register_command",
]
