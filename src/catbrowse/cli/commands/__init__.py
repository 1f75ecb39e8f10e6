# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command registry."""

from __future__ import annotations

import typer

from . import about, classifiers, doctor, listing, random_pick, search, show

__all__ = ["register_commands"]


def register_commands(app: typer.Typer) -> None:
    """Register the built-in catbrowse commands on ``app``.

    Args:
        app: Typer application receiving command registrations.
    """

    listing.register(app)
    search.register(app)
    show.register(app)
    random_pick.register(app)
    classifiers.register(app)
    doctor.register(app)
    about.register(app)
