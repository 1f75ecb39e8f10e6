# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels attached to dataset validation findings."""

    ERROR = "error"
    WARNING = "warning"


SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
}

SEVERITY_STYLE: Final[dict[Severity, str]] = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
}


def highest_severity(levels: Iterable[Severity]) -> Severity | None:
    """Return the most severe level in ``levels`` or ``None`` when empty."""

    ranked = sorted(levels, key=SEVERITY_RANK.__getitem__)
    return ranked[0] if ranked else None


__all__ = ["SEVERITY_RANK", "SEVERITY_STYLE", "Severity", "highest_severity"]
