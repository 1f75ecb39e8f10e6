# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from catbrowse.catalog import CatalogIndex, DatasetSnapshot, load_snapshot_from_mapping

SCENARIO: dict[str, Any] = {
    "name": "scenario",
    "version": "1",
    "entries": [
        {
            "id": "A",
            "title": "Atoms for beginners",
            "summary": "A gentle tour of particle physics.",
            "category": "sci",
            "tags": ["fun"],
            "content": "Quarks and leptons.",
        },
        {
            "id": "B",
            "title": "Battle of Hastings",
            "summary": "Medieval history in one afternoon.",
            "category": "hist",
            "tags": [],
            "resource": "https://example.org/hastings",
        },
        {
            "id": "C",
            "title": "Cosmic horror",
            "summary": "Dark matter and the things it hides.",
            "category": "sci",
            "tags": ["fun", "dark"],
            "author": "H. P.",
        },
    ],
}


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the real home directory and working tree."""

    home_dir = tmp_path / "home"
    home_dir.mkdir()
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home_dir)
    monkeypatch.chdir(work_dir)
    return work_dir


@pytest.fixture
def scenario_payload() -> dict[str, Any]:
    """Return a fresh copy of the three-entry scenario dataset."""

    return copy.deepcopy(SCENARIO)


@pytest.fixture
def scenario_snapshot(scenario_payload: dict[str, Any]) -> DatasetSnapshot:
    return load_snapshot_from_mapping(scenario_payload, source="scenario.json")


@pytest.fixture
def scenario_index(scenario_snapshot: DatasetSnapshot) -> CatalogIndex:
    return CatalogIndex.build(scenario_snapshot)


@pytest.fixture
def write_dataset(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing a dataset document under ``tmp_path``."""

    def _write(payload: Any, name: str = "dataset.json") -> Path:
        path = tmp_path / name
        text = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
