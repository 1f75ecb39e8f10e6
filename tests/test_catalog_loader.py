# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for reading dataset documents from disk and package data."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from catbrowse.catalog import DatasetLoader, MalformedDatasetError, load_snapshot_from_mapping
from catbrowse.catalog.schema import DatasetSchema


def test_bundled_dataset_loads_and_validates() -> None:
    loader = DatasetLoader()

    snapshot = loader.load_snapshot()

    assert loader.source == "catbrowse.data/catalog.json"
    assert snapshot.name == "prompt-catalog"
    assert snapshot.version == "2025.1"
    assert len(snapshot.entries) == 10
    assert snapshot.entries[0].id == "idea-wizard"
    assert "testing" in snapshot.category_names
    assert len(snapshot.checksum) == 64


def test_file_dataset_checksum_matches_bytes(
    scenario_payload: dict[str, Any],
    write_dataset: Callable[..., Path],
) -> None:
    path = write_dataset(scenario_payload)

    snapshot = DatasetLoader(path=path).load_snapshot()

    assert snapshot.source == str(path)
    assert snapshot.checksum == hashlib.sha256(path.read_bytes()).hexdigest()
    assert [entry.id for entry in snapshot.entries] == ["A", "B", "C"]


def test_missing_dataset_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        DatasetLoader(path=tmp_path / "absent.json").load_snapshot()


def test_invalid_json_reports_line_and_column(write_dataset: Callable[..., Path]) -> None:
    path = write_dataset('{\n  "entries": [\n')

    with pytest.raises(MalformedDatasetError) as excinfo:
        DatasetLoader(path=path).load_snapshot()

    message = str(excinfo.value)
    assert message.startswith(f"{path}: line ")
    assert "column" in message


def test_schema_violation_names_location(
    scenario_payload: dict[str, Any],
    write_dataset: Callable[..., Path],
) -> None:
    del scenario_payload["entries"][0]["title"]
    path = write_dataset(scenario_payload)

    with pytest.raises(MalformedDatasetError) as excinfo:
        DatasetLoader(path=path).load_snapshot()

    assert str(excinfo.value) == f"{path}: entries[0]: 'title' is a required property"


def test_schema_can_be_disabled(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> None:
    scenario_payload["generator"] = "hand written"
    path = write_dataset(scenario_payload)

    with pytest.raises(MalformedDatasetError, match="generator"):
        DatasetLoader(path=path).load_snapshot()

    snapshot = DatasetLoader(path=path, validate_schema=False).load_snapshot()
    assert len(snapshot.entries) == 3


def test_schema_reports_every_problem_in_document_order(scenario_payload: dict[str, Any]) -> None:
    scenario_payload["entries"][2]["tags"] = [""]
    del scenario_payload["entries"][0]["id"]

    problems = list(DatasetSchema.load().iter_problems(scenario_payload))

    assert [problem.location for problem in problems] == ["entries[0]", "entries[2].tags[0]"]
    assert str(problems[0]) == "entries[0]: 'id' is a required property"


def test_top_level_array_is_rejected(write_dataset: Callable[..., Path]) -> None:
    path = write_dataset([1, 2, 3])

    with pytest.raises(MalformedDatasetError):
        DatasetLoader(path=path, validate_schema=False).load_snapshot()


def test_mapping_checksum_ignores_key_order(scenario_payload: dict[str, Any]) -> None:
    reordered = dict(reversed(list(scenario_payload.items())))

    first = load_snapshot_from_mapping(scenario_payload)
    second = load_snapshot_from_mapping(reordered)

    assert first.checksum == second.checksum
    assert first.source == "<memory>"


def test_mapping_loader_applies_optional_schema(scenario_payload: dict[str, Any]) -> None:
    scenario_payload["entries"][1]["id"] = ""

    with pytest.raises(MalformedDatasetError, match=r"inline: entries\[1\]\.id"):
        load_snapshot_from_mapping(scenario_payload, source="inline", schema=DatasetSchema.load())
