# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the catbrowse command-line interface."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

from catbrowse import __version__
from catbrowse.catalog import load_snapshot_from_mapping, validate_snapshot
from catbrowse.cli.app import app
from catbrowse.cli.commands.doctor import render_doctor
from catbrowse.cli.options import parse_seed

runner = CliRunner()


@pytest.fixture
def scenario_file(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> Path:
    return write_dataset(scenario_payload)


def _json(args: list[str]) -> Any:
    result = runner.invoke(app, args)
    return result, json.loads(result.stdout)


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == f"catbrowse {__version__}"


def test_command_help_lists_options_alphabetically() -> None:
    result = runner.invoke(app, ["list", "--help"])

    assert result.exit_code == 0
    flags = ("--category", "--color", "--dataset", "--json", "--root", "--tag")
    positions = [result.stdout.index(flag) for flag in flags]
    assert positions == sorted(positions)


def test_list_uses_bundled_dataset_by_default() -> None:
    result = runner.invoke(app, ["list", "--no-color", "--no-emoji"])

    assert result.exit_code == 0
    assert "idea-wizard" in result.stdout
    assert "ultrathink-review" in result.stdout


def test_list_json_applies_and_filters(scenario_file: Path) -> None:
    result, payload = _json(["list", "--dataset", str(scenario_file), "--category", "sci", "--tag", "dark", "--json"])

    assert result.exit_code == 0
    assert payload["count"] == 1
    assert [entry["id"] for entry in payload["entries"]] == ["C"]


def test_list_with_no_matches_is_not_an_error(scenario_file: Path) -> None:
    result = runner.invoke(app, ["list", "--dataset", str(scenario_file), "--tag", "missing", "--no-emoji"])

    assert result.exit_code == 0
    assert "No entries match tag=missing" in result.output


def test_search_reports_matched_fields(scenario_file: Path) -> None:
    result, payload = _json(
        ["search", "dark", "--dataset", str(scenario_file), "--field", "summary", "--field", "tags", "--json"],
    )

    assert result.exit_code == 0
    assert payload["query"] == "dark"
    assert [(item["id"], item["matched_fields"]) for item in payload["results"]] == [("C", ["summary", "tags"])]


def test_search_limit_and_case_flags(scenario_file: Path) -> None:
    _, limited = _json(["search", "o", "--dataset", str(scenario_file), "--limit", "2", "--json"])
    _, strict = _json(["search", "cosmic", "--dataset", str(scenario_file), "--case-sensitive", "--json"])

    assert [item["id"] for item in limited["results"]] == ["A", "B"]
    assert strict["count"] == 0


def test_search_rejects_non_positive_limit(scenario_file: Path) -> None:
    result = runner.invoke(app, ["search", "x", "--dataset", str(scenario_file), "--limit", "0"])

    assert result.exit_code == 2


def test_search_table_output(scenario_file: Path) -> None:
    result = runner.invoke(app, ["search", "hastings", "--dataset", str(scenario_file), "--no-color"])

    assert result.exit_code == 0
    assert "Battle of Hastings" in result.stdout
    assert "title" in result.stdout


def test_show_renders_entry(scenario_file: Path) -> None:
    result = runner.invoke(app, ["show", "C", "--dataset", str(scenario_file), "--no-color"])

    assert result.exit_code == 0
    assert "Cosmic horror" in result.stdout
    assert "H. P." in result.stdout


def test_show_resource_prints_bare_locator(scenario_file: Path) -> None:
    result = runner.invoke(app, ["show", "B", "--resource", "--dataset", str(scenario_file)])

    assert result.exit_code == 0
    assert result.stdout.strip() == "https://example.org/hastings"


def test_show_missing_entry_exits_one(scenario_file: Path) -> None:
    result = runner.invoke(app, ["show", "Z", "--dataset", str(scenario_file), "--no-emoji"])

    assert result.exit_code == 1
    assert "No entry with id 'Z'" in result.output


def test_show_missing_entry_json_payload(scenario_file: Path) -> None:
    result, payload = _json(["show", "Z", "--dataset", str(scenario_file), "--json"])

    assert result.exit_code == 1
    assert payload == {"error": True, "code": "not_found", "message": "No entry with id 'Z'"}


def test_random_is_reproducible_with_seed(scenario_file: Path) -> None:
    args = ["random", "--dataset", str(scenario_file), "--category", "sci", "--seed", "7", "--json"]
    _, first = _json(args)
    _, second = _json(args)

    assert first == second
    assert first["id"] in {"A", "C"}


def test_random_without_candidates_exits_one(scenario_file: Path) -> None:
    result, payload = _json(["random", "--dataset", str(scenario_file), "--category", "hist", "--tag", "fun", "--json"])

    assert result.exit_code == 1
    assert payload["code"] == "no_entries"


def test_categories_and_tags_json(scenario_file: Path) -> None:
    _, category_payload = _json(["categories", "--dataset", str(scenario_file), "--json"])
    _, tag_payload = _json(["tags", "--dataset", str(scenario_file), "--json"])

    assert [(row["name"], row["count"]) for row in category_payload["categories"]] == [("sci", 2), ("hist", 1)]
    assert [(row["name"], row["count"]) for row in tag_payload["tags"]] == [("fun", 2), ("dark", 1)]


def test_categories_table_includes_descriptions() -> None:
    result = runner.invoke(app, ["categories", "--no-color"])

    assert result.exit_code == 0
    assert "debugging" in result.stdout
    assert "Track down and fix defects." in result.stdout


def test_malformed_dataset_exits_two(write_dataset: Callable[..., Path]) -> None:
    path = write_dataset({"entries": [{"id": "x"}]})

    result, payload = _json(["list", "--dataset", str(path), "--json"])

    assert result.exit_code == 2
    assert payload["code"] == "malformed_dataset"
    assert "entries[0]" in payload["message"]


def test_duplicate_ids_exit_two(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> None:
    scenario_payload["entries"][2]["id"] = "A"
    path = write_dataset(scenario_payload)

    result = runner.invoke(app, ["list", "--dataset", str(path), "--no-emoji"])

    assert result.exit_code == 2
    assert "Duplicate entry id 'A'" in result.output


def test_missing_dataset_exits_two(tmp_path: Path) -> None:
    result = runner.invoke(app, ["tags", "--dataset", str(tmp_path / "absent.json")])

    assert result.exit_code == 2


def test_invalid_config_exits_two(isolated_environment: Path) -> None:
    (isolated_environment / ".catbrowse.toml").write_text("[search]\nfuzzy = true\n", encoding="utf-8")

    result, payload = _json(["list", "--json"])

    assert result.exit_code == 2
    assert payload["code"] == "config_error"


def test_config_supplies_dataset_and_json_output(
    isolated_environment: Path,
    scenario_payload: dict[str, Any],
) -> None:
    (isolated_environment / "catalog.json").write_text(json.dumps(scenario_payload), encoding="utf-8")
    (isolated_environment / ".catbrowse.toml").write_text(
        '[dataset]\npath = "catalog.json"\n\n[output]\njson = true\n',
        encoding="utf-8",
    )

    result, payload = _json(["list"])

    assert result.exit_code == 0
    assert [entry["id"] for entry in payload["entries"]] == ["A", "B", "C"]

    table = runner.invoke(app, ["list", "--no-json", "--no-color"])
    assert table.exit_code == 0
    assert "Battle of Hastings" in table.stdout


def test_doctor_healthy_dataset() -> None:
    result = runner.invoke(app, ["doctor", "--no-color"])

    assert result.exit_code == 0
    assert "No problems found" in result.stdout
    assert "prompt-catalog" in result.stdout


def test_doctor_reports_every_problem(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> None:
    scenario_payload["categories"] = ["sci", "geo"]
    scenario_payload["entries"][2]["id"] = "A"
    path = write_dataset(scenario_payload)

    result, payload = _json(["doctor", "--dataset", str(path), "--json"])

    assert result.exit_code == 1
    kinds = [finding["kind"] for finding in payload["findings"]]
    assert kinds == ["unknown-category", "duplicate-id", "orphan-category"]
    assert payload["errors"] == 2
    assert payload["warnings"] == 1
    assert payload["dataset"]["entries"] == 3


def test_doctor_strict_fails_on_warnings(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> None:
    scenario_payload["tags"] = ["fun", "dark", "spare"]
    path = write_dataset(scenario_payload)

    relaxed = runner.invoke(app, ["doctor", "--dataset", str(path), "--json"])
    strict = runner.invoke(app, ["doctor", "--dataset", str(path), "--json", "--strict"])

    assert relaxed.exit_code == 0
    assert strict.exit_code == 1


def test_doctor_reports_schema_problems(scenario_payload: dict[str, Any], write_dataset: Callable[..., Path]) -> None:
    scenario_payload["entries"][0]["title"] = 5
    path = write_dataset(scenario_payload)

    result, payload = _json(["doctor", "--dataset", str(path), "--json"])

    assert result.exit_code == 1
    assert payload["findings"][0]["kind"] == "schema"
    assert payload["findings"][0]["message"].startswith("entries[0].title")


def test_render_doctor_writes_findings_table(scenario_payload: dict[str, Any]) -> None:
    scenario_payload["tags"] = ["fun"]
    snapshot = load_snapshot_from_mapping(scenario_payload, source="scenario.json")
    buffer = StringIO()
    console = Console(file=buffer, force_terminal=False, color_system=None, emoji=False, width=120)

    exit_code = render_doctor(console, validate_snapshot(snapshot), snapshot)

    output = buffer.getvalue()
    assert exit_code == 1
    assert "unknown-tag" in output
    assert "1 error(s), 0 warning(s)" in output


def test_about_reports_version_and_dataset_identity(scenario_file: Path) -> None:
    result, payload = _json(["about", "--dataset", str(scenario_file), "--json"])

    assert result.exit_code == 0
    assert payload["version"] == __version__
    assert payload["dataset"]["name"] == "scenario"
    assert payload["dataset"]["version"] == "1"
    assert payload["dataset"]["entries"] == 3
    assert payload["dataset"]["checksum"] == hashlib.sha256(scenario_file.read_bytes()).hexdigest()


def test_about_table_names_the_bundled_dataset() -> None:
    result = runner.invoke(app, ["about", "--no-color"])

    assert result.exit_code == 0
    assert f"catbrowse {__version__}" in result.stdout
    assert "catbrowse.data/catalog.json" in result.stdout


@pytest.mark.parametrize(("raw", "expected"), [(None, None), ("42", 42), (" 7 ", 7), ("abc", "abc")])
def test_parse_seed(raw: str | None, expected: int | str | None) -> None:
    assert parse_seed(raw) == expected
