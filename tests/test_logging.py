# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for user-facing logging helpers and the CLI logger adapter."""

from __future__ import annotations

import pytest

from catbrowse.cli.shared import CLIError, build_cli_logger
from catbrowse.console import get_console_manager
from catbrowse.logging import emoji, fail, info, warn


def test_emoji_toggle() -> None:
    assert emoji("✅", True) == "✅"
    assert emoji("✅", False) == ""


def test_info_goes_to_stdout_and_fail_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    info("all good", use_emoji=False, use_color=False)
    fail("broken", use_emoji=False, use_color=False)
    warn("careful [x]", use_emoji=True, use_color=False)

    captured = capsys.readouterr()
    assert captured.out.strip() == "all good"
    assert "broken" in captured.err
    assert "⚠️ careful [x]" in captured.err


def test_console_manager_caches_by_preferences() -> None:
    manager = get_console_manager()

    first = manager.get(color=False, emoji=False)
    assert manager.get(color=False, emoji=False) is first
    assert manager.get(color=False, emoji=False, stderr=True) is not first


def test_cli_logger_honours_emoji_setting(capsys: pytest.CaptureFixture[str]) -> None:
    plain = build_cli_logger(emoji=False, color=False)
    decorated = build_cli_logger(emoji=True, color=False)

    plain.warn("no resource")
    decorated.warn("no resource")

    lines = capsys.readouterr().err.splitlines()
    assert lines[0].strip() == "no resource"
    assert lines[1].startswith("⚠️")


def test_cli_error_carries_exit_code() -> None:
    error = CLIError("boom", exit_code=2)

    assert str(error) == "boom"
    assert error.exit_code == 2
