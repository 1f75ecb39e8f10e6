# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-invocation state shared by catbrowse commands."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

import typer
from rich.console import Console

from ..catalog import CatalogError, CatalogIndex, DatasetLoader, DatasetSnapshot
from ..catalog.types import JSONValue
from ..config import CatalogConfig, ConfigError, ConfigLoader
from ..console import get_console_manager
from .shared import CLIError, CLILogger, build_cli_logger

LOGGER = logging.getLogger(__name__)

FATAL_EXIT_CODE: Final[int] = 2
CONFIG_ERROR_CODE: Final[str] = "config_error"
DATASET_NOT_FOUND_CODE: Final[str] = "dataset_not_found"


@dataclass(slots=True)
class CommonOptions:
    """Options accepted by every catbrowse command before config is applied."""

    dataset: Path | None = None
    root: Path | None = None
    json_output: bool | None = None
    emoji: bool | None = None
    color: bool | None = None


@dataclass(slots=True)
class CatalogSession:
    """Resolved configuration, output settings and dataset access for a command."""

    config: CatalogConfig
    loader: DatasetLoader
    logger: CLILogger
    console: Console
    json_output: bool
    _index: CatalogIndex | None = field(default=None, init=False, repr=False)

    def error(self, code: str, message: str, *, exit_code: int = 1) -> CLIError:
        """Report a failure and return the matching :class:`CLIError`.

        JSON mode writes ``{"error": true, "code": ..., "message": ...}`` to
        standard output; otherwise the message goes through the logger.

        Args:
            code: Stable machine-readable error code.
            message: Human-readable description.
            exit_code: Process exit status carried by the returned error.

        Returns:
            CLIError: Error for the caller to raise.
        """

        if self.json_output:
            emit_json({"error": True, "code": code, "message": message})
        else:
            self.logger.fail(message)
        return CLIError(message, exit_code=exit_code)

    def emit(self, payload: JSONValue) -> None:
        """Write ``payload`` as indented JSON to standard output."""

        emit_json(payload)

    def load_snapshot(self) -> DatasetSnapshot:
        """Load the configured dataset.

        Raises:
            CLIError: With exit status 2 when the dataset is missing or invalid.
        """

        try:
            return self.loader.load_snapshot()
        except FileNotFoundError as exc:
            raise self.error(
                DATASET_NOT_FOUND_CODE,
                f"Dataset not found: {self.loader.source}",
                exit_code=FATAL_EXIT_CODE,
            ) from exc
        except CatalogError as exc:
            raise self.error(exc.code, str(exc), exit_code=FATAL_EXIT_CODE) from exc

    def index(self) -> CatalogIndex:
        """Return the catalog index, building it on first use.

        Raises:
            CLIError: With exit status 2 when loading or indexing fails.
        """

        if self._index is None:
            snapshot = self.load_snapshot()
            try:
                self._index = CatalogIndex.build(snapshot)
            except CatalogError as exc:
                raise self.error(exc.code, str(exc), exit_code=FATAL_EXIT_CODE) from exc
        return self._index


def open_session(options: CommonOptions) -> CatalogSession:
    """Resolve configuration and CLI overrides into a :class:`CatalogSession`.

    Args:
        options: Raw option values; ``None`` means "defer to configuration".

    Returns:
        CatalogSession: Session ready to load the dataset.

    Raises:
        CLIError: With exit status 2 when configuration cannot be loaded.
    """

    root = (options.root or Path.cwd()).resolve()
    config_error: ConfigError | None = None
    try:
        config = ConfigLoader.for_root(root).load()
    except ConfigError as exc:
        config_error = exc
        config = CatalogConfig()

    session = _build_session(config, options)
    if config_error is not None:
        raise session.error(CONFIG_ERROR_CODE, str(config_error), exit_code=FATAL_EXIT_CODE) from config_error
    return session


def load_index_quietly(options: CommonOptions) -> CatalogIndex:
    """Build an index for shell completion without reporting failures.

    Raises:
        CatalogError: If the dataset is malformed or holds duplicate ids.
        ConfigError: If configuration cannot be loaded.
        OSError: If the dataset cannot be read.
    """

    root = (options.root or Path.cwd()).resolve()
    config = ConfigLoader.for_root(root).load()
    loader = _build_loader(config, options)
    return CatalogIndex.build(loader.load_snapshot())


def emit_json(payload: JSONValue) -> None:
    """Write ``payload`` to standard output as indented JSON."""

    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _build_session(config: CatalogConfig, options: CommonOptions) -> CatalogSession:
    output = config.output
    emoji = output.emoji if options.emoji is None else options.emoji
    color = output.color if options.color is None else options.color
    json_output = output.json_output if options.json_output is None else options.json_output
    loader = _build_loader(config, options)
    LOGGER.debug("session dataset=%s json=%s emoji=%s color=%s", loader.source, json_output, emoji, color)
    return CatalogSession(
        config=config,
        loader=loader,
        logger=build_cli_logger(emoji=emoji, color=color),
        console=get_console_manager().get(color=color, emoji=emoji),
        json_output=json_output,
    )


def _build_loader(config: CatalogConfig, options: CommonOptions) -> DatasetLoader:
    path = options.dataset.expanduser().resolve() if options.dataset is not None else config.dataset.path
    return DatasetLoader(path=path, validate_schema=config.dataset.validate_schema)


__all__ = [
    "FATAL_EXIT_CODE",
    "CatalogSession",
    "CommonOptions",
    "emit_json",
    "load_index_quietly",
    "open_session",
]
