# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete configuration sources (TOML files and ``pyproject.toml``)."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterable, Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final, Protocol

from .models import ConfigError

DEFAULT_INCLUDE_KEY: Final[str] = "include"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "catbrowse"

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


class ConfigSource(Protocol):
    """Provide configuration data loaded from disk or other mediums."""

    name: str

    def load(self) -> Mapping[str, Any]:
        """Return configuration values as a mapping."""

    def describe(self) -> str:
        """Return a human-readable description of the source."""


class TomlConfigSource:
    """Load configuration data from a TOML document with include support.

    Relative ``dataset.path`` values resolve against the directory of the file
    that declares them, and ``$VAR``/``${VAR}`` references expand from the
    environment.
    """

    def __init__(
        self,
        path: Path,
        *,
        name: str | None = None,
        include_key: str = DEFAULT_INCLUDE_KEY,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root_path = path
        self.name = name or str(path)
        self._include_key = include_key
        self._env = env if env is not None else os.environ

    def load(self) -> Mapping[str, Any]:
        return self._load(self._root_path, ())

    def _read(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
        return data

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        return self._load_table(path, stack)

    def _load_table(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        # Included files are plain TOML tables whatever the root source is.
        if not path.exists():
            return {}
        if path in stack:
            include_chain = " -> ".join(str(entry) for entry in (*stack, path))
            raise ConfigError(f"Circular include detected: {include_chain}")
        data = self._read(path)
        if not isinstance(data, MutableMapping):
            raise ConfigError(f"Configuration at {path} must be a table")
        return self._compose(data, path, stack)

    def _compose(self, data: Mapping[str, Any], path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        document: dict[str, Any] = dict(data)
        includes = document.pop(self._include_key, None)
        merged: dict[str, Any] = {}
        for include_path in self._coerce_includes(includes, path.parent):
            fragment = self._load_table(include_path, stack + (path,))
            merged = deep_merge(merged, fragment)
        document = expand_env(document, self._env)
        merged = deep_merge(merged, _resolve_dataset_path(document, path.parent))
        return merged

    def _coerce_includes(self, raw: Any, base_dir: Path) -> Iterable[Path]:
        if raw is None:
            return []
        if isinstance(raw, (str, Path)):
            return [self._resolve_path(Path(raw), base_dir)]
        if isinstance(raw, Iterable):
            return [self._resolve_path(Path(item), base_dir) for item in raw]
        raise ConfigError(f"Unsupported include declaration: {raw!r}")

    @staticmethod
    def _resolve_path(path: Path, base_dir: Path) -> Path:
        return path if path.is_absolute() else (base_dir / path)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class PyProjectConfigSource(TomlConfigSource):
    """Read configuration from ``[tool.catbrowse]`` within ``pyproject.toml``."""

    def __init__(self, path: Path, *, env: Mapping[str, str] | None = None) -> None:
        super().__init__(path, name=str(path), env=env)

    def _load(self, path: Path, stack: tuple[Path, ...]) -> Mapping[str, Any]:
        if not path.exists():
            return {}
        tool_section = self._read(path).get(PYPROJECT_TOOL_KEY)
        if not isinstance(tool_section, Mapping):
            return {}
        section = tool_section.get(PYPROJECT_SECTION_KEY)
        if not isinstance(section, Mapping):
            return {}
        return self._compose(section, path, stack)

    def describe(self) -> str:
        return f"pyproject.toml ({self.name})"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``base`` recursively updated with ``override``."""

    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def expand_env(data: Mapping[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Return ``data`` with environment references expanded in string values."""

    return {key: _expand_env_value(value, env) for key, value in data.items()}


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _resolve_dataset_path(document: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    dataset = document.get("dataset")
    if not isinstance(dataset, Mapping):
        return document
    raw_path = dataset.get("path")
    if not isinstance(raw_path, str):
        return document
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return {**document, "dataset": {**dataset, "path": str(candidate)}}


__all__ = [
    "DEFAULT_INCLUDE_KEY",
    "ConfigSource",
    "PyProjectConfigSource",
    "TomlConfigSource",
    "deep_merge",
    "expand_env",
]
