# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading dataset JSON documents and schemas."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from importlib import resources
from pathlib import Path
from typing import cast

from .errors import MalformedDatasetError
from .types import JSONValue


def load_document(path: Path) -> tuple[JSONValue, bytes]:
    """Load a JSON document from disk returning the payload and raw bytes.

    Args:
        path: Filesystem path to the JSON document.

    Returns:
        tuple[JSONValue, bytes]: Parsed JSON value and the bytes it came from.

    Raises:
        FileNotFoundError: If the JSON document is missing.
        MalformedDatasetError: If the document cannot be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    data = path.read_bytes()
    return decode_document(data, context=str(path)), data


def load_package_document(package: str, filename: str) -> tuple[JSONValue, bytes]:
    """Load a JSON document shipped as package data.

    Args:
        package: Dotted package name holding the resource.
        filename: Resource file name inside ``package``.

    Returns:
        tuple[JSONValue, bytes]: Parsed JSON value and the raw resource bytes.
    """

    data = resources.files(package).joinpath(filename).read_bytes()
    return decode_document(data, context=f"{package}/{filename}"), data


def decode_document(data: bytes, *, context: str) -> JSONValue:
    """Decode ``data`` as UTF-8 JSON.

    Args:
        data: Raw document bytes.
        context: Human-readable context string used in error messages.

    Returns:
        JSONValue: Parsed JSON value.

    Raises:
        MalformedDatasetError: If ``data`` is not valid UTF-8 JSON.
    """

    try:
        payload = cast(JSONValue, json.loads(data.decode("utf-8")))
    except UnicodeDecodeError as exc:
        raise MalformedDatasetError(f"{context}: document is not valid UTF-8") from exc
    except json.JSONDecodeError as exc:
        raise MalformedDatasetError(f"{context}: line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
    return _ensure_json_value(payload, context=context)


__all__ = ["decode_document", "load_document", "load_package_document"]


def _ensure_json_value(value: JSONValue, *, context: str) -> JSONValue:
    """Ensure ``value`` is composed of JSON-compatible structures.

    Args:
        value: Parsed JSON payload to validate recursively.
        context: Human-readable context string used in error messages.

    Returns:
        JSONValue: Validated JSON value.

    Raises:
        MalformedDatasetError: If ``value`` contains unsupported JSON constructs.
    """

    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _ensure_json_value(item, context=f"{context}.{key}") for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [_ensure_json_value(item, context=f"{context}[]") for item in value]
    raise MalformedDatasetError(f"{context}: value is not valid JSON")
