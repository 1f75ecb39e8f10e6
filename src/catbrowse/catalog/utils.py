# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Utility helpers for validating and normalising dataset JSON structures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import MalformedDatasetError
from .types import JSONValue


def expect_string(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return ``value`` as ``str`` or raise a dataset error.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str: Value as a string.

    Raises:
        MalformedDatasetError: If ``value`` is missing or not a string.
    """
    if value is None:
        raise MalformedDatasetError(f"{context}: missing required field '{key}'")
    if not isinstance(value, str):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be a string")
    return value


def optional_string(value: JSONValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string with validation.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str | None: ``value`` when present, otherwise ``None``.

    Raises:
        MalformedDatasetError: If ``value`` is present but not a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be a string if present")
    return value


def expect_identifier(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return an entry identifier normalised to a non-empty string.

    Integers are accepted and rendered in decimal; booleans are rejected even
    though they subclass ``int``.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        str: Identifier text.

    Raises:
        MalformedDatasetError: If ``value`` is missing, empty, or of another type.
    """
    if value is None:
        raise MalformedDatasetError(f"{context}: missing required field '{key}'")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be a string or integer")
    text = str(value)
    if not text.strip():
        raise MalformedDatasetError(f"{context}: expected '{key}' to be non-empty")
    return text


def string_array(value: JSONValue | None, *, key: str, context: str) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings with duplicates removed.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        tuple[str, ...]: Strings from ``value`` in first-seen order.

    Raises:
        MalformedDatasetError: If ``value`` is not a sequence of strings.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be an array of strings")
    result: dict[str, None] = {}
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise MalformedDatasetError(f"{context}: expected '{key}[{index}]' to be a string")
        result.setdefault(item, None)
    return tuple(result)


def expect_array(value: JSONValue | None, *, key: str, context: str) -> Sequence[JSONValue]:
    """Return ``value`` as a JSON array or raise an error.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        Sequence[JSONValue]: Array items.

    Raises:
        MalformedDatasetError: If ``value`` is missing or not an array.
    """
    if value is None:
        raise MalformedDatasetError(f"{context}: missing required field '{key}'")
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be an array")
    return value


def expect_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` as a mapping of JSON values or raise an error.

    Args:
        value: Raw JSON value extracted from the dataset payload.
        key: Attribute name used in error messages.
        context: Human-friendly prefix describing the validation context.

    Returns:
        Mapping[str, JSONValue]: Mapping derived from ``value``.

    Raises:
        MalformedDatasetError: If ``value`` is not a mapping.
    """
    if not isinstance(value, Mapping):
        raise MalformedDatasetError(f"{context}: expected '{key}' to be an object")
    return value


def thaw_json_value(value: JSONValue) -> JSONValue:
    """Return a plain JSON-compatible representation of ``value``.

    Args:
        value: JSON value that may contain mapping proxies or tuples.

    Returns:
        JSONValue: JSON-compatible value composed of built-in ``dict`` and
        ``list`` containers.
    """

    if isinstance(value, Mapping):
        return {str(key): thaw_json_value(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [thaw_json_value(item) for item in value]
    return value


__all__ = [
    "expect_array",
    "expect_identifier",
    "expect_mapping",
    "expect_string",
    "optional_string",
    "string_array",
    "thaw_json_value",
]
