# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for dataset contents."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping

from .types import JSONValue
from .utils import thaw_json_value


def compute_dataset_checksum(data: bytes) -> str:
    """Return the hex-encoded SHA-256 digest of raw dataset bytes.

    Args:
        data: Dataset document exactly as read from its source.

    Returns:
        str: Hex-encoded checksum.
    """
    return hashlib.sha256(data).hexdigest()


def compute_payload_checksum(payload: Mapping[str, JSONValue]) -> str:
    """Return a checksum over the canonical JSON encoding of ``payload``.

    Args:
        payload: In-memory dataset document.

    Returns:
        str: Hex-encoded checksum stable across key ordering.
    """

    canonical = json.dumps(thaw_json_value(payload), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return compute_dataset_checksum(canonical.encode("utf-8"))


__all__ = ["compute_dataset_checksum", "compute_payload_checksum"]
