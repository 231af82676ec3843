"""Deterministic JSON encoding and hashing for states, events and results."""

from __future__ import annotations

import dataclasses
import hashlib
import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping


def to_serializable(value: Any) -> Any:
    """Reduce enums, dataclasses and containers to JSON primitives."""
    if value is None or isinstance(value, (bool, int, float, str)):
        # str-backed enums fall through here, so unwrap them first.
        return value.value if isinstance(value, Enum) else value
    if isinstance(value, Enum):
        return to_serializable(value.value)
    if isinstance(value, Path):
        return str(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            field.name: to_serializable(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
    if isinstance(value, Mapping):
        return {str(to_serializable(key)): to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(to_serializable(item) for item in value)
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return to_serializable(value.to_dict())
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable.")


def json_dumps(value: Any, *, indent: int | None = None) -> str:
    """Encode with sorted keys so equal values always produce equal text."""
    separators = (",", ":") if indent is None else None
    return json.dumps(
        to_serializable(value),
        sort_keys=True,
        ensure_ascii=True,
        separators=separators,
        indent=indent,
    )


def digest(value: Any) -> str:
    """SHA-256 hex digest of the canonical JSON encoding."""
    return hashlib.sha256(json_dumps(value).encode("utf-8")).hexdigest()
