"""Immutable state base class."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Self

from .serialize import digest, to_serializable


@dataclass(frozen=True)
class State:
    """Frozen dataclass base; transitions build a new value instead of mutating."""

    def to_dict(self) -> dict[str, Any]:
        return to_serializable(self)

    def evolve(self, **changes: Any) -> Self:
        """Return a copy with `changes` applied."""
        return replace(self, **changes)

    def state_digest(self) -> str:
        """Return a deterministic digest for event logs and change detection."""
        return digest(self.to_dict())
