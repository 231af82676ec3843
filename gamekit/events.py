"""Event schema and JSONL logging utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from time import time
from typing import Any, Iterable, Mapping

from .serialize import json_dumps, to_serializable


class EventType(str, Enum):
    """Event types emitted by the round controller."""

    GAME_START = "game_start"
    COMPUTER_TURN = "computer_turn"
    PRESS = "press"
    ROUND_COMPLETE = "round_complete"
    GAME_END = "game_end"
    RESET = "reset"
    ACKNOWLEDGE = "acknowledge"
    REJECTED = "rejected"


@dataclass(frozen=True)
class GameEvent:
    """Single replay event emitted while a game is played."""

    event_type: EventType
    game_id: str
    turn: int
    timestamp_ms: int
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable event data."""
        return {
            "event_type": self.event_type.value,
            "game_id": self.game_id,
            "turn": self.turn,
            "timestamp_ms": self.timestamp_ms,
            "payload": to_serializable(self.payload),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameEvent":
        """Build an event from a dictionary payload."""
        return cls(
            event_type=EventType(str(data["event_type"])),
            game_id=str(data["game_id"]),
            turn=int(data["turn"]),
            timestamp_ms=int(data["timestamp_ms"]),
            payload=dict(data.get("payload", {})),
        )

    @classmethod
    def create(cls, event_type: EventType, game_id: str, turn: int, payload: dict[str, Any]) -> "GameEvent":
        """Construct an event stamped with the current wall-clock time."""
        return cls(
            event_type=event_type,
            game_id=game_id,
            turn=turn,
            timestamp_ms=int(time() * 1000),
            payload=payload,
        )


def write_jsonl(path: str | Path, events: Iterable[GameEvent]) -> Path:
    """Persist events as JSONL to disk and return the written path."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        for event in events:
            handle.write(json_dumps(event.to_dict()))
            handle.write("\n")
    return output_path


def read_jsonl(path: str | Path) -> list[GameEvent]:
    """Load events previously written with `write_jsonl`."""
    events: list[GameEvent] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        if line.strip():
            events.append(GameEvent.from_dict(json.loads(line)))
    return events
