"""Game result model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Self


class Outcome(str, Enum):
    """How a finished game ended."""

    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GameResult:
    """Structured outcome for a completed game."""

    game_id: str
    outcome: Outcome
    level: int
    max_round_count: int
    rounds_completed: int
    presses: int = 0
    details: str | None = None
    event_count: int = 0
    log_path: str | None = None

    @property
    def won(self) -> bool:
        return self.outcome is Outcome.WON

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable result object."""
        return {
            "game_id": self.game_id,
            "outcome": self.outcome.value,
            "level": self.level,
            "max_round_count": self.max_round_count,
            "rounds_completed": self.rounds_completed,
            "presses": self.presses,
            "details": self.details,
            "event_count": self.event_count,
            "log_path": self.log_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build result from serialized data."""
        return cls(
            game_id=str(data["game_id"]),
            outcome=Outcome(str(data["outcome"])),
            level=int(data["level"]),
            max_round_count=int(data["max_round_count"]),
            rounds_completed=int(data["rounds_completed"]),
            presses=int(data.get("presses", 0)),
            details=data.get("details"),
            event_count=int(data.get("event_count", 0)),
            log_path=data.get("log_path"),
        )
