"""State and enums for Simon Says."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gamekit.result import Outcome
from gamekit.state import State


class Color(str, Enum):
    """Pad colors."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"


class Phase(str, Enum):
    """Round controller phases."""

    IDLE = "IDLE"
    COMPUTER_TURN = "COMPUTER_TURN"
    PLAYER_TURN = "PLAYER_TURN"
    ENDED = "ENDED"


@dataclass(frozen=True)
class GameState(State):
    """Immutable round state; the controller swaps in a new value per transition."""

    computer_sequence: tuple[Color, ...] = ()
    player_sequence: tuple[Color, ...] = ()
    round_count: int = 0
    max_round_count: int = 0
    phase: Phase = Phase.IDLE
    level: int | None = None
    result: Outcome | None = None
    turn_index: int = 0

    @property
    def remaining_presses(self) -> int:
        """Presses still needed to reproduce the current sequence."""
        return len(self.computer_sequence) - len(self.player_sequence)

    @property
    def round_complete(self) -> bool:
        return bool(self.computer_sequence) and self.remaining_presses == 0

    def expected_color(self) -> Color | None:
        """Return the color the next press must match, if any."""
        index = len(self.player_sequence)
        if index >= len(self.computer_sequence):
            return None
        return self.computer_sequence[index]
