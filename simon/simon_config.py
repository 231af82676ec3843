"""Fixed game configuration: level table, pad colors and playback pacing."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from gamekit.errors import EmptyColorSetError, InvalidLevelError, UnknownColorError

from .simon_state import Color

LEVEL_ROUNDS: Mapping[int, int] = MappingProxyType({1: 8, 2: 14, 3: 20, 4: 31})
DEFAULT_LEVEL = 1
DEFAULT_COLORS: tuple[Color, ...] = (Color.RED, Color.GREEN, Color.BLUE, Color.YELLOW)


@dataclass(frozen=True)
class FlashCue:
    """One pad flash the presentation layer should render during playback."""

    index: int
    color: Color
    start_ms: int
    duration_ms: int


@dataclass(frozen=True)
class Pacing:
    """Presentation timings, in milliseconds.

    The round controller never reads these; harnesses use them to decide when
    to call back into `begin_computer_turn` and when to accept input again.
    """

    step_ms: int = 600
    flash_ms: int = 500
    settle_ms: int = 1000
    next_round_ms: int = 1000

    def __post_init__(self) -> None:
        for name in ("step_ms", "flash_ms", "settle_ms", "next_round_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"Pacing.{name} must be >= 0.")

    def playback_schedule(self, sequence: Sequence[Color]) -> list[FlashCue]:
        """Flash offsets for replaying `sequence`, one step apart and non-overlapping."""
        return [
            FlashCue(index=index, color=color, start_ms=index * self.step_ms, duration_ms=min(self.flash_ms, self.step_ms))
            for index, color in enumerate(sequence)
        ]

    def player_turn_delay_ms(self, sequence_length: int) -> int:
        """Delay from playback start until the pads should accept input."""
        return sequence_length * self.step_ms + self.settle_ms

    def scaled(self, factor: float) -> "Pacing":
        """Return a copy with every timing multiplied by `factor`."""
        if factor < 0:
            raise ValueError("Pacing scale factor must be >= 0.")
        return Pacing(
            step_ms=int(self.step_ms * factor),
            flash_ms=int(self.flash_ms * factor),
            settle_ms=int(self.settle_ms * factor),
            next_round_ms=int(self.next_round_ms * factor),
        )


@dataclass(frozen=True)
class GameConfig:
    """Level table, pad set and pacing for one controller."""

    levels: Mapping[int, int] = field(default_factory=lambda: LEVEL_ROUNDS)
    colors: tuple[Color, ...] = DEFAULT_COLORS
    pacing: Pacing = field(default_factory=Pacing)

    def __post_init__(self) -> None:
        colors = tuple(self.colors)
        if not colors:
            raise EmptyColorSetError("GameConfig.colors must contain at least one color.")
        if len(set(colors)) != len(colors):
            raise ValueError("GameConfig.colors must not contain duplicates.")
        if not self.levels:
            raise ValueError("GameConfig.levels must define at least one level.")
        for level, rounds in self.levels.items():
            if not isinstance(rounds, int) or rounds < 1:
                raise InvalidLevelError(level, tuple(self.levels))
        object.__setattr__(self, "colors", colors)
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))

    @property
    def level_numbers(self) -> tuple[int, ...]:
        return tuple(sorted(self.levels))

    def max_rounds_for(self, level: Any) -> int:
        """Look up the target round count for `level`."""
        if isinstance(level, bool) or not isinstance(level, int) or level not in self.levels:
            raise InvalidLevelError(level, self.level_numbers)
        return self.levels[level]

    def parse_color(self, value: Any) -> Color:
        """Resolve a `Color` or case-insensitive color name against the pad set."""
        if isinstance(value, Color):
            color = value
        elif isinstance(value, str):
            try:
                color = Color(value.strip().lower())
            except ValueError as exc:
                raise UnknownColorError(value) from exc
        else:
            raise UnknownColorError(value)
        if color not in self.colors:
            raise UnknownColorError(value)
        return color

    def to_dict(self) -> dict[str, Any]:
        return {
            "levels": {str(level): rounds for level, rounds in sorted(self.levels.items())},
            "colors": [color.value for color in self.colors],
            "pacing": {
                "step_ms": self.pacing.step_ms,
                "flash_ms": self.pacing.flash_ms,
                "settle_ms": self.pacing.settle_ms,
                "next_round_ms": self.pacing.next_round_ms,
            },
        }


DEFAULT_CONFIG = GameConfig()
