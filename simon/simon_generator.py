"""Machine move generation."""

from __future__ import annotations

import hashlib
import random
from typing import Protocol, Sequence, TypeVar

from gamekit.errors import EmptyColorSetError

from .simon_state import Color

T = TypeVar("T")


class ChoiceSource(Protocol):
    """Anything that can pick one item from a sequence, e.g. `random.Random`."""

    def choice(self, seq: Sequence[T]) -> T: ...


class SequenceGenerator:
    """Picks the next pad uniformly from the configured colors."""

    def __init__(self, colors: Sequence[Color], rng: ChoiceSource | None = None):
        self.colors: tuple[Color, ...] = tuple(colors)
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, colors: Sequence[Color], seed: int, game_id: str = "") -> "SequenceGenerator":
        """Build a generator whose output is fixed by `seed` and `game_id`."""
        material = f"{seed}:{game_id}".encode("utf-8")
        derived_seed = int.from_bytes(hashlib.sha256(material).digest()[:8], byteorder="big", signed=False)
        return cls(colors, random.Random(derived_seed))

    def next_color(self) -> Color:
        if not self.colors:
            raise EmptyColorSetError()
        return self._rng.choice(self.colors)
