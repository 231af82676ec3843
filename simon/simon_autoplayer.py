"""Scripted stand-in for the human player."""

from __future__ import annotations

import hashlib
import random

from .simon_state import Color, GameState


class AutoPlayer:
    """Repeats the shown sequence, slipping to a wrong pad with probability `mistake_rate`."""

    def __init__(self, colors: tuple[Color, ...], mistake_rate: float = 0.0, seed: int | None = None):
        if not 0.0 <= mistake_rate <= 1.0:
            raise ValueError("mistake_rate must be between 0 and 1.")
        self.colors = tuple(colors)
        self.mistake_rate = mistake_rate
        self._rng = random.Random()
        if seed is not None:
            material = f"{seed}:autoplayer".encode("utf-8")
            self._rng.seed(int.from_bytes(hashlib.sha256(material).digest()[:8], byteorder="big", signed=False))

    def next_press(self, state: GameState) -> Color:
        """Choose the next pad for the current player turn."""
        expected = state.expected_color()
        if expected is None:
            raise RuntimeError("AutoPlayer asked to press with no outstanding color.")
        wrong = [color for color in self.colors if color is not expected]
        if wrong and self._rng.random() < self.mistake_rate:
            return self._rng.choice(wrong)
        return expected
