"""Shared building blocks: errors, states, results, events and serialization."""

from .errors import (
    EmptyColorSetError,
    GameError,
    IllegalTransitionError,
    InvalidLevelError,
    UnknownColorError,
)
from .events import EventType, GameEvent, read_jsonl, write_jsonl
from .result import GameResult, Outcome
from .state import State

__all__ = [
    "EmptyColorSetError",
    "EventType",
    "GameError",
    "GameEvent",
    "GameResult",
    "IllegalTransitionError",
    "InvalidLevelError",
    "Outcome",
    "State",
    "UnknownColorError",
    "read_jsonl",
    "write_jsonl",
]
