"""Structured exceptions raised by the round engine."""

from __future__ import annotations

from typing import Any


class GameError(Exception):
    """Base class for every error the engine surfaces to callers."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}


class InvalidLevelError(GameError, ValueError):
    """Raised when a level is missing from the level table."""

    def __init__(self, level: Any, valid_levels: tuple[int, ...] = ()):
        self.level = level
        self.valid_levels = tuple(valid_levels)
        message = f"Unknown level {level!r}"
        if self.valid_levels:
            choices = ", ".join(str(value) for value in self.valid_levels)
            message = f"{message}; expected one of {choices}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"level": self.level, "valid_levels": list(self.valid_levels)})
        return payload


class UnknownColorError(GameError, ValueError):
    """Raised when a press names a color outside the configured pad set."""

    def __init__(self, color: Any):
        self.color = color
        super().__init__(f"Unknown color {color!r}")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["color"] = getattr(self.color, "value", self.color)
        return payload


class IllegalTransitionError(GameError):
    """Raised when an operation is invoked from a phase that does not allow it."""

    def __init__(self, action: str, phase: Any, reason: str | None = None):
        self.action = action
        self.phase = phase
        self.reason = reason
        message = f"Cannot {action} during {getattr(phase, 'value', phase)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"action": self.action, "phase": getattr(self.phase, "value", self.phase)})
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class EmptyColorSetError(GameError):
    """Raised when a generator or config is built without any colors."""

    def __init__(self, message: str = "Color set is empty."):
        super().__init__(message)
