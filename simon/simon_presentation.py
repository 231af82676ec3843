"""Presentation boundary between the round controller and a UI."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

from gamekit.result import Outcome
from gamekit.serialize import to_serializable

from .simon_state import Color

if TYPE_CHECKING:
    from .simon_controller import PressOutcome, RoundController


class PresentationPort(ABC):
    """
    Output sinks the controller calls, plus the inbound press hook.

    Implementations own all timing: the controller returns immediately from
    every call, and the presentation decides when to invoke
    `begin_computer_turn` again.
    """

    def __init__(self) -> None:
        self._controller: RoundController | None = None

    def bind(self, controller: "RoundController") -> None:
        """Attach the controller that receives forwarded presses."""
        self._controller = controller

    @abstractmethod
    def playback(self, sequence: Sequence[Color]) -> None:
        """Replay the full machine sequence, one flash per element, in order."""

    @abstractmethod
    def show_status(self, message: str) -> None:
        """Display a one-line status message."""

    @abstractmethod
    def show_round_label(self, round_count: int, max_round_count: int) -> None:
        """Display the `Round N of M` heading."""

    @abstractmethod
    def announce_end(self, result: Outcome, message: str) -> None:
        """Notify the player the game ended; the UI re-enables its start control afterwards."""

    def on_press_received(self, color: Color | str) -> "PressOutcome":
        """Forward a pad press from the UI to the bound controller."""
        if self._controller is None:
            raise RuntimeError(f"{self.__class__.__name__} is not bound to a controller.")
        return self._controller.receive_press(color)


class NullPresentation(PresentationPort):
    """Discards all output."""

    def playback(self, sequence: Sequence[Color]) -> None:
        pass

    def show_status(self, message: str) -> None:
        pass

    def show_round_label(self, round_count: int, max_round_count: int) -> None:
        pass

    def announce_end(self, result: Outcome, message: str) -> None:
        pass


@dataclass(frozen=True)
class PresentationCall:
    """One recorded outbound call."""

    method: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"method": self.method, "args": to_serializable(self.args)}


class RecordingPresentation(PresentationPort):
    """Keeps every outbound call so a remote UI can replay them later."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[PresentationCall] = []
        self.status: str | None = None
        self.round_label: tuple[int, int] | None = None

    def playback(self, sequence: Sequence[Color]) -> None:
        self.calls.append(PresentationCall("playback", {"sequence": tuple(sequence)}))

    def show_status(self, message: str) -> None:
        self.status = message
        self.calls.append(PresentationCall("show_status", {"message": message}))

    def show_round_label(self, round_count: int, max_round_count: int) -> None:
        self.round_label = (round_count, max_round_count)
        self.calls.append(
            PresentationCall("show_round_label", {"round": round_count, "max": max_round_count})
        )

    def announce_end(self, result: Outcome, message: str) -> None:
        self.calls.append(PresentationCall("announce_end", {"result": result, "message": message}))

    def drain(self) -> list[PresentationCall]:
        """Return and forget the calls recorded since the last drain."""
        calls, self.calls = self.calls, []
        return calls
