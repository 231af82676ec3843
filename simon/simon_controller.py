"""Round controller: the Simon Says turn and round state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import uuid4

from gamekit.errors import GameError, IllegalTransitionError
from gamekit.events import EventType, GameEvent
from gamekit.result import GameResult, Outcome

from .simon_config import DEFAULT_CONFIG, GameConfig
from .simon_generator import SequenceGenerator
from .simon_presentation import NullPresentation, PresentationPort
from .simon_state import Color, GameState, Phase

STATUS_STARTED = "Game Started!"
STATUS_COMPUTER_TURN = "The computer's turn..."
STATUS_PLAYER_TURN = "Your turn! Repeat the sequence."
STATUS_NEXT_ROUND = "Nice! Get ready for the next round..."
WIN_MESSAGE = "Congratulations! You won the game!"
LOSS_MESSAGE = "Incorrect sequence! Game over."


class PressKind(str, Enum):
    """What a single accepted press led to."""

    MATCH = "match"
    ROUND_COMPLETE = "round_complete"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class PressOutcome:
    """Result of `RoundController.receive_press`."""

    kind: PressKind
    color: Color
    expected: Color
    remaining: int
    phase: Phase

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "color": self.color.value,
            "expected": self.expected.value,
            "remaining": self.remaining,
            "phase": self.phase.value,
        }


class RoundController:
    """
    Owns the game state and applies every transition.

    Each public method validates first and only then swaps in a new
    `GameState`, so a rejected call leaves the state exactly as it was. The
    controller never schedules anything itself: the presentation layer calls
    `begin_computer_turn` once its playback and pacing delays have elapsed.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        generator: SequenceGenerator | None = None,
        presentation: PresentationPort | None = None,
        *,
        game_id: str | None = None,
        seed: int | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.game_id = game_id or f"simon-{uuid4().hex[:8]}"
        self.seed = seed
        if generator is None:
            if seed is None:
                generator = SequenceGenerator(self.config.colors)
            else:
                generator = SequenceGenerator.seeded(self.config.colors, seed, self.game_id)
        self.generator = generator
        self.presentation = presentation or NullPresentation()
        self.presentation.bind(self)
        self.state = GameState()
        self.events: list[GameEvent] = []
        self.archived_events: list[GameEvent] = []
        self.result: GameResult | None = None
        self._presses = 0

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def history(self) -> list[GameEvent]:
        """Events from every game this controller has played, oldest first."""
        return [*self.archived_events, *self.events]

    def start(self, level: int) -> GameState:
        """Idle -> ComputerTurn for `level`, with round 1 and empty sequences."""
        self._require_phase("start", Phase.IDLE)
        try:
            max_round_count = self.config.max_rounds_for(level)
        except GameError as exc:
            self._record_rejection("start", exc)
            raise

        self.state = GameState(
            phase=Phase.COMPUTER_TURN,
            level=level,
            round_count=1,
            max_round_count=max_round_count,
            turn_index=self.state.turn_index + 1,
        )
        self.archived_events.extend(self.events)
        self.events = []
        self.result = None
        self._presses = 0
        self._record(
            EventType.GAME_START,
            {
                "level": level,
                "max_round_count": max_round_count,
                "colors": self.config.colors,
                "seed": self.seed,
            },
        )
        self.presentation.show_status(STATUS_STARTED)
        return self.state

    def begin_computer_turn(self) -> tuple[Color, ...]:
        """Extend the sequence by one color, hand it to playback, then open the player turn."""
        self._require_phase("begin the computer turn", Phase.COMPUTER_TURN)
        try:
            color = self.generator.next_color()
        except GameError as exc:
            self._record_rejection("begin the computer turn", exc)
            raise

        state = self.state
        sequence = state.computer_sequence + (color,)
        self.state = state.evolve(
            computer_sequence=sequence,
            player_sequence=(),
            phase=Phase.PLAYER_TURN,
            turn_index=state.turn_index + 1,
        )
        self._record(EventType.COMPUTER_TURN, {"round": state.round_count, "color": color, "length": len(sequence)})

        self.presentation.show_status(STATUS_COMPUTER_TURN)
        self.presentation.show_round_label(state.round_count, state.max_round_count)
        self.presentation.playback(sequence)
        self.presentation.show_status(STATUS_PLAYER_TURN)
        return sequence

    def receive_press(self, color: Color | str) -> PressOutcome:
        """Validate one pad press against the machine sequence."""
        self._require_phase("receive a press", Phase.PLAYER_TURN)
        try:
            pressed = self.config.parse_color(color)
        except GameError as exc:
            self._record_rejection("receive a press", exc)
            raise

        state = self.state
        player_sequence = state.player_sequence + (pressed,)
        index = len(player_sequence) - 1
        expected = state.computer_sequence[index]
        self._presses += 1

        if pressed is not expected:
            self._record(
                EventType.PRESS,
                {"index": index, "color": pressed, "expected": expected, "correct": False},
            )
            self._end(Outcome.LOST, LOSS_MESSAGE, rounds_completed=state.round_count - 1)
            return PressOutcome(PressKind.LOST, pressed, expected, remaining=0, phase=self.state.phase)

        self.state = state.evolve(player_sequence=player_sequence, turn_index=state.turn_index + 1)
        remaining = self.state.remaining_presses
        self._record(
            EventType.PRESS,
            {"index": index, "color": pressed, "expected": expected, "correct": True, "remaining": remaining},
        )
        self.presentation.show_status(f"Presses left: {remaining}")
        if remaining > 0:
            return PressOutcome(PressKind.MATCH, pressed, expected, remaining=remaining, phase=self.state.phase)

        kind = self.check_round()
        return PressOutcome(kind, pressed, expected, remaining=0, phase=self.state.phase)

    def check_round(self) -> PressKind:
        """Evaluate a fully reproduced sequence: win, or advance to the next round."""
        self._require_phase("check the round", Phase.PLAYER_TURN)
        state = self.state
        if not state.round_complete:
            raise self._rejected(
                IllegalTransitionError(
                    "check the round",
                    state.phase,
                    f"{state.remaining_presses} press(es) still outstanding",
                )
            )

        if len(state.player_sequence) == state.max_round_count:
            self._end(Outcome.WON, WIN_MESSAGE, rounds_completed=state.max_round_count)
            return PressKind.WON

        self.state = state.evolve(
            round_count=state.round_count + 1,
            player_sequence=(),
            phase=Phase.COMPUTER_TURN,
            turn_index=state.turn_index + 1,
        )
        self._record(
            EventType.ROUND_COMPLETE,
            {"completed_round": state.round_count, "next_round": self.state.round_count},
        )
        self.presentation.show_status(STATUS_NEXT_ROUND)
        return PressKind.ROUND_COMPLETE

    def reset(self) -> None:
        """Return to Idle from any phase, clearing sequences and the round counter."""
        self._to_idle(EventType.RESET)

    def acknowledge(self) -> None:
        """Dismiss the end-of-game announcement: Ended -> Idle."""
        self._require_phase("acknowledge", Phase.ENDED)
        self._to_idle(EventType.ACKNOWLEDGE)

    def _to_idle(self, event_type: EventType) -> None:
        previous = self.state
        self.state = GameState(
            phase=Phase.IDLE,
            level=previous.level,
            max_round_count=previous.max_round_count,
            turn_index=previous.turn_index + 1,
        )
        self._record(event_type, {"from_phase": previous.phase})

    def _end(self, outcome: Outcome, message: str, *, rounds_completed: int) -> None:
        previous = self.state
        self.state = GameState(
            phase=Phase.ENDED,
            level=previous.level,
            max_round_count=previous.max_round_count,
            result=outcome,
            turn_index=previous.turn_index + 1,
        )
        self._record(
            EventType.GAME_END,
            {"outcome": outcome, "rounds_completed": rounds_completed, "message": message},
        )
        self.result = GameResult(
            game_id=self.game_id,
            outcome=outcome,
            level=previous.level if previous.level is not None else 0,
            max_round_count=previous.max_round_count,
            rounds_completed=rounds_completed,
            presses=self._presses,
            details=message,
            event_count=len(self.events),
        )
        self.presentation.announce_end(outcome, message)

    def _require_phase(self, action: str, *phases: Phase) -> None:
        if self.state.phase not in phases:
            expected = " or ".join(phase.value for phase in phases)
            raise self._rejected(IllegalTransitionError(action, self.state.phase, f"expected {expected}"))

    def _rejected(self, error: GameError) -> GameError:
        self._record_rejection(getattr(error, "action", "unknown"), error)
        return error

    def _record_rejection(self, action: str, error: GameError) -> None:
        self._record(EventType.REJECTED, {"action": action, "error": error.to_dict()})

    def _record(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.events.append(GameEvent.create(event_type, self.game_id, self.state.turn_index, payload))
