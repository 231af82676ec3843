"""In-memory game sessions for the browser harness."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any
from uuid import uuid4

from gamekit.events import write_jsonl
from gamekit.result import GameResult
from gamekit.serialize import to_serializable
from simon.simon_config import DEFAULT_CONFIG, GameConfig
from simon.simon_controller import RoundController
from simon.simon_generator import SequenceGenerator
from simon.simon_presentation import RecordingPresentation
from simon.simon_state import Phase


def _next_action(controller: RoundController, playback_issued: bool) -> dict[str, Any] | None:
    """Tell the browser which entry point to call next and how long to wait first.

    Only the view that carries the playback waits out the flashes; later views
    of the same turn enable the pads immediately.
    """
    state = controller.state
    pacing = controller.config.pacing
    if state.phase is Phase.PLAYER_TURN and playback_issued:
        return {"action": "press", "enable_after_ms": pacing.player_turn_delay_ms(len(state.computer_sequence))}
    if state.phase is Phase.PLAYER_TURN:
        return {"action": "press", "enable_after_ms": 0}
    if state.phase is Phase.COMPUTER_TURN:
        return {"action": "next-round", "delay_ms": pacing.next_round_ms}
    if state.phase is Phase.ENDED:
        return {"action": "acknowledge"}
    return None


@dataclass
class GameSession:
    """Single in-memory game session."""

    game_id: str
    seed: int
    controller: RoundController
    presentation: RecordingPresentation
    event_log_dir: Path | None = None
    log_path: Path | None = None
    logged_games: int = 0
    _logged_result: GameResult | None = field(default=None, repr=False)

    @classmethod
    def create(
        cls,
        *,
        level: int,
        seed: int,
        config: GameConfig | None = None,
        event_log_dir: str | Path | None = None,
    ) -> "GameSession":
        game_id = f"simon-{seed}-{uuid4().hex[:8]}"
        presentation = RecordingPresentation()
        resolved_config = config or DEFAULT_CONFIG
        controller = RoundController(
            config=resolved_config,
            generator=SequenceGenerator.seeded(resolved_config.colors, seed),
            presentation=presentation,
            game_id=game_id,
            seed=seed,
        )
        session = cls(
            game_id=game_id,
            seed=seed,
            controller=controller,
            presentation=presentation,
            event_log_dir=Path(event_log_dir) if event_log_dir else None,
        )
        controller.start(level)
        controller.begin_computer_turn()
        return session

    def press(self, color: str) -> dict[str, Any]:
        outcome = self.presentation.on_press_received(color)
        view = self.view()
        view["press"] = outcome.to_dict()
        return view

    def next_round(self) -> dict[str, Any]:
        self.controller.begin_computer_turn()
        return self.view()

    def acknowledge(self) -> dict[str, Any]:
        self.controller.acknowledge()
        return self.view()

    def restart(self, level: int) -> dict[str, Any]:
        """Start another game in this session once the previous one is acknowledged."""
        self.controller.start(level)
        self.controller.begin_computer_turn()
        return self.view()

    def reset(self) -> dict[str, Any]:
        self.controller.reset()
        return self.view()

    def view(self) -> dict[str, Any]:
        """Snapshot of state plus the presentation calls issued since the last view."""
        self._flush_event_log()
        controller = self.controller
        state = controller.state
        calls = self.presentation.drain()
        playback = None
        for call in calls:
            if call.method == "playback":
                playback = [
                    to_serializable(cue)
                    for cue in controller.config.pacing.playback_schedule(call.args["sequence"])
                ]
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "phase": state.phase.value,
            "level": state.level,
            "round_count": state.round_count,
            "max_round_count": state.max_round_count,
            "computer_sequence": to_serializable(state.computer_sequence),
            "player_sequence": to_serializable(state.player_sequence),
            "remaining_presses": state.remaining_presses,
            "status": self.presentation.status,
            "round_label": list(self.presentation.round_label) if self.presentation.round_label else None,
            "playback": playback,
            "presentation_calls": [call.to_dict() for call in calls],
            "next": _next_action(controller, playback is not None),
            "result": controller.result.to_dict() if controller.result is not None else None,
            "state_digest": state.state_digest(),
        }

    def _flush_event_log(self) -> None:
        result = self.controller.result
        if self.event_log_dir is None or result is None or result is self._logged_result:
            return
        self.logged_games += 1
        path = self.event_log_dir / f"{self.game_id}-{self.logged_games}.jsonl"
        self.log_path = write_jsonl(path, self.controller.events)
        self._logged_result = replace(result, log_path=str(self.log_path))
        self.controller.result = self._logged_result


class SessionStore:
    """In-memory session dictionary keyed by game ID."""

    def __init__(self, config: GameConfig | None = None, event_log_dir: str | Path | None = None) -> None:
        self._sessions: dict[str, GameSession] = {}
        self.config = config or DEFAULT_CONFIG
        self.event_log_dir = event_log_dir

    def create_game(self, *, level: int, seed: int) -> GameSession:
        session = GameSession.create(
            level=level,
            seed=seed,
            config=self.config,
            event_log_dir=self.event_log_dir,
        )
        self._sessions[session.game_id] = session
        return session

    def get(self, game_id: str) -> GameSession:
        if game_id not in self._sessions:
            raise KeyError(game_id)
        return self._sessions[game_id]

    def all_events(self, game_id: str) -> list[dict[str, Any]]:
        session = self.get(game_id)
        return [event.to_dict() for event in session.controller.history()]
