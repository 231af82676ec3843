"""Terminal harness: plays Simon Says in a shell, by hand or with the auto-player."""

from __future__ import annotations

import argparse
import time
from typing import Callable, Sequence, TextIO

from gamekit.env_utils import getenv_any, getenv_int
from gamekit.errors import UnknownColorError
from gamekit.events import write_jsonl
from gamekit.result import GameResult, Outcome
from gamekit.serialize import json_dumps

from .simon_autoplayer import AutoPlayer
from .simon_config import DEFAULT_CONFIG, DEFAULT_LEVEL, GameConfig, Pacing
from .simon_controller import RoundController
from .simon_presentation import PresentationPort
from .simon_state import Color, GameState, Phase

ANSI_COLORS = {
    Color.RED: "\033[91m",
    Color.GREEN: "\033[92m",
    Color.BLUE: "\033[94m",
    Color.YELLOW: "\033[93m",
}
ANSI_RESET = "\033[0m"

PressSource = Callable[[GameState], "Color | str | None"]


class TerminalPresentation(PresentationPort):
    """Prints flashes and status lines; sleeps between flashes to pace playback."""

    def __init__(
        self,
        pacing: Pacing,
        *,
        stream: TextIO | None = None,
        use_color: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ):
        super().__init__()
        self.pacing = pacing
        self.stream = stream
        self.use_color = use_color
        self.sleep = sleep

    def _write(self, text: str) -> None:
        print(text, file=self.stream, flush=True)

    def _paint(self, color: Color) -> str:
        label = color.value.upper()
        if not self.use_color:
            return label
        return f"{ANSI_COLORS.get(color, '')}{label}{ANSI_RESET}"

    def playback(self, sequence: Sequence[Color]) -> None:
        for cue in self.pacing.playback_schedule(sequence):
            self._write(f"  flash {cue.index + 1}: {self._paint(cue.color)}")
            self.sleep(self.pacing.step_ms / 1000)

    def show_status(self, message: str) -> None:
        self._write(message)

    def show_round_label(self, round_count: int, max_round_count: int) -> None:
        self._write(f"\n=== Round {round_count} of {max_round_count} ===")

    def announce_end(self, result: Outcome, message: str) -> None:
        banner = "*" * (len(message) + 4)
        self._write(f"\n{banner}\n* {message} *\n{banner}")


def expand_shortcut(raw: str, colors: Sequence[Color]) -> str:
    """Map a unique color initial such as `r` to its full name."""
    text = raw.strip().lower()
    if len(text) != 1:
        return text
    matches = [color for color in colors if color.value.startswith(text)]
    return matches[0].value if len(matches) == 1 else text


def prompt_press(config: GameConfig) -> PressSource:
    """Build a press source that reads from stdin."""
    shortcuts = "/".join(color.value[0] for color in config.colors)

    def _read(state: GameState) -> str | None:
        try:
            raw = input(f"Press ({shortcuts}) [{state.remaining_presses} left]: ")
        except EOFError:
            return None
        return expand_shortcut(raw, config.colors)

    return _read


def play_game(
    controller: RoundController,
    level: int,
    next_press: PressSource,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> GameResult | None:
    """Drive one full game; returns None when the press source gives up."""
    pacing = controller.config.pacing
    controller.start(level)
    while True:
        controller.begin_computer_turn()
        sleep(pacing.settle_ms / 1000)
        while controller.phase is Phase.PLAYER_TURN:
            press = next_press(controller.state)
            if press is None:
                controller.reset()
                return None
            try:
                controller.presentation.on_press_received(press)
            except UnknownColorError as exc:
                controller.presentation.show_status(f"{exc}. Try again.")
        if controller.phase is Phase.ENDED:
            result = controller.result
            controller.acknowledge()
            return result
        sleep(pacing.next_round_ms / 1000)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint for a single game."""
    default_level = getenv_int("SIMON_DEFAULT_LEVEL", default=DEFAULT_LEVEL)
    parser = argparse.ArgumentParser(description="Play Simon Says in the terminal.")
    parser.add_argument("--level", type=int, default=default_level, choices=DEFAULT_CONFIG.level_numbers)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--autoplay", action="store_true", help="Let the scripted player press the pads.")
    parser.add_argument("--mistake-rate", type=float, default=0.0)
    parser.add_argument("--fast", action="store_true", help="Skip all pacing delays.")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--event-log", type=str, default=getenv_any("SIMON_EVENT_LOG"))
    args = parser.parse_args(argv)

    pacing = DEFAULT_CONFIG.pacing.scaled(0.0) if args.fast else DEFAULT_CONFIG.pacing
    config = GameConfig(levels=DEFAULT_CONFIG.levels, colors=DEFAULT_CONFIG.colors, pacing=pacing)
    presentation = TerminalPresentation(pacing, use_color=not args.no_color)
    controller = RoundController(config=config, presentation=presentation, seed=args.seed)

    if args.autoplay:
        player = AutoPlayer(config.colors, mistake_rate=args.mistake_rate, seed=args.seed)
        next_press: PressSource = player.next_press
    else:
        next_press = prompt_press(config)

    try:
        result = play_game(controller, args.level, next_press)
    except KeyboardInterrupt:
        controller.reset()
        result = None

    if args.event_log:
        log_path = write_jsonl(args.event_log, controller.events)
        presentation.show_status(f"Event log written to {log_path}")

    if result is None:
        presentation.show_status("Game abandoned.")
        return 1
    print(json_dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
