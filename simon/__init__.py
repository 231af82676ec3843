"""Simon Says package exports."""

from .simon_autoplayer import AutoPlayer
from .simon_config import (
    DEFAULT_COLORS,
    DEFAULT_CONFIG,
    DEFAULT_LEVEL,
    LEVEL_ROUNDS,
    FlashCue,
    GameConfig,
    Pacing,
)
from .simon_controller import PressKind, PressOutcome, RoundController
from .simon_generator import ChoiceSource, SequenceGenerator
from .simon_presentation import (
    NullPresentation,
    PresentationCall,
    PresentationPort,
    RecordingPresentation,
)
from .simon_state import Color, GameState, Phase

__all__ = [
    "AutoPlayer",
    "ChoiceSource",
    "Color",
    "DEFAULT_COLORS",
    "DEFAULT_CONFIG",
    "DEFAULT_LEVEL",
    "FlashCue",
    "GameConfig",
    "GameState",
    "LEVEL_ROUNDS",
    "NullPresentation",
    "Pacing",
    "Phase",
    "PresentationCall",
    "PresentationPort",
    "PressKind",
    "PressOutcome",
    "RecordingPresentation",
    "RoundController",
    "SequenceGenerator",
]
