"""Play session for Word Zen: phases, timer, selection and scoring."""

from .models import (
    Phase,
    LexiconConfig,
    GameConfig,
    Selection,
    CellEffect,
    PuzzleSession,
    GameState,
    StartGame,
    PuzzleRequested,
    PuzzleReady,
    PuzzleFailed,
    PointerDown,
    PointerMove,
    PointerUp,
    PointerLeave,
    Tick,
    BackToWelcome,
    Event,
    Feedback,
)
from .state import step, visible_effects, format_elapsed
from .controller import SessionController, build_primary

__all__ = [
    "Phase",
    "LexiconConfig",
    "GameConfig",
    "Selection",
    "CellEffect",
    "PuzzleSession",
    "GameState",
    "StartGame",
    "PuzzleRequested",
    "PuzzleReady",
    "PuzzleFailed",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "PointerLeave",
    "Tick",
    "BackToWelcome",
    "Event",
    "Feedback",
    "step",
    "visible_effects",
    "format_elapsed",
    "SessionController",
    "build_primary",
]
