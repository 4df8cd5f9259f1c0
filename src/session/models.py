"""
Pydantic models for the session layer.

This module contains the configuration, the immutable session snapshots, the
input events fed to the state-transition function and the feedback events it
emits for the presentation layer. The transition logic lives in state.py and
the orchestration in controller.py.
"""

import time
from typing import List, Optional, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..lexicon.datamuse import DATAMUSE_API_URL
from ..puzzle.models import Cell, Puzzle


# Type aliases
Phase = Literal["welcome", "category", "playing"]
EffectKind = Literal["found-animating", "found", "incorrect"]
FeedbackKind = Literal[
    "cells-selected",
    "word-found",
    "word-incorrect",
    "puzzle-complete",
    "score-changed",
    "timer-tick",
]


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class LexiconConfig(BaseModel):
    """Configuration for the remote word lookup."""
    model_config = ConfigDict(extra='allow')

    provider: Literal["datamuse", "llm", "none"] = "datamuse"
    max_results: int = Field(default=12, ge=1)
    timeout: float = Field(default=3.0, gt=0)
    base_url: str = DATAMUSE_API_URL
    model: Optional[str] = None  # Required for the llm provider
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    # Additional kwargs are allowed and passed to LiteLLM

    @model_validator(mode="after")
    def _check_model(self) -> "LexiconConfig":
        if self.provider == "llm" and not self.model:
            raise ValueError("lexicon.model is required when provider is 'llm'")
        return self


class GameConfig(BaseModel):
    """Configuration for a play session."""
    grid_size: int = Field(default=8, ge=4, le=26)
    max_attempts: int = Field(default=200, ge=1)
    min_words: int = Field(default=5, ge=1)
    max_words: int = Field(default=8, ge=1)
    min_word_length: int = Field(default=4, ge=2)
    max_word_length: int = Field(default=8, ge=2)
    points_per_letter: int = Field(default=15, ge=0)
    seed: Optional[int] = None
    word_tables: Optional[str] = None  # Path to a custom YAML word table
    lexicon: LexiconConfig = Field(default_factory=LexiconConfig)

    @model_validator(mode="after")
    def _check_bounds(self) -> "GameConfig":
        if self.min_words > self.max_words:
            raise ValueError(f"min_words ({self.min_words}) exceeds max_words ({self.max_words})")
        if self.min_word_length > self.max_word_length:
            raise ValueError(
                f"min_word_length ({self.min_word_length}) exceeds "
                f"max_word_length ({self.max_word_length})"
            )
        if self.grid_size < self.min_word_length:
            raise ValueError(
                f"grid_size ({self.grid_size}) is smaller than min_word_length "
                f"({self.min_word_length})"
            )
        return self


# ---------------------------------------------------------------------------
# Session snapshots
# ---------------------------------------------------------------------------

class Selection(BaseModel):
    """The cells covered by the drag gesture in progress."""
    model_config = ConfigDict(frozen=True)

    start: Cell
    end: Cell
    cells: List[Cell] = Field(default_factory=list)


class CellEffect(BaseModel):
    """A highlight on one cell; transient effects carry an expiry time."""
    model_config = ConfigDict(frozen=True)

    cell: Cell
    kind: EffectKind
    expires_at: Optional[float] = None  # None means it persists

    def active(self, now: float) -> bool:
        return self.expires_at is None or now < self.expires_at


class PuzzleSession(BaseModel):
    """One puzzle in play: grid and targets, elapsed time, score, completion."""
    model_config = ConfigDict(frozen=True)

    puzzle: Puzzle
    elapsed_seconds: int = 0
    score: int = 0
    complete: bool = False


class GameState(BaseModel):
    """Everything the controller owns, replaced wholesale on every event."""
    model_config = ConfigDict(frozen=True)

    phase: Phase = "welcome"
    category: Optional[str] = None
    theme: Optional[str] = None
    level: int = 0
    loading: bool = False
    session: Optional[PuzzleSession] = None
    selection: Optional[Selection] = None
    effects: List[CellEffect] = Field(default_factory=list)

    @property
    def accepting_input(self) -> bool:
        """True while the grid should respond to pointer events."""
        return (
            self.phase == "playing"
            and not self.loading
            and self.session is not None
            and not self.session.complete
        )


# ---------------------------------------------------------------------------
# Input events
# ---------------------------------------------------------------------------

def _now() -> float:
    return time.monotonic()


class StartGame(BaseModel):
    type: Literal["start-game"] = "start-game"


class PuzzleRequested(BaseModel):
    type: Literal["puzzle-requested"] = "puzzle-requested"
    category: str


class PuzzleReady(BaseModel):
    type: Literal["puzzle-ready"] = "puzzle-ready"
    puzzle: Puzzle


class PuzzleFailed(BaseModel):
    """Generation of the requested puzzle raised; clears the loading flag."""
    type: Literal["puzzle-failed"] = "puzzle-failed"
    error: str = ""


class PointerDown(BaseModel):
    type: Literal["pointer-down"] = "pointer-down"
    cell: Cell


class PointerMove(BaseModel):
    type: Literal["pointer-move"] = "pointer-move"
    cell: Cell


class PointerUp(BaseModel):
    type: Literal["pointer-up"] = "pointer-up"
    at: float = Field(default_factory=_now)


class PointerLeave(BaseModel):
    """The pointer left the grid mid-drag; treated as a release."""
    type: Literal["pointer-leave"] = "pointer-leave"
    at: float = Field(default_factory=_now)


class Tick(BaseModel):
    type: Literal["tick"] = "tick"
    now: float = Field(default_factory=_now)


class BackToWelcome(BaseModel):
    type: Literal["back-to-welcome"] = "back-to-welcome"


Event = Union[
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
]


# ---------------------------------------------------------------------------
# Feedback events
# ---------------------------------------------------------------------------

class Feedback(BaseModel):
    """Observational signal for the presentation layer."""
    kind: FeedbackKind
    cells: List[Cell] = Field(default_factory=list)
    word: Optional[str] = None
    score: Optional[int] = None
    seconds: Optional[int] = None
