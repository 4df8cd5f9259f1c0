"""Word search puzzle core: generation, selection and matching."""

from .models import (
    DIRECTIONS,
    Cell,
    PlacedWord,
    Puzzle,
    GenerationWarning,
    MatchEvent,
    MatchResult,
    VerificationError,
    VerificationResult,
)
from .grid import empty_grid, can_place_word, place_word, fill_grid, read_word, render_grid
from .generator import generate, normalize_words, target_word_count
from .selection import resolve_line, letters_at
from .match import check_selection, find_target, POINTS_PER_LETTER
from .verify import verify_puzzle

__all__ = [
    # Models
    "DIRECTIONS",
    "Cell",
    "PlacedWord",
    "Puzzle",
    "GenerationWarning",
    "MatchEvent",
    "MatchResult",
    "VerificationError",
    "VerificationResult",
    # Grid utilities
    "empty_grid",
    "can_place_word",
    "place_word",
    "fill_grid",
    "read_word",
    "render_grid",
    # Generation
    "generate",
    "normalize_words",
    "target_word_count",
    # Selection and matching
    "resolve_line",
    "letters_at",
    "check_selection",
    "find_target",
    "POINTS_PER_LETTER",
    # Verification
    "verify_puzzle",
]
