"""
Word search puzzle generation.

Places a random selection of candidate words into a square grid along any of
the eight directions, then pads the leftover cells with random letters. Words
that cannot be placed within the attempt budget are dropped and reported as
warnings instead of failing the puzzle.
"""

import random
from typing import List, Optional, Sequence

from .grid import empty_grid, can_place_word, place_word, fill_grid
from .models import DIRECTIONS, Cell, GenerationWarning, PlacedWord, Puzzle


MIN_WORDS = 5
MAX_WORDS = 8
MIN_WORD_LENGTH = 4
MAX_WORD_LENGTH = 8
MAX_ATTEMPTS = 200
DEFAULT_GRID_SIZE = 8


def normalize_words(
    words: Sequence[str],
    min_len: int = MIN_WORD_LENGTH,
    max_len: int = MAX_WORD_LENGTH,
) -> List[str]:
    """
    Keep purely alphabetic ASCII words within the length bounds.

    Words are upper-cased and de-duplicated, preserving first occurrence order.
    """
    result: List[str] = []
    seen = set()

    for word in words:
        word = word.strip()
        if not (word.isascii() and word.isalpha()):
            continue
        if not min_len <= len(word) <= max_len:
            continue
        word = word.upper()
        if word in seen:
            continue
        seen.add(word)
        result.append(word)

    return result


def target_word_count(
    available: int,
    min_words: int = MIN_WORDS,
    max_words: int = MAX_WORDS,
) -> int:
    """Number of words a puzzle aims to place: clamp(available, min, max)."""
    return min(max_words, max(min_words, available))


def select_words(
    pool: Sequence[str],
    count: int,
    rng: random.Random,
) -> List[str]:
    """Sample up to `count` unique words and order them longest first."""
    chosen = rng.sample(list(pool), min(count, len(pool)))
    chosen.sort(key=len, reverse=True)
    return chosen


def try_place(
    grid: List[List[str]],
    word: str,
    rng: random.Random,
    max_attempts: int = MAX_ATTEMPTS,
) -> Optional[PlacedWord]:
    """
    Try random positions for `word`, committing the first that fits.

    Returns the PlacedWord, or None when the attempt budget runs out.
    """
    size = len(grid)

    for _ in range(max_attempts):
        direction = rng.randrange(len(DIRECTIONS))
        start = Cell(rng.randrange(size), rng.randrange(size))

        if can_place_word(grid, word, start, direction):
            place_word(grid, word, start, direction)
            return PlacedWord(word=word, start=start, direction=direction)

    return None


def generate(
    words: Sequence[str],
    grid_size: int = DEFAULT_GRID_SIZE,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_ATTEMPTS,
    theme: str = "",
    min_words: int = MIN_WORDS,
    max_words: int = MAX_WORDS,
    min_word_length: int = MIN_WORD_LENGTH,
    max_word_length: int = MAX_WORD_LENGTH,
) -> Puzzle:
    """
    Generate a word search puzzle from a pool of candidate words.

    Args:
        words: Candidate words; anything outside the length bounds or
            containing non-letters is ignored
        grid_size: Width and height of the square grid
        rng: Random source (seed it for reproducible puzzles)
        max_attempts: Placement attempts per word before it is dropped
        theme: Theme name recorded on the puzzle

    Returns:
        Puzzle with a fully lettered grid and the words that were placed

    Raises:
        ValueError: If the grid is too small to hold any word
    """
    if grid_size < min_word_length:
        raise ValueError(
            f"Grid size {grid_size} is smaller than the minimum word length "
            f"({min_word_length})"
        )

    rng = rng or random.Random()
    grid = empty_grid(grid_size)

    pool = normalize_words(words, min_word_length, max_word_length)
    count = target_word_count(len(pool), min_words, max_words)
    to_place = select_words(pool, count, rng)

    placed_words: List[PlacedWord] = []
    warnings: List[GenerationWarning] = []

    if len(pool) < min_words:
        warnings.append(GenerationWarning(
            code="SHORT_WORD_POOL",
            message=f"Only {len(pool)} usable words available (wanted at least {min_words})",
        ))

    for word in to_place:
        placed = try_place(grid, word, rng, max_attempts)
        if placed is None:
            warnings.append(GenerationWarning(
                code="PLACEMENT_EXHAUSTED",
                message=f"Could not place '{word}' after {max_attempts} attempts; skipping it",
                word=word,
            ))
            continue
        placed_words.append(placed)

    # Such a puzzle can never be completed
    if not placed_words:
        warnings.append(GenerationWarning(
            code="NO_WORDS_PLACED",
            message="No words could be placed; the puzzle has nothing to find",
        ))

    fill_grid(grid, rng)

    return Puzzle(
        grid=grid,
        placed_words=placed_words,
        theme=theme,
        warnings=warnings,
    )
