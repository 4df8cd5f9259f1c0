"""
Puzzle verification for generated word search grids.

Validates:
1. Grid shape (square, every cell a single letter A-Z)
2. Placed words (4-8 uppercase letters, unique within the puzzle)
3. Placement integrity (every word reads back along its direction, in bounds)
"""

from typing import List

from .grid import ALPHABET, read_word, render_grid
from .models import Cell, Grid, PlacedWord, Puzzle, VerificationError, VerificationResult
from .generator import MIN_WORD_LENGTH, MAX_WORD_LENGTH


def validate_grid(grid: Grid) -> List[VerificationError]:
    """Validate grid shape and contents."""
    errors: List[VerificationError] = []
    size = len(grid)

    for i, row in enumerate(grid):
        if len(row) != size:
            errors.append(VerificationError(
                code="NOT_SQUARE",
                message=f"Row {i} has {len(row)} cells, expected {size}",
            ))
            continue

        for j, letter in enumerate(row):
            if letter == "":
                errors.append(VerificationError(
                    code="EMPTY_CELL",
                    message=f"Cell ({i}, {j}) is empty",
                    cell=Cell(i, j),
                ))
            elif len(letter) != 1 or letter not in ALPHABET:
                errors.append(VerificationError(
                    code="INVALID_LETTER",
                    message=f"Cell ({i}, {j}) holds '{letter}', expected a single letter A-Z",
                    cell=Cell(i, j),
                ))

    return errors


def validate_placements(grid: Grid, placed_words: List[PlacedWord]) -> List[VerificationError]:
    """Validate that every placed word is present where it claims to be."""
    errors: List[VerificationError] = []
    seen = set()

    for placed in placed_words:
        word = placed.word

        if word in seen:
            errors.append(VerificationError(
                code="DUPLICATE_WORD",
                message=f"'{word}' is placed more than once",
                word=word,
            ))
        seen.add(word)

        if not MIN_WORD_LENGTH <= len(word) <= MAX_WORD_LENGTH:
            errors.append(VerificationError(
                code="INVALID_WORD",
                message=(
                    f"'{word}' has {len(word)} letters, expected "
                    f"{MIN_WORD_LENGTH}-{MAX_WORD_LENGTH}"
                ),
                word=word,
            ))

        read_back = read_word(grid, placed)
        if read_back is None:
            errors.append(VerificationError(
                code="OUT_OF_BOUNDS",
                message=(
                    f"'{word}' starting at {tuple(placed.start)} in direction "
                    f"{placed.direction} leaves the grid"
                ),
                word=word,
                cell=placed.start,
            ))
        elif read_back != word:
            errors.append(VerificationError(
                code="WORD_MISMATCH",
                message=f"Expected '{word}' at {tuple(placed.start)}, grid reads '{read_back}'",
                word=word,
                cell=placed.start,
            ))

    return errors


def verify_puzzle(puzzle: Puzzle) -> VerificationResult:
    """
    Main verification function: checks a generated puzzle's invariants.

    Returns a VerificationResult with:
    - valid: True if the puzzle passes all checks
    - errors: List of broken invariants
    - words: Placed words in placement order
    - grid: Rendered grid string
    """
    errors = validate_grid(puzzle.grid)
    errors.extend(validate_placements(puzzle.grid, puzzle.placed_words))

    return VerificationResult(
        valid=len(errors) == 0,
        errors=errors,
        words=puzzle.words,
        grid=render_grid(puzzle.grid) if puzzle.grid else None,
    )
