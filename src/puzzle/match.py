"""
Match engine: validate a completed selection against the target words.

A selection counts when its letters equal an unfound target word read either
forwards or backwards. Matching is pure: the caller receives a new Puzzle
snapshot with the word marked found, plus the score delta and the feedback
events to forward to the presentation layer.
"""

from typing import List, Optional, Sequence

from .models import Cell, MatchEvent, MatchResult, PlacedWord, Puzzle
from .selection import letters_at


POINTS_PER_LETTER = 15


def find_target(placed_words: Sequence[PlacedWord], candidate: str) -> Optional[int]:
    """
    Index of the first unfound word equal to `candidate` or its reversal.

    When two targets are reverses of each other the earlier one in the list
    wins.
    """
    reversed_candidate = candidate[::-1]

    for i, placed in enumerate(placed_words):
        if placed.found:
            continue
        if placed.word == candidate or placed.word == reversed_candidate:
            return i

    return None


def mark_found(puzzle: Puzzle, index: int) -> Puzzle:
    """Return a copy of the puzzle with one placed word marked found."""
    placed_words = list(puzzle.placed_words)
    placed_words[index] = placed_words[index].model_copy(update={"found": True})
    return puzzle.model_copy(update={"placed_words": placed_words})


def check_selection(
    puzzle: Puzzle,
    cells: Sequence[Cell],
    letters: Optional[str] = None,
    points_per_letter: int = POINTS_PER_LETTER,
) -> MatchResult:
    """
    Check a completed selection.

    Args:
        puzzle: Current puzzle snapshot
        cells: Selected cells in path order
        letters: Candidate string; read from the grid at `cells` when omitted
        points_per_letter: Score awarded per letter of a found word

    Returns:
        MatchResult with the updated puzzle, score delta and events
    """
    cells = [Cell(*c) for c in cells]
    candidate = letters if letters is not None else letters_at(puzzle.grid, cells)

    index = find_target(puzzle.placed_words, candidate)

    if index is None:
        return MatchResult(
            candidate=candidate,
            cells=cells,
            puzzle=puzzle,
            events=[MatchEvent(kind="word-incorrect", cells=cells)],
        )

    word = puzzle.placed_words[index].word
    updated = mark_found(puzzle, index)
    completed = updated.is_complete

    events: List[MatchEvent] = [MatchEvent(kind="word-found", cells=cells, word=word)]
    if completed:
        events.append(MatchEvent(kind="puzzle-complete"))

    return MatchResult(
        candidate=candidate,
        cells=cells,
        word=word,
        score_delta=len(word) * points_per_letter,
        completed=completed,
        puzzle=updated,
        events=events,
    )
