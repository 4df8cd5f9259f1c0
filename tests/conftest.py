import random

import pytest

from src.puzzle import Cell, PlacedWord, Puzzle, empty_grid, fill_grid, place_word


def build_puzzle(placements, size=8, seed=0, theme="Test"):
    """Build a puzzle from (word, start, direction) placements."""
    grid = empty_grid(size)
    placed = []
    for word, start, direction in placements:
        place_word(grid, word, Cell(*start), direction)
        placed.append(PlacedWord(word=word, start=Cell(*start), direction=direction))
    fill_grid(grid, random.Random(seed))
    return Puzzle(grid=grid, placed_words=placed, theme=theme)


# TREE reads upwards along column 3, LEAF and MOSS read rightwards
STANDARD_PLACEMENTS = [
    ("TREE", (5, 3), 1),
    ("LEAF", (0, 0), 4),
    ("MOSS", (7, 0), 4),
]


@pytest.fixture
def make_puzzle():
    return build_puzzle


@pytest.fixture
def puzzle():
    return build_puzzle(STANDARD_PLACEMENTS)
