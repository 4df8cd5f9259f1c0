"""Grid building and rendering utilities."""

import random
import string
from typing import List, Optional, Sequence

from .models import DIRECTIONS, Cell, Grid, PlacedWord


EMPTY = ""
ALPHABET = string.ascii_uppercase


def empty_grid(size: int) -> Grid:
    """Create a size x size grid with every cell empty."""
    return [[EMPTY for _ in range(size)] for _ in range(size)]


def in_bounds(grid: Grid, cell: Cell) -> bool:
    size = len(grid)
    return 0 <= cell.row < size and 0 <= cell.col < size


def can_place_word(grid: Grid, word: str, start: Cell, direction: int) -> bool:
    """
    Check whether `word` fits at `start` along `direction`.

    Every letter must land inside the grid, and each target cell must be
    either empty or already hold the same letter.
    """
    d_row, d_col = DIRECTIONS[direction]

    for i, letter in enumerate(word):
        cell = Cell(start.row + i * d_row, start.col + i * d_col)

        if not in_bounds(grid, cell):
            return False

        existing = grid[cell.row][cell.col]
        if existing != EMPTY and existing != letter:
            return False

    return True


def place_word(grid: Grid, word: str, start: Cell, direction: int) -> List[Cell]:
    """Write `word` into the grid and return the cells it covers."""
    d_row, d_col = DIRECTIONS[direction]
    cells = []

    for i, letter in enumerate(word):
        cell = Cell(start.row + i * d_row, start.col + i * d_col)
        grid[cell.row][cell.col] = letter
        cells.append(cell)

    return cells


def fill_grid(grid: Grid, rng: Optional[random.Random] = None) -> Grid:
    """Fill every empty cell with a uniformly random uppercase letter."""
    rng = rng or random.Random()

    for row in grid:
        for j, letter in enumerate(row):
            if letter == EMPTY:
                row[j] = rng.choice(ALPHABET)

    return grid


def read_cells(grid: Grid, cells: Sequence[Cell]) -> str:
    """Read the letters at `cells` in path order."""
    return "".join(grid[cell.row][cell.col] for cell in cells)


def read_word(grid: Grid, placed: PlacedWord) -> Optional[str]:
    """
    Read back the letters a placed word claims to cover.

    Returns None if any of its cells falls outside the grid.
    """
    cells = placed.cells()
    if not all(in_bounds(grid, c) for c in cells):
        return None
    return read_cells(grid, cells)


def render_grid(grid: Grid, highlight: Optional[Sequence[Cell]] = None) -> str:
    """Render the grid to a string, lowercasing any highlighted cells."""
    if not grid:
        return ""

    marked = set(highlight or [])
    lines = [
        " ".join(
            letter.lower() if (i, j) in marked else (letter or ".")
            for j, letter in enumerate(row)
        )
        for i, row in enumerate(grid)
    ]

    return "\n".join(lines)
