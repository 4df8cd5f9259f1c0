"""Resolve drag gestures into runs of grid cells."""

from typing import List, Sequence

from .grid import read_cells
from .models import Cell, Grid


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def is_straight_or_diagonal(start: Cell, end: Cell) -> bool:
    """True for horizontal, vertical and exact 45-degree lines."""
    d_row = end.row - start.row
    d_col = end.col - start.col
    return d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)


def resolve_line(start: Cell, end: Cell) -> List[Cell]:
    """
    Calculate all cells on the line from `start` to `end`, inclusive.

    Returns just the start cell if the two coincide or if the line is
    neither straight nor diagonal.
    """
    start, end = Cell(*start), Cell(*end)
    d_row = end.row - start.row
    d_col = end.col - start.col
    distance = max(abs(d_row), abs(d_col))

    if distance == 0 or not is_straight_or_diagonal(start, end):
        return [start]

    step_row, step_col = _sign(d_row), _sign(d_col)
    return [
        Cell(start.row + i * step_row, start.col + i * step_col)
        for i in range(distance + 1)
    ]


def letters_at(grid: Grid, cells: Sequence[Cell]) -> str:
    """Build the candidate string for a selection, in path order."""
    return read_cells(grid, [Cell(*c) for c in cells])
