"""Data models for puzzle generation, selection and matching."""

from typing import List, Optional, Literal, NamedTuple, Tuple
from pydantic import BaseModel, ConfigDict, Field


# Direction index -> (row delta, col delta)
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),  # up-left, up, up-right
    (0, -1),           (0, 1),   # left, right
    (1, -1),  (1, 0),  (1, 1),   # down-left, down, down-right
)

Grid = List[List[str]]


class Cell(NamedTuple):
    """A grid coordinate."""
    row: int
    col: int


class PlacedWord(BaseModel):
    """A target word committed to the grid at generation time."""
    model_config = ConfigDict(frozen=True)

    word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    start: Cell
    direction: int = Field(..., ge=0, le=7)
    found: bool = False

    def cells(self) -> List[Cell]:
        """All grid coordinates covered by the word, in reading order."""
        d_row, d_col = DIRECTIONS[self.direction]
        return [
            Cell(self.start.row + i * d_row, self.start.col + i * d_col)
            for i in range(len(self.word))
        ]


class GenerationWarning(BaseModel):
    """A recoverable problem encountered while generating a puzzle."""
    code: str
    message: str
    word: Optional[str] = None


class Puzzle(BaseModel):
    """A generated grid together with the words hidden in it."""
    model_config = ConfigDict(frozen=True)

    grid: Grid
    placed_words: List[PlacedWord] = Field(default_factory=list)
    theme: str = ""
    warnings: List[GenerationWarning] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.grid)

    @property
    def words(self) -> List[str]:
        return [p.word for p in self.placed_words]

    @property
    def found_words(self) -> List[str]:
        return [p.word for p in self.placed_words if p.found]

    @property
    def remaining_words(self) -> List[str]:
        return [p.word for p in self.placed_words if not p.found]

    @property
    def is_complete(self) -> bool:
        """True once every placed word has been found."""
        return bool(self.placed_words) and all(p.found for p in self.placed_words)


FeedbackKind = Literal["word-found", "word-incorrect", "puzzle-complete"]


class MatchEvent(BaseModel):
    """Observational signal emitted by the match engine."""
    kind: FeedbackKind
    cells: List[Cell] = Field(default_factory=list)
    word: Optional[str] = None


class MatchResult(BaseModel):
    """Outcome of checking one completed selection."""
    candidate: str
    cells: List[Cell] = Field(default_factory=list)
    word: Optional[str] = None
    score_delta: int = 0
    completed: bool = False
    puzzle: Puzzle
    events: List[MatchEvent] = Field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.word is not None


class VerificationError(BaseModel):
    """A single broken puzzle invariant."""
    code: str
    message: str
    word: Optional[str] = None
    cell: Optional[Cell] = None


class VerificationResult(BaseModel):
    """Result of checking a generated puzzle."""
    valid: bool
    errors: List[VerificationError] = Field(default_factory=list)
    words: List[str] = Field(default_factory=list)
    grid: Optional[str] = None
