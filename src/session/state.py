"""
State transitions for a play session.

`step(state, event)` is the single place the game state changes. It never
mutates its input: each event produces a new GameState snapshot and the list
of feedback events the presentation layer should react to. Events that do
not apply in the current phase leave the state untouched and emit nothing.
"""

from typing import Dict, List, Tuple

from ..puzzle.match import check_selection, POINTS_PER_LETTER
from ..puzzle.models import Cell, MatchResult
from ..puzzle.selection import resolve_line
from .models import (
    BackToWelcome,
    CellEffect,
    Event,
    Feedback,
    GameState,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    PuzzleFailed,
    PuzzleReady,
    PuzzleRequested,
    PuzzleSession,
    Selection,
    StartGame,
    Tick,
)


FOUND_ANIMATION_SECONDS = 0.5
INCORRECT_FLASH_SECONDS = 0.3

Transition = Tuple[GameState, List[Feedback]]


def format_elapsed(seconds: int) -> str:
    """Format seconds as MM:SS."""
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"


def visible_effects(state: GameState, now: float) -> Dict[Cell, str]:
    """
    Effect to display per cell at time `now`.

    Later effects override earlier ones on the same cell; expired effects
    are skipped so an underlying persistent highlight shows through again.
    """
    visible: Dict[Cell, str] = {}
    for effect in state.effects:
        if effect.active(now):
            visible[effect.cell] = effect.kind
    return visible


def _in_grid(state: GameState, cell: Cell) -> bool:
    size = state.session.puzzle.size
    return 0 <= cell.row < size and 0 <= cell.col < size


def _start_game(state: GameState) -> Transition:
    if state.phase != "welcome":
        return state, []
    return state.model_copy(update={"phase": "category"}), []


def _request_puzzle(state: GameState, event: PuzzleRequested) -> Transition:
    # One outstanding request at a time
    if state.loading or state.phase == "welcome":
        return state, []
    return state.model_copy(update={"loading": True, "category": event.category}), []


def _puzzle_ready(state: GameState, event: PuzzleReady) -> Transition:
    if not state.loading:
        return state, []

    # Score carries over between consecutive puzzles
    score = state.session.score if state.session else 0
    session = PuzzleSession(puzzle=event.puzzle, score=score)

    new_state = state.model_copy(update={
        "phase": "playing",
        "theme": event.puzzle.theme,
        "level": state.level + 1,
        "loading": False,
        "session": session,
        "selection": None,
        "effects": [],
    })
    return new_state, [Feedback(kind="score-changed", score=score)]


def _puzzle_failed(state: GameState) -> Transition:
    if not state.loading:
        return state, []
    # The previous puzzle, if any, stays playable
    return state.model_copy(update={"loading": False}), []


def _pointer_down(state: GameState, event: PointerDown) -> Transition:
    if not state.accepting_input or state.selection is not None:
        return state, []

    cell = Cell(*event.cell)
    if not _in_grid(state, cell):
        return state, []

    selection = Selection(start=cell, end=cell, cells=[cell])
    return (
        state.model_copy(update={"selection": selection}),
        [Feedback(kind="cells-selected", cells=[cell])],
    )


def _pointer_move(state: GameState, event: PointerMove) -> Transition:
    selection = state.selection
    if not state.accepting_input or selection is None:
        return state, []

    cell = Cell(*event.cell)
    if cell == selection.end or not _in_grid(state, cell):
        return state, []

    # Recomputed from the fixed start on every move
    cells = resolve_line(selection.start, cell)
    selection = Selection(start=selection.start, end=cell, cells=cells)
    return (
        state.model_copy(update={"selection": selection}),
        [Feedback(kind="cells-selected", cells=cells)],
    )


def _match_effects(result: MatchResult, at: float) -> List[CellEffect]:
    if result.matched:
        effects = []
        for cell in result.cells:
            effects.append(CellEffect(cell=cell, kind="found"))
            effects.append(CellEffect(
                cell=cell,
                kind="found-animating",
                expires_at=at + FOUND_ANIMATION_SECONDS,
            ))
        return effects

    return [
        CellEffect(cell=cell, kind="incorrect", expires_at=at + INCORRECT_FLASH_SECONDS)
        for cell in result.cells
    ]


def _release(state: GameState, at: float, points_per_letter: int) -> Transition:
    selection = state.selection
    if selection is None:
        return state, []

    if not state.accepting_input:
        return state.model_copy(update={"selection": None}), []

    session = state.session
    result = check_selection(session.puzzle, selection.cells, points_per_letter=points_per_letter)

    score = session.score + result.score_delta
    session = session.model_copy(update={
        "puzzle": result.puzzle,
        "score": score,
        "complete": session.complete or result.completed,
    })

    feedback: List[Feedback] = []
    for event in result.events:
        if event.kind == "word-found":
            feedback.append(Feedback(kind="word-found", cells=event.cells, word=event.word))
            feedback.append(Feedback(kind="score-changed", score=score))
        else:
            feedback.append(Feedback(kind=event.kind, cells=event.cells, word=event.word))

    new_state = state.model_copy(update={
        "session": session,
        "selection": None,
        "effects": list(state.effects) + _match_effects(result, at),
    })
    return new_state, feedback


def _tick(state: GameState, event: Tick) -> Transition:
    effects = [e for e in state.effects if e.active(event.now)]

    if not state.accepting_input:
        if len(effects) == len(state.effects):
            return state, []
        return state.model_copy(update={"effects": effects}), []

    seconds = state.session.elapsed_seconds + 1
    session = state.session.model_copy(update={"elapsed_seconds": seconds})
    return (
        state.model_copy(update={"session": session, "effects": effects}),
        [Feedback(kind="timer-tick", seconds=seconds)],
    )


def _back_to_welcome(state: GameState) -> Transition:
    return GameState(), []


def step(
    state: GameState,
    event: Event,
    points_per_letter: int = POINTS_PER_LETTER,
) -> Transition:
    """
    Apply one event to the game state.

    Args:
        state: Current snapshot (left unchanged)
        event: The input event
        points_per_letter: Score awarded per letter of a found word

    Returns:
        Tuple of (new state, feedback events in emission order)
    """
    if isinstance(event, StartGame):
        return _start_game(state)
    if isinstance(event, PuzzleRequested):
        return _request_puzzle(state, event)
    if isinstance(event, PuzzleReady):
        return _puzzle_ready(state, event)
    if isinstance(event, PuzzleFailed):
        return _puzzle_failed(state)
    if isinstance(event, PointerDown):
        return _pointer_down(state, event)
    if isinstance(event, PointerMove):
        return _pointer_move(state, event)
    if isinstance(event, (PointerUp, PointerLeave)):
        return _release(state, event.at, points_per_letter)
    if isinstance(event, Tick):
        return _tick(state, event)
    if isinstance(event, BackToWelcome):
        return _back_to_welcome(state)

    raise ValueError(f"Unknown event: {event!r}")
