import random
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..lexicon import (
    DatamuseLexicon,
    LLMLexicon,
    LexiconProvider,
    LexiconResult,
    StaticLexicon,
    WordTables,
    load_word_tables,
    pick_theme,
)
from ..puzzle.generator import generate
from ..puzzle.models import Cell, Puzzle
from .models import (
    BackToWelcome,
    Event,
    Feedback,
    GameConfig,
    GameState,
    LexiconConfig,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    PuzzleFailed,
    PuzzleReady,
    PuzzleRequested,
    StartGame,
    Tick,
)
from .state import step, visible_effects


Listener = Callable[[Feedback], None]


def build_primary(config: LexiconConfig) -> Optional[Any]:
    """Create the remote lexicon named by the configuration, if any."""
    if config.provider == "datamuse":
        return DatamuseLexicon(base_url=config.base_url, timeout=config.timeout)

    if config.provider == "llm":
        llm_kwargs = {}
        # Extra config keys (e.g. api_base) are passed through to LiteLLM
        if hasattr(config, '__pydantic_extra__') and config.__pydantic_extra__:
            llm_kwargs.update(config.__pydantic_extra__)

        return LLMLexicon(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            **llm_kwargs
        )

    return None


class SessionController(BaseModel):
    """
    Top-level orchestrator for a play session.

    Owns the current GameState and replaces it on every event. Coordinates
    the lexicon provider and the grid generator when a puzzle is requested,
    and forwards feedback events to registered listeners.

    Attributes:
        config: Game configuration
        provider: Word source with static fallback
        tables: Category and theme word tables
        state: Current immutable game state
        last_lookup: Result of the most recent word lookup
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    provider: LexiconProvider = Field(default_factory=LexiconProvider)
    tables: WordTables = Field(default_factory=load_word_tables)
    state: GameState = Field(default_factory=GameState)
    last_lookup: Optional[LexiconResult] = None
    _rng: random.Random = None
    _listeners: List[Listener] = []

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.config.seed)
        self._listeners = []

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        **config_kwargs: Any
    ) -> "SessionController":
        """
        Factory method to create a controller with configured lexicons.

        Args:
            config: Optional GameConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured SessionController instance
        """
        if config is None:
            config = GameConfig(**config_kwargs)

        tables = load_word_tables(config.word_tables)
        provider = LexiconProvider(
            primary=build_primary(config.lexicon),
            fallback=StaticLexicon(tables=tables),
            min_len=config.min_word_length,
            max_len=config.max_word_length,
        )

        return cls(config=config, provider=provider, tables=tables)

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register a callback receiving every feedback event."""
        self._listeners.append(listener)

    def dispatch(self, event: Event) -> List[Feedback]:
        """Apply an event, store the new state and notify listeners."""
        self.state, feedback = step(self.state, event, self.config.points_per_letter)
        for item in feedback:
            for listener in self._listeners:
                listener(item)
        return feedback

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def start_game(self) -> None:
        """Move from the welcome screen to category selection."""
        self.dispatch(StartGame())

    def back_to_welcome(self) -> None:
        """Drop the current puzzle and reset score and level."""
        self.dispatch(BackToWelcome())

    def generate_puzzle(self, category: str) -> Puzzle:
        """
        Build a puzzle for a category without touching the session state.

        Picks a random theme, looks up candidate words (falling back to the
        theme's static list) and places them in a fresh grid.
        """
        theme = pick_theme(self.tables, category, self._rng)
        self.last_lookup = self.provider.lookup(
            theme.name,
            self.config.lexicon.max_results,
            static_words=theme.words,
        )

        return generate(
            self.last_lookup.words,
            grid_size=self.config.grid_size,
            rng=self._rng,
            max_attempts=self.config.max_attempts,
            theme=theme.name,
            min_words=self.config.min_words,
            max_words=self.config.max_words,
            min_word_length=self.config.min_word_length,
            max_word_length=self.config.max_word_length,
        )

    def new_puzzle(self, category: Optional[str] = None) -> Optional[Puzzle]:
        """
        Start a new puzzle in `category` (defaults to the current one).

        A generation error clears the loading flag before propagating, so
        the next request is accepted.

        Returns:
            The new puzzle, or None if the request was ignored because a
            puzzle is already loading or no category can be chosen here

        Raises:
            ValueError: If no category was given and none is selected
            KeyError: If the category is unknown
        """
        category = category or self.state.category
        if category is None:
            raise ValueError("No category selected")

        self.tables.category(category)

        # One outstanding request at a time
        if self.state.loading:
            return None

        self.dispatch(PuzzleRequested(category=category))
        if not self.state.loading:
            return None

        try:
            puzzle = self.generate_puzzle(category)
        except Exception as e:
            self.dispatch(PuzzleFailed(error=str(e)))
            raise

        self.dispatch(PuzzleReady(puzzle=puzzle))
        return puzzle

    def select_category(self, category: str) -> Optional[Puzzle]:
        """Pick a category and start its first puzzle."""
        return self.new_puzzle(category)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def pointer_down(self, row: int, col: int) -> List[Feedback]:
        return self.dispatch(PointerDown(cell=Cell(row, col)))

    def pointer_move(self, row: int, col: int) -> List[Feedback]:
        return self.dispatch(PointerMove(cell=Cell(row, col)))

    def pointer_up(self, at: Optional[float] = None) -> List[Feedback]:
        return self.dispatch(PointerUp() if at is None else PointerUp(at=at))

    def pointer_leave(self, at: Optional[float] = None) -> List[Feedback]:
        return self.dispatch(PointerLeave() if at is None else PointerLeave(at=at))

    def select(self, start: Cell, end: Cell) -> List[Feedback]:
        """Run a whole drag gesture from `start` to `end` and release it."""
        feedback = self.pointer_down(*start)
        feedback += self.pointer_move(*end)
        feedback += self.pointer_up()
        return feedback

    def tick(self, now: Optional[float] = None) -> List[Feedback]:
        """Advance the elapsed-time counter by one second."""
        return self.dispatch(Tick() if now is None else Tick(now=now))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def visible_effects(self, now: float) -> Dict[Cell, str]:
        return visible_effects(self.state, now)

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Returns:
            Dictionary summarising phase, puzzle progress and score
        """
        session = self.state.session
        return {
            "phase": self.state.phase,
            "category": self.state.category,
            "theme": self.state.theme,
            "level": self.state.level,
            "loading": self.state.loading,
            "score": session.score if session else 0,
            "elapsed_seconds": session.elapsed_seconds if session else 0,
            "complete": session.complete if session else False,
            "found_words": session.puzzle.found_words if session else [],
            "remaining_words": session.puzzle.remaining_words if session else [],
            "word_source": self.last_lookup.source if self.last_lookup else None,
        }
