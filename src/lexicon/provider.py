"""
Candidate word lookup with a guaranteed static fallback.

A LexiconProvider composes an optional remote lexicon (Datamuse or an LLM)
with the bundled word tables. Remote failures never escape: they are recorded
on the LexiconResult and the static list for the theme is returned instead.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..puzzle.generator import normalize_words, MIN_WORDS, MIN_WORD_LENGTH, MAX_WORD_LENGTH
from .models import LexiconResult, LexiconUnavailable, WordTables
from .tables import load_word_tables


class StaticLexicon(BaseModel):
    """Total lexicon backed by the bundled word tables."""

    tables: WordTables = Field(default_factory=load_word_tables)

    def words_for(self, theme: str) -> List[str]:
        """Static words for a theme, or an empty list if the theme is unknown."""
        found = self.tables.find_theme(theme)
        return list(found.words) if found else []


class LexiconProvider(BaseModel):
    """
    Two-stage word source: fallible remote lookup, then static fallback.

    Attributes:
        primary: Remote lexicon tried first (anything with `name` and
            `fetch(theme, max_results)`); None for offline play
        fallback: Static lexicon used when the primary is unavailable
        min_usable: Minimum usable words for a remote result to be accepted
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    primary: Optional[Any] = None
    fallback: StaticLexicon = Field(default_factory=StaticLexicon)
    min_usable: int = MIN_WORDS
    min_len: int = MIN_WORD_LENGTH
    max_len: int = MAX_WORD_LENGTH

    def _fetch_primary(self, theme: str, max_results: int) -> List[str]:
        try:
            words = normalize_words(self.primary.fetch(theme, max_results), self.min_len, self.max_len)
        except LexiconUnavailable:
            raise
        except Exception as e:
            raise LexiconUnavailable(f"{self.primary.name} lookup failed: {e}") from e

        if len(words) < self.min_usable:
            raise LexiconUnavailable(
                f"{self.primary.name} returned {len(words)} usable words "
                f"(need at least {self.min_usable})"
            )
        return words

    def lookup(
        self,
        theme: str,
        max_results: int = 12,
        static_words: Optional[List[str]] = None,
    ) -> LexiconResult:
        """
        Look up candidate words for a theme.

        Args:
            theme: Theme keyword
            max_results: Maximum words requested from the remote lexicon
            static_words: Fallback words to use instead of the table lookup

        Returns:
            LexiconResult naming the source actually used
        """
        error = None

        if self.primary is not None:
            try:
                words = self._fetch_primary(theme, max_results)
                return LexiconResult(theme=theme, words=words, source=self.primary.name)
            except LexiconUnavailable as e:
                error = str(e)

        if static_words is None:
            static_words = self.fallback.words_for(theme)

        return LexiconResult(
            theme=theme,
            words=normalize_words(static_words, self.min_len, self.max_len),
            source="static",
            error=error,
        )

    def get_candidate_words(self, theme: str, max_results: int = 12) -> List[str]:
        """Candidate words for a theme; never raises for lookup failures."""
        return self.lookup(theme, max_results).words
