"""Theme word sources: remote lookups with a bundled static fallback."""

from .models import Theme, Category, WordTables, LexiconResult, LexiconUnavailable
from .tables import load_word_tables, pick_theme
from .datamuse import DatamuseLexicon, DATAMUSE_API_URL
from .llm import LLMLexicon
from .provider import LexiconProvider, StaticLexicon

__all__ = [
    "Theme",
    "Category",
    "WordTables",
    "LexiconResult",
    "LexiconUnavailable",
    "load_word_tables",
    "pick_theme",
    "DatamuseLexicon",
    "DATAMUSE_API_URL",
    "LLMLexicon",
    "LexiconProvider",
    "StaticLexicon",
]
