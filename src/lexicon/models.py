"""
Pydantic models for the lexicon layer.

Word tables (category -> theme -> words), lookup results, and the exception
raised by remote lexicons when they cannot produce usable data.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class LexiconUnavailable(Exception):
    """A remote lexicon failed or returned too few usable words."""


class Theme(BaseModel):
    """A named word list within a category."""
    name: str = Field(..., min_length=1)
    words: List[str] = Field(default_factory=list)


class Category(BaseModel):
    """A group of themes the player picks from."""
    name: str
    themes: List[Theme] = Field(..., min_length=1)

    def theme(self, name: str) -> Theme:
        """Look up a theme by name (case-insensitive)."""
        for theme in self.themes:
            if theme.name.lower() == name.lower():
                return theme
        raise KeyError(f"Unknown theme '{name}' in category '{self.name}'")


class WordTables(BaseModel):
    """The bundled static word lists, keyed by category id."""
    categories: Dict[str, Category] = Field(default_factory=dict)

    def category(self, key: str) -> Category:
        if key not in self.categories:
            known = ", ".join(sorted(self.categories))
            raise KeyError(f"Unknown category '{key}' (known: {known})")
        return self.categories[key]

    def find_theme(self, name: str) -> Optional[Theme]:
        """Find a theme by name across every category."""
        for category in self.categories.values():
            for theme in category.themes:
                if theme.name.lower() == name.lower():
                    return theme
        return None


class LexiconResult(BaseModel):
    """Outcome of a candidate-word lookup."""
    theme: str
    words: List[str] = Field(default_factory=list)
    source: str = "static"  # "datamuse", "llm" or "static"
    error: Optional[str] = None  # Why the remote lookup was not used, if it failed

    @property
    def used_fallback(self) -> bool:
        return self.source == "static"
