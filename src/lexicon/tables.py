"""Loading and sampling the bundled word tables."""

import random
from pathlib import Path
from typing import Optional

import yaml

from .models import Theme, WordTables


_DATA_FILE = Path(__file__).parent / "data" / "themes.yaml"


def load_word_tables(path: Optional[str | Path] = None) -> WordTables:
    """
    Load category/theme word lists from a YAML file.

    Args:
        path: Custom table file (defaults to the bundled themes.yaml)

    Returns:
        Validated WordTables

    Raises:
        FileNotFoundError: If the table file does not exist
    """
    path = Path(path) if path else _DATA_FILE

    if not path.exists():
        raise FileNotFoundError(f"Word table file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return WordTables(categories=data)


def pick_theme(
    tables: WordTables,
    category: str,
    rng: Optional[random.Random] = None,
) -> Theme:
    """Pick a theme uniformly at random from a category."""
    rng = rng or random.Random()
    return rng.choice(tables.category(category).themes)
