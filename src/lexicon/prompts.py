"""Prompt templates for LLM-backed word lookups."""

SYSTEM_PROMPT = """You supply vocabulary for a casual word search puzzle.

When given a theme, reply with single English words closely related to it.

Rules:
- Letters only: no spaces, hyphens, digits or punctuation
- Between {min_len} and {max_len} letters long
- Common words a casual player would recognise
- No proper nouns and no repeats

Reply with the words only, comma separated, on a single line."""


def get_system_prompt(min_len: int = 4, max_len: int = 8) -> str:
    """Get the system prompt with the word length bounds filled in."""
    return SYSTEM_PROMPT.format(min_len=min_len, max_len=max_len)


def build_theme_prompt(theme: str, max_results: int = 12) -> str:
    """Build the user prompt asking for words related to a theme."""
    return f"Theme: {theme}\nGive me {max_results} words."
