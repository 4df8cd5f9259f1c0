"""Related-word lookups against the Datamuse API."""

from typing import Any, List

import httpx
from pydantic import BaseModel, Field

from .models import LexiconUnavailable


DATAMUSE_API_URL = "https://api.datamuse.com/words"


class DatamuseLexicon(BaseModel):
    """
    Fetches words with a meaning related to a theme ("ml" query).

    Only the `word` field of each result is consumed. Any transport or
    response-shape problem is raised as LexiconUnavailable.
    """

    base_url: str = DATAMUSE_API_URL
    timeout: float = Field(default=3.0, gt=0)

    name: str = "datamuse"

    def fetch(self, theme: str, max_results: int = 12) -> List[str]:
        """
        Query related words for a theme.

        Args:
            theme: Theme keyword, e.g. "Forest"
            max_results: Maximum number of results to request

        Returns:
            Raw word strings in the order the service ranked them

        Raises:
            LexiconUnavailable: On HTTP errors, timeouts or malformed data
        """
        try:
            response = httpx.get(
                self.base_url,
                params={"ml": theme, "max": max_results},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise LexiconUnavailable(f"Datamuse request failed: {e}") from e
        except ValueError as e:
            raise LexiconUnavailable(f"Datamuse returned invalid JSON: {e}") from e

        return self._extract_words(data)

    @staticmethod
    def _extract_words(data: Any) -> List[str]:
        if not isinstance(data, list):
            raise LexiconUnavailable(
                f"Unexpected Datamuse response: expected a list, got {type(data).__name__}"
            )

        return [
            item["word"]
            for item in data
            if isinstance(item, dict) and isinstance(item.get("word"), str)
        ]
