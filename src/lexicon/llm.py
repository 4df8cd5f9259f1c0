import re
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, ConfigDict
import litellm

from .models import LexiconUnavailable
from .prompts import get_system_prompt, build_theme_prompt


class LLMLexicon(BaseModel):
    """
    Lexicon that asks an LLM (via LiteLLM) for words related to a theme.

    Each lookup is a single stateless system + user exchange. Extra fields
    passed at construction are forwarded to litellm.completion().
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra='allow')

    model: str
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    min_len: int = 4
    max_len: int = 8

    name: str = "llm"

    @property
    def additional_params(self) -> Dict[str, Any]:
        """Get additional parameters passed during initialization."""
        return self.__pydantic_extra__ if hasattr(self, '__pydantic_extra__') and self.__pydantic_extra__ else {}

    def build_messages(self, theme: str, max_results: int = 12) -> List[Dict[str, str]]:
        """
        Build the chat messages for a theme lookup.

        Returns:
            List of message dictionaries in OpenAI format
        """
        return [
            {"role": "system", "content": get_system_prompt(self.min_len, self.max_len)},
            {"role": "user", "content": build_theme_prompt(theme, max_results)},
        ]

    def completion(self, theme: str, max_results: int = 12, **kwargs: Any) -> Any:
        """
        Request related words for a theme.

        Args:
            theme: Theme keyword
            max_results: Number of words to ask for
            **kwargs: Additional arguments to pass to litellm.completion()

        Returns:
            The completion response from LiteLLM
        """
        params = {
            "model": self.model,
            "messages": self.build_messages(theme, max_results),
            "temperature": self.temperature,
            **self.additional_params,
            **kwargs
        }

        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens

        return litellm.completion(**params)

    @staticmethod
    def parse_words(content: str) -> List[str]:
        """Split a comma/newline separated reply into candidate words."""
        words = []
        for token in re.split(r'[,\n;]+', content):
            # Drop list numbering such as "1." or "2)"
            token = re.sub(r'^\s*\d+[.)]\s*', "", token).strip(" .\"'*-")
            if token:
                words.append(token)
        return words

    def fetch(self, theme: str, max_results: int = 12) -> List[str]:
        """
        Look up related words for a theme.

        Raises:
            LexiconUnavailable: If the LLM call fails or returns no content
        """
        try:
            response = self.completion(theme, max_results)
            content = response.choices[0].message.content or ""
        except Exception as e:
            raise LexiconUnavailable(f"LLM error: {str(e)}") from e

        words = self.parse_words(content)
        if not words:
            raise LexiconUnavailable("LLM returned no words")

        return words[:max_results]
