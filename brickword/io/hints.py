"""Hint providers for finished puzzles."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from ..core.exceptions import HintError
from ..utils.logger import get_logger
from .gemini_client import GeminiClient


LOGGER = get_logger(__name__)


class HintProvider(Protocol):
    def generate(self, words: Sequence[str], language: str = "English") -> str:
        """Return a short hint for the hidden words."""


class TemplateHintProvider:
    """Fallback hint listing word count and lengths."""

    def generate(self, words: Sequence[str], language: str = "English") -> str:
        cleaned = [word.strip() for word in words if word.strip()]
        if not cleaned:
            raise HintError("Cannot describe an empty word list")
        noun = "word" if len(cleaned) == 1 else "words"
        lengths = ", ".join(str(len(word)) for word in cleaned)
        return f"{len(cleaned)} {noun}: {lengths} letters"


class GeminiHintProvider:
    """LLM hint writer using Gemini."""

    HINT_PROMPT = (
        "You are writing the hint for a word puzzle in which players rebuild "
        "a small crossword from scattered letter bricks. "
        "The hidden words are: {words}. "
        "Write ONE sentence in {language} that points at what the words have in "
        "common. Never include any of the words or their obvious fragments. "
        "Respond with the sentence only."
    )

    def __init__(
        self,
        model_name: str = "gemini-2.5-flash",
        api_key_env: str = "GEMINI_API_KEY",
        model_env: str = "GEMINI_MODEL",
        gemini_client: GeminiClient | None = None,
    ) -> None:
        self.model_name = model_name
        self.api_key_env = api_key_env
        self.model_env = model_env
        self._client = gemini_client

    def generate(self, words: Sequence[str], language: str = "English") -> str:
        client = self._client or GeminiClient(
            model_name=self.model_name,
            api_key_env=self.api_key_env,
            model_env=self.model_env,
        )
        self._client = client
        text = client.generate_text(self.render_prompt(words, language))
        hint = self.parse_response(text)
        if not hint:
            raise HintError("Gemini returned an empty hint")
        for word in words:
            if word.strip() and word.strip().lower() in hint.lower():
                raise HintError(f"Gemini hint reveals the word '{word.strip()}'")
        return hint

    @classmethod
    def render_prompt(cls, words: Sequence[str], language: str = "English") -> str:
        return cls.HINT_PROMPT.format(
            words=", ".join(word.strip().upper() for word in words),
            language=language,
        )

    @staticmethod
    def parse_response(text: str) -> str:
        stripped = (text or "").strip()
        if stripped.startswith("```"):
            lines = stripped.splitlines()
            inner = lines[1:-1] if lines[-1].strip().startswith("```") else lines[1:]
            stripped = "\n".join(inner).strip()
        return " ".join(stripped.strip("\"'").split())


def resolve_hint(
    primary: HintProvider | None,
    fallbacks: Sequence[HintProvider],
    words: Sequence[str],
    language: str = "English",
) -> str:
    """Return the first non-empty hint from the primary provider or its fallbacks."""

    providers: List[HintProvider] = ([primary] if primary else []) + list(fallbacks)
    last_error: Optional[Exception] = None
    for provider in providers:
        try:
            hint = provider.generate(words, language=language)
        except Exception as exc:
            LOGGER.warning("Hint provider %s failed: %s", type(provider).__name__, exc)
            last_error = exc
            continue
        if hint:
            return hint
    raise HintError(f"No hint provider produced a hint (last error: {last_error})")
