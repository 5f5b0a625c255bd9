"""Gemini REST client used by the hint providers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class GeminiAPIError(RuntimeError):
    """Raised when the Gemini API responds with an error payload."""


@dataclass
class GenerationSettings:
    """Sampling settings sent with every request.

    Hints are a single sentence, so the defaults keep replies short.
    """

    temperature: float = 0.9
    max_output_tokens: int = 256

    def to_payload(self) -> Dict[str, Any]:
        return {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "candidateCount": 1,
        }


class GeminiClient:
    """Sends one-shot text prompts to the Gemini ``generateContent`` endpoint."""

    API_BASE = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        model_name: str = "gemini-2.5-flash",
        api_key_env: str = "GEMINI_API_KEY",
        model_env: str = "GEMINI_MODEL",
        timeout_seconds: float = 30.0,
        settings: Optional[GenerationSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        api_key = os.environ.get(api_key_env)
        if not api_key:
            raise RuntimeError(f"Missing Gemini API key in environment variable {api_key_env}")
        self.model_name = os.environ.get(model_env, model_name)
        self.timeout_seconds = timeout_seconds
        self.settings = settings or GenerationSettings()
        self._session = session or requests.Session()
        self._session.headers.update({"x-goog-api-key": api_key})

    @property
    def endpoint(self) -> str:
        return f"{self.API_BASE}/models/{self.model_name}:generateContent"

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": self.settings.to_payload(),
        }

    def generate_text(self, prompt: str) -> str:
        """Return the text of the first candidate for ``prompt``."""
        try:
            response = self._session.post(
                self.endpoint, json=self.build_payload(prompt), timeout=self.timeout_seconds
            )
        except requests.RequestException as exc:
            raise GeminiAPIError(f"Gemini request failed: {exc}") from exc
        if not response.ok:
            raise GeminiAPIError(
                f"Gemini returned HTTP {response.status_code}: {self.error_message(response)}"
            )

        data = response.json()
        block_reason = (data.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise GeminiAPIError(f"Gemini blocked the prompt ({block_reason})")
        text = self.extract_text(data)
        if not text:
            LOGGER.warning("Gemini response without text for model %s: %s", self.model_name, data)
            raise GeminiAPIError("Gemini API response missing text candidates")
        LOGGER.debug("Gemini replied with %d characters", len(text))
        return text

    @staticmethod
    def error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200]
        return (body.get("error") or {}).get("message") or str(body)[:200]

    @staticmethod
    def extract_text(payload: Dict[str, Any]) -> Optional[str]:
        """Join the text parts of the first candidate that has any."""
        candidates: List[Dict[str, Any]] = payload.get("candidates") or []
        for candidate in candidates:
            parts: List[Dict[str, Any]] = (candidate.get("content") or {}).get("parts") or []
            text = "".join(part.get("text") or "" for part in parts)
            if text:
                return text
        return None
