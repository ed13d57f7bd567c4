"""Gemini generateContent client for recipe generation."""

import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from unibite.domain.errors import (
    ConfigurationError,
    RecipeFormatError,
    RecipeRequestError,
)
from unibite.services.recipes import RecipeClient

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-pro"


@dataclass
class HttpxGeminiClient(RecipeClient):
    """HTTPX-backed client for the Gemini REST API."""

    api_key: str | None
    http_client: httpx.AsyncClient
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL

    @classmethod
    def create(
        cls,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
    ) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        if not api_key:
            logger.warning(
                "Gemini API key is missing. Set GEMINI_API_KEY to enable "
                "recipe generation."
            )
        return cls(
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            model=model,
            base_url=base_url,
        )

    async def generate_text(self, prompt: str, temperature: float) -> str:
        """Send a single generateContent request and return the raw text."""
        if not self.api_key:
            raise ConfigurationError("Gemini API key is not configured.")

        url = f"{self.base_url}/models/{quote(self.model, safe='')}:generateContent"
        response = await self.http_client.post(
            url,
            params={"key": self.api_key},
            json={
                "contents": [{"role": "user", "parts": [{"text": prompt}]}],
                "generationConfig": {"temperature": temperature},
            },
        )
        if not response.is_success:
            raise RecipeRequestError(response.text, upstream_status=response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise RecipeFormatError("Unexpected AI response format.") from exc
        raw_text = _first_candidate_text(payload)
        if not raw_text or not isinstance(raw_text, str):
            raise RecipeFormatError("Unexpected AI response format.")
        return raw_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _first_candidate_text(payload: object) -> object:
    """Return ``candidates[0].content.parts[0].text`` if present."""
    try:
        return payload["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError):
        return None
