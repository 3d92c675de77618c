"""LLM Provider implementation using Anthropic Claude API."""

import os
from typing import Protocol

import anthropic

from ..errors import RecommendationError

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"


class ILLMProvider(Protocol):
    """Abstraction for LLM access."""

    async def complete(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int = 64,
    ) -> str:
        """Generate completion."""
        ...


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model or DEFAULT_MODEL
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def complete(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 64,
    ) -> str:
        """Generate completion using Claude API."""
        kwargs = {}
        if system:
            kwargs["system"] = system
        try:
            response = await self._client.messages.create(
                model=self._model,
                messages=messages,
                max_tokens=max_tokens,
                **kwargs,
            )
        except anthropic.APIError as e:
            raise RecommendationError(f"LLM API error: {e}") from e

        if not response.content:
            raise RecommendationError("LLM returned an empty response")
        return response.content[0].text
