"""Tests for LLMProvider."""

from unittest.mock import AsyncMock, Mock, patch

import anthropic
import httpx
import pytest

from supportnet.errors import RecommendationError
from supportnet.llm import LLMProvider
from supportnet.llm.llm_provider import DEFAULT_MODEL


def mock_client_returning(*texts: str) -> Mock:
    mock_client = Mock()
    mock_response = Mock()
    mock_response.content = [Mock(text=text) for text in texts]
    mock_client.messages.create = AsyncMock(return_value=mock_response)
    return mock_client


class TestLLMProviderInit:
    """Tests for LLMProvider initialization."""

    def test_init_with_api_key(self, monkeypatch):
        """Test initialization with API key from the environment."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")

        with patch("supportnet.llm.llm_provider.anthropic.AsyncAnthropic") as client_cls:
            provider = LLMProvider()
            assert provider is not None
            client_cls.assert_called_once_with(api_key="test_key")

    def test_init_without_api_key(self, monkeypatch):
        """Test initialization without API key raises error."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with patch("supportnet.llm.llm_provider.anthropic.AsyncAnthropic"):
            with pytest.raises(ValueError):
                LLMProvider()


class TestLLMProviderComplete:
    """Tests for LLMProvider.complete() method."""

    @pytest.mark.asyncio
    async def test_complete_returns_response(self):
        """Test that complete() returns the first text block."""
        mock_client = mock_client_returning("2d 4h")

        with patch(
            "supportnet.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider(api_key="test_key")
            response = await provider.complete(messages=[{"role": "user", "content": "Hello"}])

        assert response == "2d 4h"

    @pytest.mark.asyncio
    async def test_complete_sends_correct_format(self):
        """Test that complete() passes model, system and max_tokens."""
        mock_client = mock_client_returning("4h")

        with patch(
            "supportnet.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider(api_key="test_key")
            await provider.complete(
                messages=[{"role": "user", "content": "Hello"}],
                system="Answer with an interval",
                max_tokens=32,
            )

        mock_client.messages.create.assert_called_once_with(
            model=DEFAULT_MODEL,
            messages=[{"role": "user", "content": "Hello"}],
            max_tokens=32,
            system="Answer with an interval",
        )

    @pytest.mark.asyncio
    async def test_complete_omits_empty_system(self):
        mock_client = mock_client_returning("4h")

        with patch(
            "supportnet.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider(api_key="test_key", model="custom-model")
            await provider.complete(messages=[{"role": "user", "content": "Hello"}])

        kwargs = mock_client.messages.create.call_args.kwargs
        assert "system" not in kwargs
        assert kwargs["model"] == "custom-model"

    @pytest.mark.asyncio
    async def test_api_error_raises_recommendation_error(self):
        """Test API failures surface as RecommendationError."""
        mock_client = Mock()
        mock_client.messages.create = AsyncMock(
            side_effect=anthropic.APIConnectionError(
                request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
            )
        )

        with patch(
            "supportnet.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider(api_key="test_key")
            with pytest.raises(RecommendationError):
                await provider.complete(messages=[{"role": "user", "content": "Hello"}])

    @pytest.mark.asyncio
    async def test_empty_response_raises_recommendation_error(self):
        mock_client = mock_client_returning()

        with patch(
            "supportnet.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider(api_key="test_key")
            with pytest.raises(RecommendationError, match="empty"):
                await provider.complete(messages=[{"role": "user", "content": "Hello"}])
