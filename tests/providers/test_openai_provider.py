"""Tests for OpenAI provider integration."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError

from quizgen.error_classifier import ErrorCategory
from quizgen.providers.base import LLMProviderError
from quizgen.providers.openai_provider import OpenAIProvider


def make_chat_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


class TestOpenAIProvider:
    """Test suite for OpenAIProvider."""

    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    def test_initialization(self, mock_openai_class, mock_async_openai_class):
        """Test that provider initializes correctly."""
        provider = OpenAIProvider(api_key="test-key", model="gpt-4o", organization="org-1")

        assert provider.model == "gpt-4o"
        assert provider.get_provider_name() == "openai"
        mock_openai_class.assert_called_once_with(api_key="test-key", organization="org-1")

    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    def test_default_model(self, mock_openai_class, mock_async_openai_class):
        """Test that default model is set correctly."""
        assert OpenAIProvider(api_key="test-key").model == "gpt-4o-mini"

    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    def test_generate_completion_success(self, mock_openai_class, mock_async_openai_class):
        """Test successful text completion generation."""
        mock_client = MagicMock()
        mock_openai_class.return_value = mock_client
        mock_client.chat.completions.create.return_value = make_chat_response("quiz json")

        provider = OpenAIProvider(api_key="test-key")
        result = provider.generate_completion("prompt", temperature=0.5, max_tokens=500)

        assert result == "quiz json"
        mock_client.chat.completions.create.assert_called_once_with(
            model="gpt-4o-mini",
            messages=[{"role": "user", "content": "prompt"}],
            temperature=0.5,
            max_tokens=500,
        )

    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    def test_empty_content_returns_empty_string(self, mock_openai_class, mock_async_openai_class):
        """Test a null message body becomes an empty string."""
        mock_client = MagicMock()
        mock_openai_class.return_value = mock_client
        mock_client.chat.completions.create.return_value = make_chat_response(None)

        assert OpenAIProvider(api_key="test-key").generate_completion("prompt") == ""

    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    def test_generate_completion_api_error(self, mock_openai_class, mock_async_openai_class):
        """Test API errors are classified and wrapped."""
        mock_client = MagicMock()
        mock_openai_class.return_value = mock_client
        mock_client.chat.completions.create.side_effect = OpenAIError("Invalid API key provided")

        provider = OpenAIProvider(api_key="test-key")

        with pytest.raises(LLMProviderError) as exc_info:
            provider.generate_completion("prompt")

        assert exc_info.value.classified_error.category == ErrorCategory.AUTHENTICATION
        assert exc_info.value.classified_error.is_retryable is False

    @pytest.mark.asyncio
    @patch("quizgen.providers.openai_provider.AsyncOpenAI")
    @patch("quizgen.providers.openai_provider.OpenAI")
    async def test_generate_completion_async(self, mock_openai_class, mock_async_openai_class):
        """Test the async path uses the async client."""
        mock_async_client = MagicMock()
        mock_async_openai_class.return_value = mock_async_client
        mock_async_client.chat.completions.create = AsyncMock(
            return_value=make_chat_response("async quiz")
        )

        provider = OpenAIProvider(api_key="test-key")

        assert await provider.generate_completion_async("prompt") == "async quiz"
        mock_async_client.chat.completions.create.assert_awaited_once()
