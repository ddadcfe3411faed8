"""Anthropic provider integration."""

import logging
from typing import Any

import anthropic
from anthropic import Anthropic, AsyncAnthropic

from .base import BaseLLMProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(BaseLLMProvider):
    """Anthropic API integration for quiz question generation."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-5-20250929"):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Model to use (default: claude-sonnet-4-5-20250929)
        """
        super().__init__(api_key, model)
        self.client = Anthropic(api_key=api_key)
        self.async_client = AsyncAnthropic(api_key=api_key)

    @staticmethod
    def _extract_text(response: Any) -> str:
        if response.content and len(response.content) > 0:
            return response.content[0].text
        logger.warning("Anthropic API returned empty response")
        return ""

    def generate_completion(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        **kwargs: Any,
    ) -> str:
        """
        Generate a text completion using the Anthropic API.

        Raises:
            LLMProviderError: If the API call fails
        """
        try:
            response = self.client.messages.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
            return self._extract_text(response)
        except anthropic.AnthropicError as e:
            raise self._handle_api_error(e) from e

    async def generate_completion_async(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        **kwargs: Any,
    ) -> str:
        """Async variant of ``generate_completion``."""
        try:
            response = await self.async_client.messages.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
            return self._extract_text(response)
        except anthropic.AnthropicError as e:
            raise self._handle_api_error(e) from e
