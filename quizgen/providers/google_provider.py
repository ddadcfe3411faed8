"""Google Generative AI (Gemini) provider integration."""

from typing import Any

import google.generativeai as genai
from google.generativeai.types import GenerationConfig

from .base import BaseLLMProvider


class GoogleProvider(BaseLLMProvider):
    """Gemini integration for quiz question generation."""

    def __init__(self, api_key: str, model: str = "gemini-1.5-pro", top_p: float = 0.95):
        """
        Initialize Google provider.

        Args:
            api_key: Google API key
            model: Model to use (default: gemini-1.5-pro)
            top_p: Nucleus sampling parameter
        """
        super().__init__(api_key, model)
        self.top_p = top_p
        genai.configure(api_key=api_key)
        self.client = genai.GenerativeModel(model)

    def _generation_config(
        self, temperature: float, max_tokens: int, **kwargs: Any
    ) -> GenerationConfig:
        return GenerationConfig(
            temperature=temperature,
            top_p=kwargs.pop("top_p", self.top_p),
            max_output_tokens=max_tokens,
            **kwargs,
        )

    def generate_completion(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        **kwargs: Any,
    ) -> str:
        """
        Generate a text completion using the Gemini API.

        Args:
            prompt: The prompt to send to the model
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional GenerationConfig parameters

        Returns:
            The generated text completion

        Raises:
            LLMProviderError: If the API call fails
        """
        try:
            response = self.client.generate_content(
                prompt,
                generation_config=self._generation_config(
                    temperature, max_tokens, **kwargs
                ),
            )
            return response.text or ""
        except Exception as e:
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
            response = await self.client.generate_content_async(
                prompt,
                generation_config=self._generation_config(
                    temperature, max_tokens, **kwargs
                ),
            )
            return response.text or ""
        except Exception as e:
            raise self._handle_api_error(e) from e
