"""Base class for text generation providers."""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from ..error_classifier import ClassifiedError, ErrorClassifier
from ..errors import QuizGenerationError


class LLMProviderError(QuizGenerationError):
    """A provider SDK failure, already classified.

    The SDK exception is kept as ``original_exception`` and chained as
    ``__cause__`` by the provider that raises this.
    """

    def __init__(self, classified_error: ClassifiedError, original_exception: Exception):
        self.classified_error = classified_error
        self.original_exception = original_exception
        super().__init__(str(classified_error))


class BaseLLMProvider(ABC):
    """Abstract base class for text generation providers.

    A provider is the opaque ``generate(prompt) -> text`` capability the
    pipeline consumes. Test doubles subclass this directly.
    """

    def __init__(self, api_key: str, model: str):
        """
        Initialize the provider.

        Args:
            api_key: API key for the provider
            model: Model identifier to use
        """
        self.api_key = api_key
        self.model = model

    @abstractmethod
    def generate_completion(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        **kwargs: Any,
    ) -> str:
        """
        Generate a completion from the model.

        Args:
            prompt: The prompt to send to the model
            temperature: Sampling temperature
            max_tokens: Maximum number of tokens to generate
            **kwargs: Additional provider-specific parameters

        Returns:
            The generated text completion

        Raises:
            LLMProviderError: If the API call fails
        """

    async def generate_completion_async(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 8192,
        **kwargs: Any,
    ) -> str:
        """
        Generate a completion without blocking the event loop.

        Providers with a native async client override this; the default runs
        the blocking call in a worker thread.
        """
        return await asyncio.to_thread(
            self.generate_completion,
            prompt,
            temperature,
            max_tokens,
            **kwargs,
        )

    def get_provider_name(self) -> str:
        """Short provider name derived from the class, e.g. ``"google"``."""
        return self.__class__.__name__.replace("Provider", "").lower()

    def _handle_api_error(self, error: Exception) -> LLMProviderError:
        """Wrap an SDK exception so the client sees one failure type per provider."""
        return LLMProviderError(
            classified_error=ErrorClassifier.classify_error(error, self.get_provider_name()),
            original_exception=error,
        )
