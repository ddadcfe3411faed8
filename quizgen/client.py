"""Bounded-retry wrapper around a single text generation call.

The client retries provider failures with exponential backoff. Retry
bookkeeping lives in a ``CallAttempts`` object created per call, so
concurrent calls never share counters.
"""

import asyncio
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .config import settings
from .error_classifier import ClassifiedError, ErrorClassifier
from .errors import ConfigurationError, ServiceError
from .providers.base import BaseLLMProvider, LLMProviderError

logger = logging.getLogger(__name__)


class RetryConfig:
    """Retry policy for generation calls."""

    def __init__(
        self,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        max_delay: Optional[float] = None,
        exponential_base: float = 2.0,
        jitter: Optional[float] = None,
    ):
        """Initialize retry configuration, defaulting to settings values.

        Args:
            max_retries: Retries after the first attempt (total calls = max_retries + 1)
            base_delay: Delay unit in seconds
            max_delay: Upper bound for a single delay in seconds
            exponential_base: Growth factor per attempt
            jitter: Random spread as a fraction of the delay (0 disables)
        """
        self.max_retries = (
            max_retries if max_retries is not None else settings.generation_max_retries
        )
        self.base_delay = base_delay if base_delay is not None else settings.retry_base_delay
        self.max_delay = max_delay if max_delay is not None else settings.retry_max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter if jitter is not None else settings.retry_jitter


def calculate_backoff_delay(
    attempt: int,
    base_delay: float,
    max_delay: float,
    exponential_base: float = 2.0,
    jitter: float = 0.0,
) -> float:
    """Delay before the next attempt: ``base_delay * exponential_base ** attempt``.

    ``attempt`` is the number of failures so far, so the first wait with the
    defaults is ``2 * base_delay``.

    Args:
        attempt: Failed attempts so far (>= 1 when called from the client)
        base_delay: Delay unit in seconds
        max_delay: Cap applied before jitter
        exponential_base: Growth factor
        jitter: Fractional spread, e.g. 0.25 gives +-25%

    Returns:
        Delay in seconds, never negative
    """
    delay = min(base_delay * (exponential_base**attempt), max_delay)
    if jitter > 0:
        delay *= random.uniform(1 - jitter, 1 + jitter)
    return max(delay, 0.0)


@dataclass
class CallAttempts:
    """Bookkeeping for one ``call()``; never shared between calls."""

    provider: str
    attempts: int = 0
    errors: List[Exception] = field(default_factory=list)
    classified_errors: List[ClassifiedError] = field(default_factory=list)

    def record_failure(self, error: Exception) -> ClassifiedError:
        self.attempts += 1
        self.errors.append(error)
        if isinstance(error, LLMProviderError):
            classified = error.classified_error
        else:
            classified = ErrorClassifier.classify_error(error, self.provider)
        self.classified_errors.append(classified)
        return classified

    @property
    def last_error(self) -> Optional[Exception]:
        return self.errors[-1] if self.errors else None

    @property
    def last_classified(self) -> Optional[ClassifiedError]:
        return self.classified_errors[-1] if self.classified_errors else None


class GenerationClient:
    """Calls a text generation provider with retries and exponential backoff."""

    def __init__(
        self,
        provider: BaseLLMProvider,
        retry_config: Optional[RetryConfig] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        """Initialize the client.

        Args:
            provider: The text generation capability
            retry_config: Retry policy (defaults from settings)
            temperature: Sampling temperature passed to the provider
            max_tokens: Output token limit passed to the provider
        """
        self.provider = provider
        self.retry_config = retry_config or RetryConfig()
        self.temperature = (
            temperature if temperature is not None else settings.generation_temperature
        )
        self.max_tokens = max_tokens if max_tokens is not None else settings.generation_max_tokens

    @property
    def provider_name(self) -> str:
        return self.provider.get_provider_name()

    def call(self, prompt: str, max_retries: Optional[int] = None, **kwargs: Any) -> str:
        """Generate text for ``prompt``, retrying failed provider calls.

        Args:
            prompt: Prompt to send
            max_retries: Override for ``retry_config.max_retries``
            **kwargs: Extra provider parameters

        Returns:
            Raw model output

        Raises:
            ServiceError: After max_retries + 1 failed attempts
            ConfigurationError: Raised by the provider; never retried
        """
        retries = self._resolve_max_retries(max_retries)
        state = CallAttempts(provider=self.provider_name)

        while True:
            logger.info(f"Attempt {state.attempts + 1} to generate content")
            try:
                text = self.provider.generate_completion(
                    prompt,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    **kwargs,
                )
                logger.info("Generation successful")
                return text
            except ConfigurationError:
                raise
            except Exception as e:
                delay = self._handle_failure(state, e, retries)
            time.sleep(delay)

    async def call_async(
        self, prompt: str, max_retries: Optional[int] = None, **kwargs: Any
    ) -> str:
        """Async variant of ``call``; the backoff wait is ``asyncio.sleep``."""
        retries = self._resolve_max_retries(max_retries)
        state = CallAttempts(provider=self.provider_name)

        while True:
            logger.info(f"Attempt {state.attempts + 1} to generate content")
            try:
                text = await self.provider.generate_completion_async(
                    prompt,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                    **kwargs,
                )
                logger.info("Generation successful")
                return text
            except ConfigurationError:
                raise
            except Exception as e:
                delay = self._handle_failure(state, e, retries)
            await asyncio.sleep(delay)

    def _resolve_max_retries(self, max_retries: Optional[int]) -> int:
        retries = self.retry_config.max_retries if max_retries is None else max_retries
        if retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {retries}")
        return retries

    def _handle_failure(
        self, state: CallAttempts, error: Exception, max_retries: int
    ) -> float:
        """Record a failure; raise ServiceError when exhausted, else return the delay."""
        classified = state.record_failure(error)
        logger.warning(
            f"Generation attempt {state.attempts} failed: {classified}",
            extra={"provider": state.provider, "attempt": state.attempts},
        )

        if state.attempts > max_retries:
            logger.error(
                f"Failed to generate content after {state.attempts} attempts "
                f"({ErrorClassifier.summarize(state.classified_errors)})"
            )
            raise ServiceError(
                f"Failed to generate content after {state.attempts} attempts: {error}",
                attempts=state.attempts,
                classified_error=classified,
            ) from error

        delay = calculate_backoff_delay(
            attempt=state.attempts,
            base_delay=self.retry_config.base_delay,
            max_delay=self.retry_config.max_delay,
            exponential_base=self.retry_config.exponential_base,
            jitter=self.retry_config.jitter,
        )
        logger.info(f"Waiting {delay:.2f}s before retry...")
        return delay
