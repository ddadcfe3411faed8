"""End-to-end question generation pipeline.

plan -> prompt -> provider call (with retries) -> extraction -> reconciliation.
"""

import logging
import uuid
from typing import TYPE_CHECKING, List, Optional, Tuple

from .client import GenerationClient, RetryConfig
from .errors import ConfigurationError, ValidationError
from .extractor import extract_questions
from .logging_config import generation_id_context
from .models import Distribution, GenerationRequest, Question
from .planner import plan_distribution
from .prompts import build_generation_prompt
from .providers import create_provider
from .reconciler import DistributionReconciler

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Turns a ``GenerationRequest`` into a correctly distributed question list.

    The orchestrator keeps no per-request state: each ``generate`` call builds
    its own prompt, makes its own provider call and reconciles independently,
    so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        client: Optional[GenerationClient],
        reconciler: Optional[DistributionReconciler] = None,
    ):
        """Initialize the orchestrator.

        Args:
            client: Generation client, or None when no provider is configured
                (every ``generate`` call then raises ConfigurationError)
            reconciler: Distribution reconciler (a default one if omitted)
        """
        self.client = client
        self.reconciler = reconciler or DistributionReconciler()

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GenerationOrchestrator":
        """Build an orchestrator for the provider selected in ``settings``.

        A missing API key does not fail here; it surfaces as a
        ConfigurationError on the first ``generate`` call.
        """
        try:
            provider = create_provider(settings)
        except ConfigurationError as e:
            logger.error(f"Question generation is not configured: {e}")
            return cls(client=None)

        retry_config = RetryConfig(
            max_retries=settings.generation_max_retries,
            base_delay=settings.retry_base_delay,
            max_delay=settings.retry_max_delay,
            jitter=settings.retry_jitter,
        )
        client = GenerationClient(
            provider,
            retry_config=retry_config,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
        )
        return cls(client=client)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _prepare(self, request: GenerationRequest) -> Tuple[Distribution, str]:
        """Check configuration and required fields, then plan and build the prompt."""
        if self.client is None:
            raise ConfigurationError("AI service is not configured")

        missing = request.missing_fields()
        if missing:
            logger.info(f"Missing fields: {missing}")
            raise ValidationError.for_missing_fields(missing)

        distribution = plan_distribution(request.requested_types, request.total_count)
        summary = {t.value: n for t, n in distribution.items()}
        logger.info(
            f"Question distribution: {summary}",
            extra={"topic": request.topic, "distribution": summary},
        )
        return distribution, build_generation_prompt(request, distribution)

    def _finish(
        self, request: GenerationRequest, distribution: Distribution, raw: str
    ) -> List[Question]:
        logger.info(f"Raw response length: {len(raw)}")
        parsed = extract_questions(raw)
        logger.info(f"Parsed {len(parsed)} questions from model output")
        return self.reconciler.reconcile(parsed, distribution, request.topic)

    def generate(self, request: GenerationRequest) -> List[Question]:
        """Generate questions for ``request``.

        Raises:
            ConfigurationError: No generation provider is configured
            ValidationError: topic, complexity or category is missing
            ServiceError: The provider failed on every attempt
            ParseError: The model output held no question list
        """
        token = generation_id_context.set(uuid.uuid4().hex[:12])
        try:
            distribution, prompt = self._prepare(request)
            raw = self.client.call(prompt)
            return self._finish(request, distribution, raw)
        finally:
            generation_id_context.reset(token)

    async def generate_async(self, request: GenerationRequest) -> List[Question]:
        """Async variant of ``generate``; same errors."""
        token = generation_id_context.set(uuid.uuid4().hex[:12])
        try:
            distribution, prompt = self._prepare(request)
            raw = await self.client.call_async(prompt)
            return self._finish(request, distribution, raw)
        finally:
            generation_id_context.reset(token)
