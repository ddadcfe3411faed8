"""Typed failures raised by the question generation pipeline.

Callers translate these into transport-level responses: ``ValidationError``
is the caller's fault (HTTP 400), everything else is a server-side
generation failure (HTTP 500).
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .error_classifier import ClassifiedError

# Upper bound on how much untrusted model output is echoed into errors/logs
SNIPPET_LENGTH = 200


class QuizGenerationError(Exception):
    """Base class for all generation pipeline errors."""


class ValidationError(QuizGenerationError):
    """Raised when a generation request is missing or has invalid fields.

    Attributes:
        missing_fields: Names of required fields that were absent or empty
        details: Human-readable description of the problem
    """

    def __init__(
        self,
        message: str,
        missing_fields: Optional[List[str]] = None,
        details: Optional[str] = None,
    ):
        self.missing_fields = list(missing_fields or [])
        self.details = details or message
        super().__init__(message)

    @classmethod
    def for_missing_fields(cls, missing_fields: List[str]) -> "ValidationError":
        """Build the error reported when required request fields are absent."""
        return cls(
            "Missing required fields",
            missing_fields=missing_fields,
            details=f"Required fields missing: {', '.join(missing_fields)}",
        )


class ConfigurationError(QuizGenerationError):
    """Raised when the text generation capability is not configured at all."""


class ServiceError(QuizGenerationError):
    """Raised when the generation provider keeps failing after all retries.

    The last underlying failure is chained as ``__cause__``.

    Attributes:
        attempts: Total number of provider calls made
        classified_error: Classification of the last failure, if available
    """

    def __init__(
        self,
        message: str,
        attempts: int = 0,
        classified_error: Optional["ClassifiedError"] = None,
    ):
        self.attempts = attempts
        self.classified_error = classified_error
        super().__init__(message)


class ParseError(QuizGenerationError):
    """Raised when model output cannot be coerced into a question list.

    Only the raw length and a bounded snippet are retained; the full
    untrusted text never travels with the error.

    Attributes:
        raw_length: Length of the raw model output
        snippet: First ``SNIPPET_LENGTH`` characters of the output
    """

    def __init__(self, message: str, raw_text: Optional[str] = None):
        raw_text = raw_text or ""
        self.raw_length = len(raw_text)
        self.snippet = make_snippet(raw_text)
        super().__init__(f"{message} (response length: {self.raw_length})")


def make_snippet(text: str, limit: int = SNIPPET_LENGTH) -> str:
    """Return a single-line, bounded preview of untrusted text."""
    flattened = " ".join(text.split())
    if len(flattened) <= limit:
        return flattened
    return flattened[:limit] + "..."
