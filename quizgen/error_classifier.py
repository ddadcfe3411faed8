"""Error classification for text generation provider failures.

Provider SDKs raise a wide range of exception types. This module maps them
onto a small set of categories so the generation client can log meaningful
diagnostics and attach a classification to the ``ServiceError`` it raises.
"""

import re
from enum import Enum
from typing import Dict, List


class ErrorCategory(Enum):
    """Categories of provider errors."""

    BILLING_QUOTA = "billing_quota"
    RATE_LIMIT = "rate_limit"
    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    MODEL_ERROR = "model_error"
    CONTENT_BLOCKED = "content_blocked"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ClassifiedError:
    """A classified provider error with category and severity."""

    def __init__(
        self,
        category: ErrorCategory,
        severity: ErrorSeverity,
        provider: str,
        original_error: str,
        message: str,
        is_retryable: bool = False,
    ):
        """Initialize classified error.

        Args:
            category: Error category
            severity: Error severity level
            provider: Provider name (google, openai, anthropic)
            original_error: Original exception type name
            message: Human-readable error message
            is_retryable: Whether the error is likely transient
        """
        self.category = category
        self.severity = severity
        self.provider = provider
        self.original_error = original_error
        self.message = message
        self.is_retryable = is_retryable

    def __str__(self) -> str:
        return (
            f"[{self.severity.value.upper()}] {self.provider}: "
            f"{self.category.value} - {self.message}"
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/serialization."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "provider": self.provider,
            "original_error": self.original_error,
            "message": self.message,
            "is_retryable": self.is_retryable,
        }


class _Rule:
    """Pattern set plus the classification it produces."""

    def __init__(
        self,
        category: ErrorCategory,
        severity: ErrorSeverity,
        patterns: List[str],
        message: str,
        is_retryable: bool,
    ):
        self.category = category
        self.severity = severity
        self.patterns = patterns
        self.message = message
        self.is_retryable = is_retryable


class ErrorClassifier:
    """Classifies errors raised by text generation providers."""

    # Evaluated in order; the first rule with a matching pattern wins
    RULES: List[_Rule] = [
        _Rule(
            ErrorCategory.BILLING_QUOTA,
            ErrorSeverity.CRITICAL,
            [
                r"insufficient.*funds",
                r"quota.*exceeded",
                r"insufficient.*quota",
                r"billing",
                r"payment.*required",
                r"\b402\b",
            ],
            "Billing or quota issue detected. Check the {provider} account.",
            False,
        ),
        _Rule(
            ErrorCategory.AUTHENTICATION,
            ErrorSeverity.CRITICAL,
            [
                r"invalid.*api.*key",
                r"api.*key.*not.*valid",
                r"authentication",
                r"unauthorized",
                r"permission.*denied",
                r"\b401\b",
                r"\b403\b",
            ],
            "Authentication failed. Verify the {provider} API key.",
            False,
        ),
        _Rule(
            ErrorCategory.RATE_LIMIT,
            ErrorSeverity.HIGH,
            [
                r"rate.*limit",
                r"too.*many.*requests",
                r"resource.*exhausted",
                r"throttl",
                r"\b429\b",
            ],
            "Rate limit exceeded for {provider}.",
            True,
        ),
        _Rule(
            ErrorCategory.MODEL_ERROR,
            ErrorSeverity.MEDIUM,
            [
                r"model.*not.*found",
                r"invalid.*model",
                r"model.*unavailable",
                r"model.*deprecated",
            ],
            "Model configuration issue with {provider}.",
            False,
        ),
        _Rule(
            ErrorCategory.CONTENT_BLOCKED,
            ErrorSeverity.MEDIUM,
            [r"safety", r"blocked", r"content.*filter"],
            "{provider} blocked the prompt or response.",
            False,
        ),
        _Rule(
            ErrorCategory.SERVER_ERROR,
            ErrorSeverity.MEDIUM,
            [
                r"internal.*server.*error",
                r"service.*unavailable",
                r"overloaded",
                r"\b50[0-9]\b",
                r"server.*error",
            ],
            "{provider} server error. This may be temporary.",
            True,
        ),
        _Rule(
            ErrorCategory.NETWORK_ERROR,
            ErrorSeverity.LOW,
            [
                r"connection",
                r"timeout",
                r"timed out",
                r"network",
                r"dns",
            ],
            "Network connectivity issue. This may be temporary.",
            True,
        ),
        _Rule(
            ErrorCategory.INVALID_REQUEST,
            ErrorSeverity.MEDIUM,
            [r"invalid", r"bad request", r"\b400\b"],
            "Invalid request to {provider}. Check request parameters.",
            False,
        ),
    ]

    @staticmethod
    def classify_error(error: Exception, provider: str) -> ClassifiedError:
        """Classify a provider error.

        Args:
            error: The exception that was raised
            provider: Provider name

        Returns:
            ClassifiedError with category and severity
        """
        error_str = str(error).lower()
        error_type = type(error).__name__

        for rule in ErrorClassifier.RULES:
            if ErrorClassifier._match_patterns(error_str, rule.patterns):
                return ClassifiedError(
                    category=rule.category,
                    severity=rule.severity,
                    provider=provider,
                    original_error=error_type,
                    message=rule.message.format(provider=provider),
                    is_retryable=rule.is_retryable,
                )

        return ClassifiedError(
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.MEDIUM,
            provider=provider,
            original_error=error_type,
            message=f"Unclassified error from {provider}: {str(error)[:100]}",
            is_retryable=False,
        )

    @staticmethod
    def _match_patterns(text: str, patterns: List[str]) -> bool:
        return any(re.search(pattern, text, re.IGNORECASE) for pattern in patterns)

    @staticmethod
    def summarize(classified_errors: List[ClassifiedError]) -> Dict[str, int]:
        """Count classified errors per category value."""
        counts: Dict[str, int] = {}
        for classified in classified_errors:
            key = classified.category.value
            counts[key] = counts.get(key, 0) + 1
        return counts
