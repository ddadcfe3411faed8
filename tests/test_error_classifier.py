"""Tests for provider error classification."""

import pytest

from quizgen.error_classifier import (
    ClassifiedError,
    ErrorCategory,
    ErrorClassifier,
    ErrorSeverity,
)


class TestErrorClassifier:
    """Tests for ErrorClassifier.classify_error."""

    @pytest.mark.parametrize(
        "message,category,retryable",
        [
            ("You exceeded your current quota, check billing", ErrorCategory.BILLING_QUOTA, False),
            ("Invalid API key provided", ErrorCategory.AUTHENTICATION, False),
            ("429 Too Many Requests", ErrorCategory.RATE_LIMIT, True),
            ("The model gpt-x was not found", ErrorCategory.MODEL_ERROR, False),
            ("Response blocked by safety settings", ErrorCategory.CONTENT_BLOCKED, False),
            ("503 Service Unavailable", ErrorCategory.SERVER_ERROR, True),
            ("Connection reset by peer", ErrorCategory.NETWORK_ERROR, True),
            ("Bad request: temperature out of range", ErrorCategory.INVALID_REQUEST, False),
            ("something odd happened", ErrorCategory.UNKNOWN, False),
        ],
    )
    def test_classification(self, message, category, retryable):
        """Test messages map to the expected category and retryability."""
        classified = ErrorClassifier.classify_error(Exception(message), provider="openai")

        assert classified.category == category
        assert classified.is_retryable is retryable
        assert classified.provider == "openai"
        assert classified.original_error == "Exception"

    def test_rule_order_prefers_billing_over_rate_limit(self):
        """Test earlier rules win when several match."""
        classified = ErrorClassifier.classify_error(
            Exception("429 insufficient_quota"), provider="openai"
        )
        assert classified.category == ErrorCategory.BILLING_QUOTA

    def test_message_names_provider(self):
        """Test the human-readable message mentions the provider."""
        classified = ErrorClassifier.classify_error(Exception("401 Unauthorized"), provider="google")
        assert "google" in classified.message

    def test_summarize_counts_categories(self):
        """Test summarize tallies classifications by category."""
        errors = [
            ErrorClassifier.classify_error(Exception(m), provider="google")
            for m in ("503 error", "timeout", "502 bad gateway")
        ]

        assert ErrorClassifier.summarize(errors) == {"server_error": 2, "network_error": 1}


class TestClassifiedError:
    """Tests for ClassifiedError."""

    def test_to_dict_and_str(self):
        """Test serialization and string form."""
        classified = ClassifiedError(
            category=ErrorCategory.RATE_LIMIT,
            severity=ErrorSeverity.HIGH,
            provider="anthropic",
            original_error="RateLimitError",
            message="Rate limit exceeded for anthropic.",
            is_retryable=True,
        )

        assert classified.to_dict()["category"] == "rate_limit"
        assert str(classified) == "[HIGH] anthropic: rate_limit - Rate limit exceeded for anthropic."
