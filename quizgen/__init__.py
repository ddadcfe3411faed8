"""Quiz question generation service."""

from quizgen.errors import (
    ConfigurationError,
    ParseError,
    QuizGenerationError,
    ServiceError,
    ValidationError,
)
from quizgen.models import Complexity, GenerationRequest, Question, QuestionType

__version__ = "0.1.0"

__all__ = [
    "Complexity",
    "ConfigurationError",
    "GenerationRequest",
    "ParseError",
    "Question",
    "QuestionType",
    "QuizGenerationError",
    "ServiceError",
    "ValidationError",
]
