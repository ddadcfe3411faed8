"""Pytest configuration and shared fixtures for quiz generation tests."""

import json
from typing import Any, List, Union

import pytest

from quizgen.models import Complexity, GenerationRequest
from quizgen.providers.base import BaseLLMProvider


class ScriptedProvider(BaseLLMProvider):
    """Provider double that replays a script of responses and failures.

    Each call consumes the next entry: exceptions are raised, strings are
    returned. The last entry repeats once the script runs out.
    """

    def __init__(self, script: List[Union[str, Exception]]):
        super().__init__(api_key="test-key", model="scripted-model")
        self.script = list(script)
        self.prompts: List[str] = []

    def _next(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts) - 1, len(self.script) - 1)
        outcome = self.script[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def generate_completion(self, prompt: str, temperature: float = 0.7, max_tokens: int = 8192, **kwargs: Any) -> str:
        return self._next(prompt)

    async def generate_completion_async(self, prompt: str, temperature: float = 0.7, max_tokens: int = 8192, **kwargs: Any) -> str:
        return self._next(prompt)

    @property
    def call_count(self) -> int:
        return len(self.prompts)


class FixedRandom:
    """Stand-in for random.Random that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def solar_system_request() -> GenerationRequest:
    """Fixture providing a three-type, six-question request."""
    return GenerationRequest(
        topic="Solar System",
        complexity=Complexity.BASIC,
        category="Astronomy",
        total_count=6,
        requested_types=["multiple_choice", "true_false", "matching"],
    )


@pytest.fixture
def mc_question() -> dict:
    """Fixture providing a well-formed multiple choice question."""
    return {
        "type": "multiple_choice",
        "text": "Which planet is closest to the Sun?",
        "options": ["Mercury", "Venus", "Earth", "Mars"],
        "correctAnswer": 0,
        "explanation": "Mercury orbits closest to the Sun.",
    }


@pytest.fixture
def tf_question() -> dict:
    """Fixture providing a well-formed true/false question."""
    return {
        "type": "true_false",
        "text": "Jupiter is a gas giant.",
        "options": ["True", "False"],
        "correctAnswer": 0,
        "explanation": "Jupiter is composed mostly of hydrogen and helium.",
    }


@pytest.fixture
def matching_question() -> dict:
    """Fixture providing a well-formed matching question."""
    return {
        "type": "matching",
        "text": "Match each planet with its nickname",
        "options": [
            {"left": "Mars", "right": "Red Planet"},
            {"left": "Venus", "right": "Morning Star"},
        ],
        "correctAnswer": [0, 1],
        "explanation": "These are common nicknames.",
    }


@pytest.fixture
def mis_distributed_response(mc_question, tf_question) -> str:
    """Model output with 4 multiple choice and 2 true/false questions, fenced."""
    questions = []
    for i in range(4):
        questions.append({**mc_question, "text": f"Multiple choice question {i + 1}?"})
    for i in range(2):
        questions.append({**tf_question, "text": f"True/false statement {i + 1}."})
    return "Here is your quiz:\n```json\n" + json.dumps({"questions": questions}, indent=2) + "\n```\n"


@pytest.fixture
def make_provider():
    """Fixture providing a factory for scripted providers."""
    return ScriptedProvider


@pytest.fixture
def fixed_random():
    """Fixture providing a factory for fixed-value random sources."""
    return FixedRandom
