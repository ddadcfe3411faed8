"""Recovery of structured question lists from raw model output.

LLMs asked for JSON frequently wrap it in markdown code fences, prepend
commentary, or leave trailing commas behind. ``extract_questions`` tries a
fixed sequence of strategies and returns the first one that yields a
``{"questions": [...]}`` envelope.
"""

import json
import logging
import re
from typing import Any, Callable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from .errors import ParseError, make_snippet
from .models import Question

logger = logging.getLogger(__name__)

# ```json ... ``` (tag is case-insensitive, newline after the tag optional)
JSON_FENCE_PATTERN = re.compile(r"```[ \t]*json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)

# ``` ... ``` with or without any tag on the opening line
ANY_FENCE_PATTERN = re.compile(r"```[^\n`]*\r?\n(.*?)```", re.DOTALL)

# A comma directly followed (ignoring whitespace) by a closing bracket
TRAILING_COMMA_PATTERN = re.compile(r",(\s*[}\]])")


def strip_trailing_commas(text: str) -> str:
    """Remove commas that immediately precede a closing ``}`` or ``]``.

    Args:
        text: JSON-like text

    Returns:
        Text that standard JSON parsers accept if trailing commas were the
        only problem
    """
    return TRAILING_COMMA_PATTERN.sub(r"\1", text)


def _load_json(candidate: str) -> Optional[Any]:
    """Parse ``candidate`` as JSON, retrying once with trailing commas removed."""
    candidate = candidate.strip()
    if not candidate:
        return None
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    try:
        return json.loads(strip_trailing_commas(candidate))
    except json.JSONDecodeError:
        return None


def _parse_direct(raw: str) -> Optional[Any]:
    return _load_json(raw)


def _parse_fenced(pattern: "re.Pattern[str]") -> Callable[[str], Optional[Any]]:
    def parse(raw: str) -> Optional[Any]:
        for match in pattern.finditer(raw):
            parsed = _load_json(match.group(1))
            if _has_questions_array(parsed):
                return parsed
        return None

    return parse


def _has_questions_array(parsed: Any) -> bool:
    return isinstance(parsed, dict) and isinstance(parsed.get("questions"), list)


# Ordered extraction strategies; the first returning an envelope wins
STRATEGIES: List[Tuple[str, Callable[[str], Optional[Any]]]] = [
    ("direct", _parse_direct),
    ("json_fence", _parse_fenced(JSON_FENCE_PATTERN)),
    ("any_fence", _parse_fenced(ANY_FENCE_PATTERN)),
]


def extract_questions(raw: Optional[str]) -> List[Question]:
    """Recover the question list from raw model output.

    Entries that are not objects, or that fail ``Question`` validation, are
    skipped with a warning; the remaining entries keep their original order.

    Args:
        raw: Untrusted text returned by the model

    Returns:
        Parsed questions (counts per type are not yet reconciled)

    Raises:
        ParseError: If no strategy yields a ``{"questions": [...]}`` envelope
    """
    if not raw or not raw.strip():
        raise ParseError("Empty response from AI", raw)

    envelope = None
    for name, strategy in STRATEGIES:
        parsed = strategy(raw)
        if _has_questions_array(parsed):
            logger.debug(f"Extracted questions using '{name}' strategy")
            envelope = parsed
            break

    if envelope is None:
        logger.error(
            f"Failed to extract questions from response of length {len(raw)}: "
            f"{make_snippet(raw)}"
        )
        raise ParseError("Invalid response format from AI", raw)

    return _parse_question_items(envelope["questions"])


def _parse_question_items(items: List[Any]) -> List[Question]:
    questions: List[Question] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning(f"Skipping question {i + 1}: expected an object")
            continue
        try:
            questions.append(Question.model_validate(item))
        except PydanticValidationError as e:
            logger.warning(
                f"Skipping question {i + 1}: {e.error_count()} validation error(s)"
            )
    return questions
