"""Per-type question count planning."""

import logging
from typing import Sequence

from .models import Distribution, QuestionType

logger = logging.getLogger(__name__)


def plan_distribution(
    requested_types: Sequence[QuestionType], total_count: int
) -> Distribution:
    """Compute how many questions of each requested type to generate.

    Every requested type gets one question, then the remainder is handed out
    round-robin in request order. For 6 questions over
    ``[multiple_choice, true_false, matching]`` that is 2/2/2; for 5 it is
    2/2/1.

    When ``total_count`` is smaller than the number of requested types, only
    the first ``total_count`` types are planned, so the counts always sum to
    ``total_count``.

    Args:
        requested_types: Ordered, de-duplicated question types
        total_count: Total number of questions wanted

    Returns:
        Ordered mapping of question type to target count

    Raises:
        ValueError: If total_count < 1 or no types were requested
    """
    if total_count < 1:
        raise ValueError(f"total_count must be at least 1, got {total_count}")
    if not requested_types:
        raise ValueError("At least one question type must be requested")

    types = list(dict.fromkeys(requested_types))
    if total_count < len(types):
        logger.warning(
            f"Requested {len(types)} question types but only {total_count} "
            f"questions; planning for {types[:total_count]}"
        )
        types = types[:total_count]

    distribution: Distribution = {question_type: 1 for question_type in types}

    remaining = total_count - len(types)
    index = 0
    while remaining > 0:
        distribution[types[index % len(types)]] += 1
        remaining -= 1
        index += 1

    return distribution
