"""Repair of mis-distributed question sets.

Models rarely honor an exact per-type breakdown. ``DistributionReconciler``
turns whatever was parsed into a list whose per-type counts match the
planned distribution exactly:

1. Tally the types actually present.
2. Find target types that are under-represented.
3. Convert excess entries in place (scan order, first match wins). An entry
   is excess when its type is not a target, or its type currently has more
   entries than its target.
4. Synthesize new questions for any deficit that remains.
5. Trim surplus entries, keeping the order of everything else.

Everything here is deterministic except the correct answer of true/false
questions built by conversion or synthesis, which comes from the injected
random source.
"""

import logging
import random
from typing import Dict, List, Mapping, Optional, Sequence, Union

from .models import Distribution, MatchingPair, Question, QuestionType

logger = logging.getLogger(__name__)

TRUE_FALSE_OPTIONS = ["True", "False"]
MATCHING_ITEM_COUNT = 2
MULTIPLE_CHOICE_OPTION_COUNT = 4


def _type_key(question_type: Union[QuestionType, str]) -> str:
    # str-valued enums hash by member name, so tallies are keyed by value
    if isinstance(question_type, QuestionType):
        return question_type.value
    return question_type


def count_types(questions: Sequence[Question]) -> Dict[str, int]:
    """Count questions per type value."""
    counts: Dict[str, int] = {}
    for question in questions:
        counts[question.type] = counts.get(question.type, 0) + 1
    return counts


class DistributionReconciler:
    """Forces a parsed question list to match a target distribution."""

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize the reconciler.

        Args:
            rng: Source for the true/false answer choice; anything with a
                ``random()`` method returning a float in [0, 1)
        """
        self._rng = rng or random.Random()

    def reconcile(
        self,
        parsed: Sequence[Question],
        target: Mapping[Union[QuestionType, str], int],
        topic: str,
    ) -> List[Question]:
        """Return a corrected copy of ``parsed`` matching ``target`` exactly.

        Args:
            parsed: Questions recovered from model output (not modified)
            target: Required count per type, in priority order
            topic: Quiz topic, used in synthesized text

        Returns:
            Questions with exactly ``target[t]`` entries of each type ``t``
            and ``sum(target.values())`` entries in total
        """
        targets = {_type_key(t): count for t, count in target.items() if count > 0}
        questions = list(parsed)
        tally = count_types(questions)

        for type_key, wanted in targets.items():
            needed = wanted - tally.get(type_key, 0)
            if needed <= 0:
                continue

            logger.info(f"Need to add {needed} {type_key} questions")
            converted = self._convert_excess(questions, tally, targets, type_key, needed, topic)

            if converted < needed:
                missing = needed - converted
                logger.info(f"Adding {missing} new {type_key} questions")
                for i in range(missing):
                    questions.append(self._synthesize(type_key, topic, i + 1))
                tally[type_key] = tally.get(type_key, 0) + missing

        result = self._truncate(questions, targets)
        logger.info(f"Final question distribution: {count_types(result)}")
        return result

    def _convert_excess(
        self,
        questions: List[Question],
        tally: Dict[str, int],
        targets: Dict[str, int],
        type_key: str,
        needed: int,
        topic: str,
    ) -> int:
        """Convert excess entries to ``type_key`` in place; return how many."""
        converted = 0
        for i, question in enumerate(questions):
            if converted >= needed:
                break
            source_key = question.type
            if tally.get(source_key, 0) <= targets.get(source_key, 0):
                continue

            logger.info(f"Converting question {i} from {source_key} to {type_key}")
            questions[i] = self._convert(question, type_key, topic)
            tally[source_key] -= 1
            tally[type_key] = tally.get(type_key, 0) + 1
            converted += 1
        return converted

    @staticmethod
    def _truncate(questions: List[Question], targets: Dict[str, int]) -> List[Question]:
        """Keep entries in order while their type is still under its target."""
        kept: Dict[str, int] = {}
        result = []
        for question in questions:
            allowed = targets.get(question.type, 0)
            if kept.get(question.type, 0) < allowed:
                kept[question.type] = kept.get(question.type, 0) + 1
                result.append(question)
        return result

    def _random_true_false_answer(self) -> int:
        return 0 if self._rng.random() > 0.5 else 1

    def _convert(self, question: Question, type_key: str, topic: str) -> Question:
        explanation = question.explanation

        if type_key == QuestionType.TRUE_FALSE.value:
            return Question(
                type=QuestionType.TRUE_FALSE,
                text=question.text or f"Is it true that {topic} is important?",
                options=list(TRUE_FALSE_OPTIONS),
                correct_answer=self._random_true_false_answer(),
                explanation=explanation or f"This is an explanation about {topic}",
            )

        if type_key == QuestionType.MATCHING.value:
            items = question.option_labels()[:MATCHING_ITEM_COUNT]
            for n in range(len(items) + 1, MATCHING_ITEM_COUNT + 1):
                items.append(f"Item {n} about {topic}")
            matches = list(reversed(items))
            return Question(
                type=QuestionType.MATCHING,
                text=f"Match the following items related to {topic}",
                options=[
                    MatchingPair(left=left, right=right)
                    for left, right in zip(items, matches)
                ],
                correct_answer=list(reversed(range(len(items)))),
                explanation=explanation or f"This is a matching question about {topic}",
            )

        if type_key == QuestionType.MULTIPLE_CHOICE.value:
            options = question.option_labels() or self._default_options(topic)
            return Question(
                type=QuestionType.MULTIPLE_CHOICE,
                text=question.text or f"What is an important aspect of {topic}?",
                options=options,
                correct_answer=0,
                explanation=explanation or f"This is an explanation about {topic}",
            )

        raise ValueError(f"Cannot convert questions to type '{type_key}'")

    def _synthesize(self, type_key: str, topic: str, counter: int) -> Question:
        if type_key == QuestionType.TRUE_FALSE.value:
            return Question(
                type=QuestionType.TRUE_FALSE,
                text=f"Is it true that {topic} {counter} is important?",
                options=list(TRUE_FALSE_OPTIONS),
                correct_answer=self._random_true_false_answer(),
                explanation=f"This is an explanation about {topic}",
            )

        if type_key == QuestionType.MATCHING.value:
            return Question(
                type=QuestionType.MATCHING,
                text=f"Match the following items related to {topic}",
                options=[
                    MatchingPair(left=f"Item {n} about {topic}", right=f"Match {n} for {topic}")
                    for n in range(1, MATCHING_ITEM_COUNT + 1)
                ],
                correct_answer=list(range(MATCHING_ITEM_COUNT)),
                explanation=f"This is a matching question about {topic}",
            )

        if type_key == QuestionType.MULTIPLE_CHOICE.value:
            return Question(
                type=QuestionType.MULTIPLE_CHOICE,
                text=f"What is an important aspect of {topic} {counter}?",
                options=self._default_options(topic),
                correct_answer=0,
                explanation=f"This is an explanation about {topic}",
            )

        raise ValueError(f"Cannot synthesize questions of type '{type_key}'")

    @staticmethod
    def _default_options(topic: str) -> List[str]:
        return [
            f"Option {n} about {topic}"
            for n in range(1, MULTIPLE_CHOICE_OPTION_COUNT + 1)
        ]
