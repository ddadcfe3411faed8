"""Data models for quiz question generation."""

import enum
import json
import re
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class QuestionType(str, enum.Enum):
    """Question formats a quiz can contain."""

    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    MATCHING = "matching"
    # Pass-through formats: accepted from model output, never synthesized
    PARAGRAPH = "paragraph"
    FILL_IN_BLANKS = "fill_in_blanks"
    FILE_UPLOAD = "file_upload"
    DROPDOWN = "dropdown"


class Complexity(str, enum.Enum):
    """Requested difficulty of a generated quiz."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Types the reconciler knows how to synthesize and convert between
SUPPORTED_QUESTION_TYPES: List[QuestionType] = [
    QuestionType.MULTIPLE_CHOICE,
    QuestionType.TRUE_FALSE,
    QuestionType.MATCHING,
]

DEFAULT_QUESTION_TYPES: List[QuestionType] = [QuestionType.MULTIPLE_CHOICE]

# Target question count per type, in request order
Distribution = Dict[QuestionType, int]


def normalize_type_name(value: str) -> str:
    """Normalize a question type string, e.g. ``"True-False"`` -> ``"true_false"``."""
    return value.strip().lower().replace("-", "_").replace(" ", "_")


def filter_question_types(raw: Any) -> List[QuestionType]:
    """Coerce raw ``questionTypes`` input into an ordered, supported type list.

    Accepts a list, a JSON-encoded list, or a single type name. Unsupported
    entries are dropped, duplicates removed (first occurrence wins), and an
    empty result falls back to ``[multiple_choice]``.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raw = [raw]
        if isinstance(raw, str):
            raw = [raw]

    if not isinstance(raw, (list, tuple)):
        return list(DEFAULT_QUESTION_TYPES)

    supported = {qt.value: qt for qt in SUPPORTED_QUESTION_TYPES}
    result: List[QuestionType] = []
    for item in raw:
        if not isinstance(item, str):
            continue
        question_type = supported.get(normalize_type_name(item))
        if question_type is not None and question_type not in result:
            result.append(question_type)

    return result or list(DEFAULT_QUESTION_TYPES)


class GenerationRequest(BaseModel):
    """Immutable description of one question generation call.

    Required-field checks (topic, complexity, category) happen in the
    orchestrator so that all missing fields are reported together.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    topic: str = ""
    instructions: Optional[str] = None
    complexity: Optional[Complexity] = None
    category: str = ""
    total_count: int = Field(
        default=5,
        ge=1,
        validation_alias=AliasChoices(
            "total_count", "totalCount", "numberOfQuestions", "number_of_questions"
        ),
    )
    requested_types: List[QuestionType] = Field(
        default_factory=lambda: list(DEFAULT_QUESTION_TYPES),
        validation_alias=AliasChoices(
            "requested_types", "requestedTypes", "questionTypes", "question_types"
        ),
    )

    @field_validator("topic", "category", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("complexity", mode="before")
    @classmethod
    def _blank_complexity(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    @field_validator("requested_types", mode="before")
    @classmethod
    def _filter_requested_types(cls, value: Any) -> List[QuestionType]:
        return filter_question_types(value)

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        missing = []
        if not self.topic:
            missing.append("topic")
        if self.complexity is None:
            missing.append("complexity")
        if not self.category:
            missing.append("category")
        return missing

    @classmethod
    def from_payload(cls, payload: Any) -> "GenerationRequest":
        """Build a request from a decoded JSON body.

        Raises:
            ValidationError: If a field has an invalid value
        """
        if not isinstance(payload, dict):
            raise ValidationError(
                "Invalid request body", details="Request body must be a JSON object"
            )
        try:
            return cls.model_validate(payload)
        except PydanticValidationError as e:
            invalid = sorted(
                {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
            )
            raise ValidationError(
                "Invalid request fields",
                details=f"Invalid values for: {', '.join(invalid)}",
            ) from e


class MatchingPair(BaseModel):
    """One left/right row of a matching question."""

    left: str
    right: str


# Boolean and word answers for true_false questions, where 0 is True
TRUE_FALSE_ANSWERS = {"true": 0, "false": 1}

LETTER_ANSWER_PATTERN = re.compile(r"([A-Za-z])[.)]?")


def _raw_option_labels(options: Any) -> List[str]:
    if not isinstance(options, list):
        return []
    labels = []
    for option in options:
        if isinstance(option, MatchingPair):
            labels.append(option.left)
        elif isinstance(option, dict):
            labels.append(str(option.get("left", "")))
        else:
            labels.append(str(option))
    return labels


def coerce_correct_answer(value: Any, option_labels: List[str]) -> Any:
    """Map a model-supplied answer onto option indexes.

    Booleans follow the true_false convention (True -> 0, False -> 1).
    Strings resolve, in order, to a matching option label, to
    ``"true"``/``"false"``, to a numeric index, or to a letter such as
    ``"B"`` or ``"b)"``. Anything unresolvable becomes None so the
    question is kept without an answer key.
    """
    if isinstance(value, list):
        coerced = [coerce_correct_answer(item, option_labels) for item in value]
        if any(not isinstance(item, int) for item in coerced):
            return None
        return coerced
    if isinstance(value, bool):
        return 0 if value else 1
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    lowered = text.lower()
    for index, label in enumerate(option_labels):
        if label.strip().lower() == lowered:
            return index
    if lowered in TRUE_FALSE_ANSWERS:
        return TRUE_FALSE_ANSWERS[lowered]
    if text.isdigit():
        return int(text)
    match = LETTER_ANSWER_PATTERN.fullmatch(text)
    if match:
        index = ord(match.group(1).upper()) - ord("A")
        if not option_labels or index < len(option_labels):
            return index
    return None


class Question(BaseModel):
    """A single quiz question as produced by the model or the reconciler.

    ``type`` stays a plain string so that formats outside ``QuestionType``
    survive extraction untouched. Unrecognized keys are preserved.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str
    text: str = ""
    options: Optional[List[Union[str, MatchingPair]]] = None
    correct_answer: Optional[Union[int, List[int]]] = Field(
        default=None,
        validation_alias=AliasChoices("correctAnswer", "correct_answer"),
        serialization_alias="correctAnswer",
    )
    explanation: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_answer(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        for key in ("correctAnswer", "correct_answer"):
            if key in data:
                data = dict(data)
                data[key] = coerce_correct_answer(
                    data[key], _raw_option_labels(data.get("options"))
                )
                break
        return data

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, enum.Enum):
            value = value.value
        if isinstance(value, str):
            return normalize_type_name(value)
        return value

    @field_validator("text", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_scalar_options(cls, value: Any) -> Any:
        # Models often emit numeric options such as [1, 2, 3, 4]
        if isinstance(value, list):
            return [
                str(option) if isinstance(option, (int, float)) else option
                for option in value
            ]
        return value

    def option_labels(self) -> List[str]:
        """Option strings, using the left side of matching pairs."""
        labels = []
        for option in self.options or []:
            if isinstance(option, MatchingPair):
                labels.append(option.left)
            else:
                labels.append(option)
        return labels

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True, exclude_none=True)
