"""Prompt templates for quiz question generation."""

from typing import Dict

from .models import Complexity, Distribution, GenerationRequest

DEFAULT_INSTRUCTIONS = "Make sure questions are clear and concise."

COMPLEXITY_GUIDANCE: Dict[Complexity, str] = {
    Complexity.BASIC: "introductory questions testing recall of key facts and definitions",
    Complexity.INTERMEDIATE: "questions requiring understanding and application of concepts",
    Complexity.ADVANCED: "challenging questions requiring analysis, synthesis and expert knowledge",
}

RESPONSE_FORMAT = """{
  "questions": [
    {
      "type": "multiple_choice",
      "text": "Question text goes here?",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": 0,
      "explanation": "Explanation for the correct answer"
    },
    {
      "type": "true_false",
      "text": "True/False statement goes here",
      "options": ["True", "False"],
      "correctAnswer": 0,
      "explanation": "Explanation for the correct answer"
    },
    {
      "type": "matching",
      "text": "Match the items on the left with those on the right",
      "options": [
        {"left": "Item 1", "right": "Match 1"},
        {"left": "Item 2", "right": "Match 2"},
        {"left": "Item 3", "right": "Match 3"}
      ],
      "correctAnswer": [0, 1, 2],
      "explanation": "Explanation for the correct matches"
    }
  ]
}"""

FIELD_NOTES = """Field rules:
- "correctAnswer" for multiple_choice is the index of the correct option.
- "correctAnswer" for true_false is 0 for True and 1 for False.
- "correctAnswer" for matching lists, for each left item, the index of its right item."""

GENERATION_PROMPT_TEMPLATE = """You are a professional quiz creator with expertise in {category}. Create a quiz on the topic of "{topic}" with {total} questions at the {complexity} level ({complexity_guidance}).

Additional Instructions: {instructions}

The quiz should have the following structure and question types:
{type_lines}

Please provide the quiz in the following JSON format:
{response_format}

{field_notes}

IMPORTANT: STRICTLY follow the distribution of question types I specified. The total number of questions must be exactly {total}, with the exact counts for each type as I specified. Respond with the JSON only."""


def format_distribution(distribution: Distribution) -> str:
    """Render the per-type counts as a bullet list, in request order."""
    return "\n".join(
        f"- {count} {question_type.value} questions"
        for question_type, count in distribution.items()
    )


def build_generation_prompt(
    request: GenerationRequest, distribution: Distribution
) -> str:
    """Build the prompt asking the model for a quiz matching ``distribution``.

    Args:
        request: Validated generation request
        distribution: Planned per-type counts

    Returns:
        Prompt text demanding a ``{"questions": [...]}`` JSON envelope
    """
    complexity = request.complexity or Complexity.INTERMEDIATE
    instructions = (request.instructions or "").strip() or DEFAULT_INSTRUCTIONS

    return GENERATION_PROMPT_TEMPLATE.format(
        category=request.category,
        topic=request.topic,
        total=sum(distribution.values()),
        complexity=complexity.value,
        complexity_guidance=COMPLEXITY_GUIDANCE[complexity],
        instructions=instructions,
        type_lines=format_distribution(distribution),
        response_format=RESPONSE_FORMAT,
        field_notes=FIELD_NOTES,
    )
