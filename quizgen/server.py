"""
HTTP endpoint for AI-assisted quiz question generation.

The quiz-authoring frontend posts the generation form here and receives the
reconciled question list, ready to be edited and saved.
"""
import logging
import os
from functools import lru_cache
from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from quizgen.config import settings
from quizgen.errors import (
    ConfigurationError,
    ParseError,
    ServiceError,
    ValidationError,
)
from quizgen.logging_config import setup_logging
from quizgen.models import GenerationRequest
from quizgen.orchestrator import GenerationOrchestrator

# Initialize logging configuration at startup
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Quiz Question Generation Service")


class GenerateResponse(BaseModel):
    """Successful generation response."""

    success: bool = True
    questions: List[Dict[str, Any]]


@lru_cache(maxsize=1)
def get_orchestrator() -> GenerationOrchestrator:
    """Orchestrator shared by all requests (it holds no per-request state)."""
    return GenerationOrchestrator.from_settings(settings)


def _error_response(status_code: int, error: str, details: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "details": details},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request, exc: ValidationError) -> JSONResponse:
    return _error_response(400, str(exc), exc.details)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Generation requested but not configured: {exc}")
    return _error_response(500, "AI service is not configured", str(exc))


@app.exception_handler(ServiceError)
async def service_error_handler(request, exc: ServiceError) -> JSONResponse:
    logger.error(f"Generation provider failed: {exc}")
    return _error_response(500, "Failed to generate questions", str(exc))


@app.exception_handler(ParseError)
async def parse_error_handler(request, exc: ParseError) -> JSONResponse:
    logger.error(f"Model output could not be parsed: {exc} | {exc.snippet}")
    return _error_response(500, "Failed to generate questions", str(exc))


@app.get("/health")
async def health_check(
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "quiz-question-generation",
        "generation_configured": orchestrator.is_configured,
    }


@app.post("/api/quizzes/generate", response_model=GenerateResponse)
async def generate_questions(
    payload: Any = Body(...),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
):
    """
    Generate quiz questions for a topic.

    Body fields: topic, instructions, complexity, category,
    numberOfQuestions, questionTypes. Unknown fields are ignored.
    """
    generation_request = GenerationRequest.from_payload(payload)
    logger.info(
        f"Generate quiz request: topic={generation_request.topic!r}, "
        f"count={generation_request.total_count}, "
        f"types={[t.value for t in generation_request.requested_types]}"
    )

    questions = await orchestrator.generate_async(generation_request)
    return GenerateResponse(questions=[q.to_dict() for q in questions])


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    uvicorn.run(app, host="0.0.0.0", port=port)
