# Endpoint that generates a framework-preference quiz question for a question number
# framework_quiz/endpoints/questions.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from framework_quiz.models.question import GeneratedQuizQuestion, question_number_adapter
from framework_quiz.services.question_generator import (
    QuestionGenerationError,
    QuestionGenerator,
    get_question_generator,
)
from framework_quiz.utils.logger import logger

router = APIRouter()


def validation_error_payload(error: ValidationError) -> dict:
    return {
        "error": {
            "name": "ValidationError",
            "issues": error.errors(include_url=False, include_context=False),
        }
    }


@router.get("/{question_id}", response_model=GeneratedQuizQuestion)
async def get_question(question_id: str, generator: QuestionGenerator = Depends(get_question_generator)):
    try:
        question_number = question_number_adapter.validate_python(question_id)
    except ValidationError as e:
        logger.info(f"Rejected question id '{question_id}': not a number")
        return JSONResponse(status_code=400, content=validation_error_payload(e))

    logger.info(f"Question {question_number} requested")
    try:
        return await generator.generate_question(question_number)
    except QuestionGenerationError as e:
        logger.error(f"Question generation failed for question {question_number}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
