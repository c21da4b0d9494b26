# Data models for generated quiz questions and the outcome of parsing model output
# framework_quiz/models/question.py
import math
import re
from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, BeforeValidator, Field, TypeAdapter

class GeneratedQuizQuestion(BaseModel):
    question: str
    # Empty strings are accepted, only the count is enforced
    options: List[str] = Field(..., min_length=4, max_length=4)

class ParseSuccess(BaseModel):
    kind: Literal["success"] = "success"
    value: GeneratedQuizQuestion

class ParseFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    detail: str

ParseResult = Annotated[Union[ParseSuccess, ParseFailure], Field(discriminator="kind")]


# ASCII decimal notation only; float() alone would also take "1_000", "inf" or non-ASCII digits
NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _coerce_question_number(value):
    """Accepts whole numbers written as integers or floats ("12", " 7 ", "3.0", "1e2")."""
    if isinstance(value, str):
        if not NUMBER_PATTERN.fullmatch(value.strip()):
            raise ValueError(f"Expected number, received '{value}'")
        number = float(value.strip())
        if not math.isfinite(number):
            raise ValueError(f"Expected a finite number, received '{value}'")
        if not number.is_integer():
            raise ValueError(f"Expected a whole number, received '{value}'")
        return int(number)
    return value

QuestionNumber = Annotated[int, BeforeValidator(_coerce_question_number)]

question_number_adapter = TypeAdapter(QuestionNumber)
