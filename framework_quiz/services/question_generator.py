# Bounded-retry quiz question generation; prompts the LLM, validates its JSON output and retries on failure
# framework_quiz/services/question_generator.py
import asyncio
import json
import threading
import time
from typing import Callable, Optional

from pydantic import ValidationError

from framework_quiz.models.prompt import PromptMessageSet, PromptVariations
from framework_quiz.models.question import GeneratedQuizQuestion, ParseFailure, ParseResult, ParseSuccess
from framework_quiz.services.llm_client import LangChainTextGenerator, TextGenerator
from framework_quiz.services.prompt_library import build_prompt_messages
from framework_quiz.utils.config import settings
from framework_quiz.utils.logger import logger

CODE_FENCE = "```"


class QuestionGenerationError(Exception):
    """Raised when every generation attempt failed."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"error prompting ai: {detail}")


def default_seed_source() -> int:
    """Wall-clock milliseconds modulo one million."""
    return time.time_ns() // 1_000_000 % 1_000_000


def describe_exception(e: BaseException) -> str:
    message = str(e)
    return f"{type(e).__name__}: {message}" if message else type(e).__name__


def strip_code_fences(raw: str) -> str:
    """Removes every ``` sequence; models sometimes wrap the JSON in markdown fences."""
    return raw.replace(CODE_FENCE, "")


def parse_generated_question(raw: str) -> ParseResult:
    """Parses and validates raw model output in one step."""
    cleaned = strip_code_fences(raw)
    # json.loads raises ValueError on oversized integer literals and RecursionError on deep nesting
    try:
        question = GeneratedQuizQuestion.model_validate(json.loads(cleaned))
    except (ValueError, RecursionError, ValidationError) as e:
        return ParseFailure(detail=describe_exception(e))
    return ParseSuccess(value=question)


class QuestionGenerator:
    def __init__(
        self,
        text_generator: TextGenerator,
        variations: PromptVariations,
        max_attempts: int = 5,
        timeout_seconds: Optional[float] = 10.0,
        seed_source: Callable[[], int] = default_seed_source,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.text_generator = text_generator
        self.variations = variations
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds
        self.seed_source = seed_source

    async def _attempt(self, messages: PromptMessageSet) -> ParseResult:
        seed = self.seed_source()
        try:
            raw = await asyncio.wait_for(
                self.text_generator.generate(messages, seed=seed),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            return ParseFailure(detail=f"TimeoutError: no response within {self.timeout_seconds}s")
        except Exception as e:
            return ParseFailure(detail=describe_exception(e))
        if not isinstance(raw, str):
            return ParseFailure(detail=f"TypeError: expected a text response, got {type(raw).__name__}")
        logger.debug(f"Raw model response (seed={seed}): {raw[:200]}")
        return parse_generated_question(raw)

    async def generate_question(self, question_number: int) -> GeneratedQuizQuestion:
        """
        Generates one validated question for question_number.

        The prompt is built once and reused for every attempt; only the seed and
        the model's own sampling change between attempts. Retries are immediate.
        Raises QuestionGenerationError carrying the last failure once
        max_attempts attempts have failed.
        """
        messages = build_prompt_messages(question_number, self.variations)
        attempt = 0
        while True:
            result = await self._attempt(messages)
            if result.kind == "success":
                logger.info(f"Generated question {question_number} on attempt {attempt + 1}")
                return result.value

            attempt += 1
            logger.warning(f"Attempt {attempt}/{self.max_attempts} for question {question_number} failed: {result.detail}")
            if attempt >= self.max_attempts:
                logger.error(f"Giving up on question {question_number} after {attempt} attempts")
                raise QuestionGenerationError(result.detail)


# --- Process-wide instances (initialized lazily) ---
_prompt_variations: PromptVariations | None = None
_question_generator: QuestionGenerator | None = None
_init_lock = threading.Lock()


def load_prompt_variations(path: str | None = None) -> PromptVariations:
    """Loads the tone/reason tables, caching the default ones."""
    global _prompt_variations
    if path is not None:
        return PromptVariations.from_yaml(path)
    with _init_lock:
        if _prompt_variations is None:
            _prompt_variations = PromptVariations.from_yaml(settings.prompt_variations_path)
            logger.info(
                f"Loaded {len(_prompt_variations.tones)} tones and {len(_prompt_variations.reasons)} reasons "
                f"from {settings.prompt_variations_path}"
            )
        return _prompt_variations


def get_question_generator() -> QuestionGenerator:
    """FastAPI dependency returning the shared generator."""
    global _question_generator
    variations = load_prompt_variations()
    with _init_lock:
        if _question_generator is None:
            _question_generator = QuestionGenerator(
                text_generator=LangChainTextGenerator(settings),
                variations=variations,
                max_attempts=settings.generation_max_attempts,
                timeout_seconds=settings.generation_timeout_seconds,
            )
        return _question_generator
