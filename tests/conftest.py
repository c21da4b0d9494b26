# tests/conftest.py
import itertools
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List

import pytest
from fastapi.testclient import TestClient

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from framework_quiz.models.prompt import PromptMessageSet, PromptVariations
from framework_quiz.services.question_generator import QuestionGenerator, get_question_generator


@dataclass
class RecordedCall:
    messages: PromptMessageSet
    seed: int


@dataclass
class ScriptedTextGenerator:
    """
    Stands in for the LLM. Each call consumes the next scripted item: a string
    is returned as the raw model text, an exception instance is raised.
    """
    responses: List = field(default_factory=list)
    calls: List[RecordedCall] = field(default_factory=list)

    async def generate(self, messages: PromptMessageSet, seed: int) -> str:
        self.calls.append(RecordedCall(messages=messages, seed=seed))
        if not self.responses:
            raise AssertionError("ScriptedTextGenerator ran out of responses")
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def variations() -> PromptVariations:
    return PromptVariations(tones=["Dry", "Warm", "Loud"], reasons=["speed", "safety"])


@pytest.fixture
def text_generator() -> ScriptedTextGenerator:
    return ScriptedTextGenerator()


@pytest.fixture
def seed_source():
    """Deterministic seeds: 0, 1, 2, ..."""
    return itertools.count().__next__


@pytest.fixture
def question_generator(text_generator, variations, seed_source) -> QuestionGenerator:
    return QuestionGenerator(
        text_generator=text_generator,
        variations=variations,
        max_attempts=5,
        timeout_seconds=1.0,
        seed_source=seed_source,
    )


@pytest.fixture
def client(question_generator):
    """TestClient with the shared generator replaced by the scripted one."""
    from framework_quiz.main import app

    app.dependency_overrides[get_question_generator] = lambda: question_generator
    logger.info("Creating TestClient with scripted text generator.")
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
