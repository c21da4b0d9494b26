# framework_quiz/models/prompt.py
from enum import Enum
from typing import List, Tuple
import yaml
from pydantic import BaseModel, ConfigDict, Field

class MessageRole(str, Enum):
    """Roles understood by the chat models we prompt."""
    SYSTEM = "system"
    USER = "user"

class PromptMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str

PromptMessageSet = Tuple[PromptMessage, ...]

class PromptVariations(BaseModel):
    """Lookup tables that give each question number its own tone and focus."""
    model_config = ConfigDict(frozen=True)

    tones: List[str] = Field(..., min_length=1)
    reasons: List[str] = Field(..., min_length=1)

    def tone_for(self, question_number: int) -> str:
        return self.tones[question_number % len(self.tones)]

    def reason_for(self, question_number: int) -> str:
        return self.reasons[question_number % len(self.reasons)]

    @classmethod
    def from_yaml(cls, path: str) -> "PromptVariations":
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate(yaml.safe_load(f))
