# framework_quiz/services/prompt_library.py
from langchain_core.prompts import PromptTemplate

from framework_quiz.models.prompt import MessageRole, PromptMessage, PromptMessageSet, PromptVariations

QUIZ_TASK_INSTRUCTION = (
    "You are administering a multiple-choice quiz to help the user determine which Web Development "
    "framework they should use. The question and possible options you provide should resemble a personality test."
)

TONE_INSTRUCTION = PromptTemplate.from_template(
    "Your questions and options should have the following tone: {tone}"
)

FRAMEWORKS_INSTRUCTION = (
    "Your response must contain some reference to Web Development frameworks like React, Angular, Vue, "
    "Nordcraft, SolidJS, Ruby on Rails, Elm, Astro, Ember.js, Preact, Vanilla JS, jQuery, Alpine.js"
)

# Sent verbatim, the doubled braces are part of the text the model sees.
OUTPUT_SCHEMA_INSTRUCTION = (
    "Respond only with a single question and a set of 4 possible options. Your response must be valid JSON, "
    'with the schema {{ "question": string, "options": ["option1", "option2", "option3", "option4"] }}'
)

QUESTION_REQUEST = PromptTemplate.from_template(
    "Provide a question regarding {reason} to help me determine which JavaScript framework I should use."
)


def build_prompt_messages(question_number: int, variations: PromptVariations) -> PromptMessageSet:
    """
    Builds the five prompt messages for a question number. Pure: the same
    number and tables always give the same messages.
    """
    return (
        PromptMessage(role=MessageRole.SYSTEM, content=QUIZ_TASK_INSTRUCTION),
        PromptMessage(role=MessageRole.SYSTEM, content=TONE_INSTRUCTION.format(tone=variations.tone_for(question_number))),
        PromptMessage(role=MessageRole.SYSTEM, content=FRAMEWORKS_INSTRUCTION),
        PromptMessage(role=MessageRole.SYSTEM, content=OUTPUT_SCHEMA_INSTRUCTION),
        PromptMessage(role=MessageRole.USER, content=QUESTION_REQUEST.format(reason=variations.reason_for(question_number))),
    )
