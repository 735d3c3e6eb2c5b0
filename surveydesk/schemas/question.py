"""Question definitions embedded in surveys and templates."""
from __future__ import annotations

import uuid
from typing import Optional

from pydantic import Field, model_validator

from surveydesk.models.base import CHOICE_QUESTION_TYPES, RANGE_QUESTION_TYPES, QuestionType
from surveydesk.schemas.base import BaseSchema


class Question(BaseSchema):
    """A single question.

    ``options`` is kept only for multiple-choice and dropdown questions, where it
    is mandatory. ``min``/``max`` are kept only for rating-scale and slider
    questions.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, min_length=1, max_length=64)
    type: QuestionType
    text: str = Field(..., min_length=1, max_length=1000)
    options: Optional[list[str]] = None
    required: bool = False
    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode="after")
    def check_type_specific_fields(self):
        if self.type in CHOICE_QUESTION_TYPES:
            options = [option.strip() for option in self.options or [] if option and option.strip()]
            if not options:
                raise ValueError(f"options are required for {self.type.value} questions")
            self.options = options
        else:
            self.options = None

        if self.type in RANGE_QUESTION_TYPES:
            if self.min is not None and self.max is not None and self.min >= self.max:
                raise ValueError("min must be lower than max")
        else:
            self.min = None
            self.max = None
        return self


def ensure_unique_question_ids(questions: list[Question]) -> list[Question]:
    """Reject question lists that reuse an id."""
    seen: set[str] = set()
    for question in questions:
        if question.id in seen:
            raise ValueError(f"duplicate question id: {question.id}")
        seen.add(question.id)
    return questions


def dump_questions(questions: list[Question]) -> list[dict]:
    """Serialize questions for the JSON column."""
    return [question.model_dump(mode="json") for question in questions]
