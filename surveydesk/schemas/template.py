"""Template schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from surveydesk.schemas.base import BaseSchema
from surveydesk.schemas.question import Question, ensure_unique_question_ids


class TemplateCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    questions: list[Question] = Field(default_factory=list)

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, value):
        return ensure_unique_question_ids(value)


class TemplateUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    questions: Optional[list[Question]] = None

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, value):
        if value is None:
            return value
        return ensure_unique_question_ids(value)


class TemplateOut(BaseSchema):
    template_id: UUID
    title: str
    description: Optional[str] = None
    questions: list[Question]
    created_at: datetime


class TemplateExistsRequest(BaseModel):
    title: str
    description: Optional[str] = None


class TemplateExistsResponse(BaseSchema):
    exists: bool
