"""Pydantic schemas for response submission and listing."""
from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from surveydesk.schemas.base import BaseSchema


class ResponseSubmission(BaseModel):
    """Answers keyed by question id. Numeric answers are stored as strings."""

    survey_id: UUID
    answers: dict[str, str | int | float]
    submitted_at: Optional[datetime] = None

    @field_validator("answers")
    @classmethod
    def stringify_answers(cls, value: dict) -> dict[str, str]:
        return {question_id: str(answer) for question_id, answer in value.items()}


class ResponseRecord(BaseSchema):
    """Representation of a stored response."""

    response_id: UUID
    survey_id: UUID
    user_id: Optional[UUID] = None
    username: str = "Anonymous"
    answers: dict[str, str]
    submitted_at: datetime


class ResponseSubmitted(BaseSchema):
    """Acknowledgement returned after a submission."""

    response_id: UUID
    message: str
