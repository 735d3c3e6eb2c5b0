"""Survey schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from surveydesk.models.base import SurveyStatus
from surveydesk.schemas.base import BaseSchema
from surveydesk.schemas.question import Question, ensure_unique_question_ids


class SurveyCreate(BaseModel):
    """Payload for authoring a survey. ``status`` may be draft or active."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    status: SurveyStatus = SurveyStatus.DRAFT
    questions: list[Question] = Field(default_factory=list)
    theme: Optional[str] = Field(default=None, max_length=64)

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, value):
        return ensure_unique_question_ids(value)


class SurveyUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[SurveyStatus] = None
    questions: Optional[list[Question]] = None
    theme: Optional[str] = Field(default=None, max_length=64)

    @field_validator("questions")
    @classmethod
    def unique_question_ids(cls, value):
        if value is None:
            return value
        return ensure_unique_question_ids(value)


class SurveyStatusUpdate(BaseModel):
    status: SurveyStatus


class SurveyOut(BaseSchema):
    survey_id: UUID
    title: str
    description: Optional[str] = None
    creator_id: UUID
    status: SurveyStatus
    questions: list[Question]
    assigned_group_ids: list[UUID]
    theme: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AssignedSurveyOut(SurveyOut):
    """A survey reachable through one of the caller's groups."""

    group_name: str


class SurveyGroupsRequest(BaseModel):
    """Groups to assign a survey to (or unassign it from)."""

    group_ids: list[UUID]
