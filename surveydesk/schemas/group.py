"""Group schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from surveydesk.schemas.base import BaseSchema


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None


class GroupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None


class GroupOut(BaseSchema):
    group_id: UUID
    name: str
    description: Optional[str] = None
    member_ids: list[UUID]
    assigned_survey_ids: list[UUID]
    created_at: datetime
    updated_at: datetime


class GroupUsersRequest(BaseModel):
    """Users to add to (or remove from) a group."""

    user_ids: list[UUID]
