"""User management schemas."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from surveydesk.models.base import UserRole
from surveydesk.schemas.auth import EmailLike, PasswordStr, UsernameStr
from surveydesk.schemas.base import BaseSchema


class UserOut(BaseSchema):
    """Public view of an account (never includes the password hash)."""

    user_id: UUID
    username: str
    email: str
    role: UserRole
    group_ids: list[UUID]
    created_at: datetime
    updated_at: datetime
    last_login_date: Optional[datetime] = None


class UserCreateRequest(BaseModel):
    """Admin payload for creating an account directly."""

    username: UsernameStr
    email: EmailLike
    password: PasswordStr
    role: UserRole = UserRole.USER


class UserRoleUpdate(BaseModel):
    """Admin payload for changing an account's role."""

    role: UserRole
