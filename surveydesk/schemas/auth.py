"""Authentication schema definitions."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, constr

from surveydesk.models.base import UserRole


UsernameStr = constr(strip_whitespace=True, min_length=3, max_length=80)
PasswordStr = constr(min_length=8, max_length=72)
EmailLike = constr(strip_whitespace=True, pattern=r"[^@\s]+@[^@\s]+\.[^@\s]+", min_length=5, max_length=255)


class SignupRequest(BaseModel):
    """Payload for creating a new account."""

    username: UsernameStr
    email: EmailLike
    password: PasswordStr


class LoginRequest(BaseModel):
    """Login payload."""

    email: EmailLike
    password: PasswordStr


class SessionInfo(BaseModel):
    """Identity carried by the session token."""

    user_id: UUID
    username: str
    email: Optional[str] = None
    role: UserRole


class SessionTokenResponse(BaseModel):
    """Response returned after a successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: SessionInfo
