"""Authentication: credential checks and session token issuance."""
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.config import get_settings
from surveydesk.models.user import User
from surveydesk.services.user_service import UserService

logger = logging.getLogger(__name__)


class AuthError(RuntimeError):
    """Raised when authentication fails."""


class AuthService:
    """Service responsible for credential checks and JWT session tokens.

    The session token carries the user id (``sub``), the username and the role
    at the time of login.
    """

    def __init__(self, db: AsyncSession, *, user_service: UserService | None = None):
        self.db = db
        self.settings = get_settings()
        self.user_service = user_service or UserService(db)

    async def authenticate_user(self, email: str, password: str) -> User:
        """Authenticate a user using email and password."""
        user = await self.user_service.authenticate(email, password)
        if not user:
            logger.info("Rejected login attempt for %s", email.strip().lower())
            raise AuthError("invalid_credentials")

        user.last_login_date = datetime.now(UTC)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    def create_access_token(self, user: User) -> tuple[str, int]:
        expire = datetime.now(UTC) + timedelta(minutes=self.settings.access_token_exp_minutes)
        payload = {
            "sub": str(user.user_id),
            "username": user.username,
            "role": user.role,
            "exp": int(expire.timestamp()),
        }
        token = jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.jwt_algorithm)
        expires_in = self.settings.access_token_exp_minutes * 60
        return token, expires_in

    def decode_access_token(self, token: str) -> dict[str, str]:
        try:
            return jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthError("token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthError("invalid_token") from exc

    async def get_user_from_token(self, token: str) -> User:
        """Resolve the account behind a session token."""
        payload = self.decode_access_token(token)
        try:
            user_id = UUID(str(payload.get("sub")))
        except ValueError as exc:
            raise AuthError("invalid_token") from exc

        user = await self.db.get(User, user_id)
        if not user:
            raise AuthError("invalid_token")
        return user
