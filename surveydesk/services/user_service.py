"""Account management: signup, lookup, role changes and deletion."""
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.config import get_settings
from surveydesk.models.base import UserRole
from surveydesk.models.user import User
from surveydesk.services.errors import ConflictError, NotFoundError, ValidationError
from surveydesk.utils.passwords import (
    PasswordValidationError,
    hash_password,
    validate_password_strength,
    verify_password,
)

logger = logging.getLogger(__name__)


def canonicalize_username(username: str) -> str:
    return username.strip().lower()


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """User entity store."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def get_user(self, user_id: UUID) -> User:
        result = await self.db.execute(select(User).where(User.user_id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("user_not_found")
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == normalize_email(email)))
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def _ensure_available(self, username: str, email: str) -> None:
        result = await self.db.execute(
            select(User.username_canonical, User.email).where(
                or_(
                    User.username_canonical == canonicalize_username(username),
                    User.email == normalize_email(email),
                )
            )
        )
        row = result.first()
        if row is None:
            return
        if row.email == normalize_email(email):
            raise ConflictError("email_taken")
        raise ConflictError("username_taken")

    async def create_user(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create an account after checking password strength and uniqueness."""
        try:
            validate_password_strength(password)
        except PasswordValidationError as exc:
            raise ValidationError(str(exc)) from exc

        await self._ensure_available(username, email)

        user = User(
            username=username.strip(),
            username_canonical=canonicalize_username(username),
            email=normalize_email(email),
            password_hash=hash_password(password),
            role=UserRole(role).value,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent signup for the same username/email
            await self.db.rollback()
            raise ConflictError("user_already_exists") from exc

        await self.db.refresh(user)
        logger.info(f"Created user {user.user_id} ({user.username}) with role {user.role}")
        return user

    async def signup(self, username: str, email: str, password: str) -> User:
        """Self-service signup. Configured admin e-mails are promoted on creation."""
        role = UserRole.ADMIN if self.settings.is_admin_email(email) else UserRole.USER
        return await self.create_user(username, email, password, role=role)

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    async def update_role(self, user_id: UUID, role: UserRole) -> User:
        user = await self.get_user(user_id)
        user.role = UserRole(role).value
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Updated role of user {user_id} to {user.role}")
        return user

    async def delete_user(self, user_id: UUID) -> None:
        """Delete an account. Group memberships go with it; responses are kept."""
        user = await self.get_user(user_id)
        await self.db.delete(user)
        await self.db.commit()
        logger.info(f"Deleted user {user_id}")
