"""User account model."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from surveydesk.database import Base
from surveydesk.models.base import UserRole, get_uuid_column, utcnow
from surveydesk.models.links import group_memberships


class User(Base):
    """Account holding credentials, role and group memberships."""

    __tablename__ = "users"

    user_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    username = Column(String(80), unique=True, nullable=False)
    username_canonical = Column(String(80), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=UserRole.USER.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    last_login_date = Column(DateTime(timezone=True), nullable=True)

    groups = relationship(
        "Group",
        secondary=group_memberships,
        back_populates="members",
        collection_class=set,
        lazy="selectin",
    )

    @property
    def group_ids(self) -> list[uuid.UUID]:
        return sorted((group.group_id for group in self.groups), key=str)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User(user_id={self.user_id}, username={self.username}, role={self.role})>"
