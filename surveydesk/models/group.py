"""Group model: the unit of survey assignment."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from surveydesk.database import Base
from surveydesk.models.base import get_uuid_column, utcnow
from surveydesk.models.links import group_memberships, survey_group_assignments


class Group(Base):
    """Named collection of users with the surveys assigned to it."""

    __tablename__ = "groups"

    group_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    members = relationship(
        "User",
        secondary=group_memberships,
        back_populates="groups",
        collection_class=set,
        lazy="selectin",
    )
    # Lazy; callers that read it load it with selectinload(Group.assigned_surveys)
    assigned_surveys = relationship(
        "Survey",
        secondary=survey_group_assignments,
        back_populates="assigned_groups",
        collection_class=set,
    )

    @property
    def member_ids(self) -> list[uuid.UUID]:
        return sorted((user.user_id for user in self.members), key=str)

    @property
    def assigned_survey_ids(self) -> list[uuid.UUID]:
        return sorted((survey.survey_id for survey in self.assigned_surveys), key=str)

    def __repr__(self):
        return f"<Group(group_id={self.group_id}, name={self.name})>"
