"""Survey model with its embedded, ordered question list."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Index, JSON, String, Text
from sqlalchemy.orm import relationship

from surveydesk.database import Base
from surveydesk.models.base import SurveyStatus, get_uuid_column, utcnow
from surveydesk.models.links import survey_group_assignments


class Survey(Base):
    """Titled, ordered set of questions with a lifecycle status.

    ``questions`` is a JSON list of question dicts (see
    ``surveydesk.schemas.question.Question``) owned exclusively by the survey.
    ``creator_id`` is a plain reference so that removing the author keeps the
    survey.
    """

    __tablename__ = "surveys"

    survey_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    creator_id = get_uuid_column(nullable=False, index=True)
    status = Column(String(16), nullable=False, default=SurveyStatus.DRAFT.value)
    questions = Column(JSON, nullable=False, default=list)
    theme = Column(String(64), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    assigned_groups = relationship(
        "Group",
        secondary=survey_group_assignments,
        back_populates="assigned_surveys",
        collection_class=set,
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_surveys_status_created", "status", "created_at"),
    )

    @property
    def assigned_group_ids(self) -> list[uuid.UUID]:
        return sorted((group.group_id for group in self.assigned_groups), key=str)

    @property
    def question_ids(self) -> list[str]:
        return [question["id"] for question in self.questions or []]

    def __repr__(self):
        return f"<Survey(survey_id={self.survey_id}, title={self.title}, status={self.status})>"
