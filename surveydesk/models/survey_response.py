"""Survey response model."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Index, JSON

from surveydesk.database import Base
from surveydesk.models.base import get_uuid_column, utcnow


class SurveyResponse(Base):
    """One user's answers to one survey, keyed by question id.

    ``survey_id`` and ``user_id`` are lookup references only: deleting the
    survey or the user leaves the response in place.
    """

    __tablename__ = "survey_responses"

    response_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    survey_id = get_uuid_column(nullable=False, index=True)
    user_id = get_uuid_column(nullable=True, index=True)
    answers = Column(JSON, nullable=False, default=dict)
    submitted_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("ix_survey_responses_survey_user", "survey_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<SurveyResponse(response_id={self.response_id}, survey_id={self.survey_id}, "
            f"user_id={self.user_id})>"
        )
