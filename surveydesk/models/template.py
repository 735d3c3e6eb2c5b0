"""Survey template model."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, JSON, String, Text

from surveydesk.database import Base
from surveydesk.models.base import get_uuid_column, utcnow


class Template(Base):
    """Reusable question set used to seed new surveys.

    Has no status, creator or group assignments.
    """

    __tablename__ = "templates"

    template_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Template(template_id={self.template_id}, title={self.title})>"
