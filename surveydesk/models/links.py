"""Link tables for the survey<->group and user<->group relations.

Each pair is stored exactly once, and both ends of the relation are
read from the same row.
"""
from sqlalchemy import Column, DateTime, ForeignKey, Table

from surveydesk.database import Base
from surveydesk.models.base import AdaptiveUUID, utcnow

group_memberships = Table(
    "group_memberships",
    Base.metadata,
    Column("group_id", AdaptiveUUID(), ForeignKey("groups.group_id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", AdaptiveUUID(), ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)

survey_group_assignments = Table(
    "survey_group_assignments",
    Base.metadata,
    Column("survey_id", AdaptiveUUID(), ForeignKey("surveys.survey_id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", AdaptiveUUID(), ForeignKey("groups.group_id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime(timezone=True), nullable=False, default=utcnow),
)
