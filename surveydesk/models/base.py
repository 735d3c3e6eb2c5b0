"""Base utilities for SQLAlchemy models."""
from datetime import datetime, UTC
from enum import Enum
import uuid

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.sql import sqltypes


class UserRole(str, Enum):
    """Account role enumeration for type safety."""
    ADMIN = "admin"
    USER = "user"


class SurveyStatus(str, Enum):
    """Survey lifecycle status: draft -> active -> closed."""
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"


class QuestionType(str, Enum):
    """Question type enumeration."""
    TEXT_INPUT = "text-input"
    MULTIPLE_CHOICE = "multiple-choice"
    RATING_SCALE = "rating-scale"
    DROPDOWN = "dropdown"
    SLIDER = "slider"


CHOICE_QUESTION_TYPES = frozenset({QuestionType.MULTIPLE_CHOICE, QuestionType.DROPDOWN})
RANGE_QUESTION_TYPES = frozenset({QuestionType.RATING_SCALE, QuestionType.SLIDER})


def utcnow() -> datetime:
    return datetime.now(UTC)


class AdaptiveUUID(sqltypes.TypeDecorator):
    """UUID stored natively on PostgreSQL and as 32-char hex elsewhere."""

    impl = sqltypes.String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PGUUID(as_uuid=True))
        return dialect.type_descriptor(String(36))

    @staticmethod
    def _coerce_uuid(value):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))

    def process_bind_param(self, value, dialect):
        value = self._coerce_uuid(value)
        if value is None:
            return None
        if dialect.name == "postgresql":
            return value
        return value.hex

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self._coerce_uuid(value)


def get_uuid_column(*args, **kwargs):
    """Get a UUID column that adapts to the database dialect at runtime.

    Args:
        *args: Positional arguments to pass to Column (e.g., ForeignKey)
        **kwargs: Keyword arguments to pass to Column (e.g., primary_key=True)

    Example:
        user_id = get_uuid_column(primary_key=True, default=uuid.uuid4)
        group_id = get_uuid_column(ForeignKey("groups.group_id"), nullable=False)
    """
    return Column(AdaptiveUUID(), *args, **kwargs)
