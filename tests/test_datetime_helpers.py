"""Tests for datetime helpers and UTC serialisation of API payloads."""
from datetime import UTC, date, datetime, timedelta, timezone
import uuid

from surveydesk.schemas.response import ResponseRecord
from surveydesk.schemas.base import serialize_datetime_utc
from surveydesk.utils.datetime_helpers import ensure_utc, minutes_between, trailing_days


def test_ensure_utc_none_returns_none():
    assert ensure_utc(None) is None


def test_ensure_utc_marks_naive_sqlite_values_as_utc():
    """Naive datetimes read back from SQLite keep their wall clock and gain UTC."""
    naive = datetime(2024, 5, 1, 12, 30, 0)

    result = ensure_utc(naive)

    assert result.tzinfo is UTC
    assert result.replace(tzinfo=None) == naive


def test_ensure_utc_converts_offsets():
    eastern = timezone(timedelta(hours=-4))

    result = ensure_utc(datetime(2024, 5, 1, 8, 0, tzinfo=eastern))

    assert result.tzinfo is UTC
    assert result == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def test_serialize_datetime_utc_uses_z_suffix():
    assert serialize_datetime_utc(datetime(2024, 5, 1, 12, 0)) == "2024-05-01T12:00:00Z"
    assert serialize_datetime_utc(
        datetime(2024, 5, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    ) == "2024-05-01T12:00:00Z"


def test_schema_dump_serialises_submission_time():
    record = ResponseRecord(
        response_id=uuid.uuid4(),
        survey_id=uuid.uuid4(),
        answers={"q1": "yes"},
        submitted_at=datetime(2025, 1, 1, 9, 30),
    )

    data = record.model_dump()

    assert data["submitted_at"] == "2025-01-01T09:30:00Z"
    assert data["username"] == "Anonymous"


def test_trailing_days_ends_on_given_date():
    days = trailing_days(3, date(2024, 3, 4))

    assert days == [date(2024, 3, 2), date(2024, 3, 3), date(2024, 3, 4)]


def test_minutes_between_mixes_naive_and_aware():
    start = datetime(2024, 5, 1, 12, 0)
    end = datetime(2024, 5, 1, 12, 1, 30, tzinfo=UTC)

    assert minutes_between(start, end) == 1.5
