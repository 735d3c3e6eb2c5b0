"""Analytics summary schemas."""
from datetime import date
from typing import Optional
from uuid import UUID

from surveydesk.models.base import SurveyStatus
from surveydesk.schemas.base import BaseSchema
from surveydesk.schemas.question import Question
from surveydesk.schemas.response import ResponseRecord


class SurveyAggregate(BaseSchema):
    """Response totals for one survey."""

    survey_id: UUID
    survey_title: str
    total_responses: int = 0
    average_answers: float = 0.0
    response_distribution: dict[str, int] = {}


class TimeSeriesBucket(BaseSchema):
    day_label: str
    date: date
    count: int


class LeaderboardEntry(BaseSchema):
    survey_id: UUID
    title: str
    count: int


class DashboardSummary(BaseSchema):
    total_responses: int
    total_surveys: int
    active_surveys: int
    average_answers_per_response: float


class QuestionBreakdown(BaseSchema):
    """How often each answer value was given for one question."""

    question_id: str
    text: str
    type: str
    answered: int
    answers: dict[str, int]


class SurveyAnalytics(BaseSchema):
    survey_id: UUID
    title: str
    status: SurveyStatus
    questions: list[Question]
    aggregate: SurveyAggregate
    question_breakdown: list[QuestionBreakdown]
    average_response_time_minutes: int
    responses: list[ResponseRecord]


class AnalyticsOverview(BaseSchema):
    summary: DashboardSummary
    surveys: list[SurveyAggregate]
    time_series: list[TimeSeriesBucket]
    leaderboard: list[LeaderboardEntry]
    window_days: int
    generated_for: Optional[date] = None
