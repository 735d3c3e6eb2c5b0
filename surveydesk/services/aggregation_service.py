"""Dashboard and per-survey analytics.

The module-level functions are pure folds over surveys and responses that are
already in memory: they never query the database and never mutate their
inputs. :class:`AggregationService` loads a snapshot and feeds it to them.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import date
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.config import get_settings
from surveydesk.models.base import SurveyStatus
from surveydesk.models.survey import Survey
from surveydesk.models.survey_response import SurveyResponse
from surveydesk.schemas.analytics import (
    AnalyticsOverview,
    DashboardSummary,
    LeaderboardEntry,
    QuestionBreakdown,
    SurveyAggregate,
    SurveyAnalytics,
    TimeSeriesBucket,
)
from surveydesk.schemas.question import Question
from surveydesk.services.errors import ValidationError
from surveydesk.services.response_service import ResponseService
from surveydesk.services.survey_service import SurveyService
from surveydesk.utils.datetime_helpers import ensure_utc, minutes_between, trailing_days, utc_today

logger = logging.getLogger(__name__)

DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _is_answered(value) -> bool:
    return value is not None and str(value).strip() != ""


def aggregate_by_survey(
    surveys: Sequence[Survey],
    responses: Sequence[SurveyResponse],
) -> dict[UUID, SurveyAggregate]:
    """Fold responses into one aggregate per survey.

    Every survey gets an entry, zeros included. Responses whose survey is not
    in ``surveys`` are skipped.
    """
    totals: dict[UUID, int] = {survey.survey_id: 0 for survey in surveys}
    answer_sums: dict[UUID, int] = {survey.survey_id: 0 for survey in surveys}
    distributions: dict[UUID, Counter] = {survey.survey_id: Counter() for survey in surveys}

    for response in responses:
        if response.survey_id not in totals:
            continue
        answers = response.answers or {}
        totals[response.survey_id] += 1
        answer_sums[response.survey_id] += len(answers)
        distributions[response.survey_id].update(answers.keys())

    return {
        survey.survey_id: SurveyAggregate(
            survey_id=survey.survey_id,
            survey_title=survey.title,
            total_responses=totals[survey.survey_id],
            average_answers=(
                answer_sums[survey.survey_id] / totals[survey.survey_id]
                if totals[survey.survey_id]
                else 0.0
            ),
            response_distribution=dict(distributions[survey.survey_id]),
        )
        for survey in surveys
    }


def compute_time_series(
    responses: Sequence[SurveyResponse],
    window_days: int = 7,
    today: Optional[date] = None,
) -> list[TimeSeriesBucket]:
    """Daily response counts for the trailing window ending on ``today`` (inclusive).

    Buckets are keyed by calendar date, oldest first, and labelled with the
    weekday abbreviation.
    """
    if window_days < 1:
        raise ValidationError("window_days_must_be_positive")

    today = today or utc_today()
    days = trailing_days(window_days, today)
    counts = Counter(ensure_utc(response.submitted_at).date() for response in responses)

    return [
        TimeSeriesBucket(day_label=DAY_LABELS[day.weekday()], date=day, count=counts.get(day, 0))
        for day in days
    ]


def leaderboard(
    surveys: Sequence[Survey],
    responses: Sequence[SurveyResponse],
    top_n: int = 5,
) -> list[LeaderboardEntry]:
    """Active surveys ranked by response count. Ties keep the input order."""
    counts = Counter(response.survey_id for response in responses)
    entries = [
        LeaderboardEntry(survey_id=survey.survey_id, title=survey.title, count=counts.get(survey.survey_id, 0))
        for survey in surveys
        if survey.status == SurveyStatus.ACTIVE.value
    ]
    # sorted() is stable, so equal counts stay in input order
    entries = sorted(entries, key=lambda entry: entry.count, reverse=True)
    return entries[:max(top_n, 0)]


def average_response_time(survey: Survey, responses: Sequence[SurveyResponse]) -> int:
    """Mean minutes between survey creation and submission, rounded half-up. 0 without responses."""
    minutes = [
        minutes_between(survey.created_at, response.submitted_at)
        for response in responses
        if response.survey_id == survey.survey_id
    ]
    if not minutes:
        return 0
    return math.floor(sum(minutes) / len(minutes) + 0.5)


def summarize(surveys: Sequence[Survey], responses: Sequence[SurveyResponse]) -> DashboardSummary:
    """Totals shown at the top of the dashboard."""
    total_answers = sum(len(response.answers or {}) for response in responses)
    return DashboardSummary(
        total_responses=len(responses),
        total_surveys=len(surveys),
        active_surveys=sum(1 for survey in surveys if survey.status == SurveyStatus.ACTIVE.value),
        average_answers_per_response=total_answers / len(responses) if responses else 0.0,
    )


def question_breakdown(survey: Survey, responses: Sequence[SurveyResponse]) -> list[QuestionBreakdown]:
    """Per question, in survey order: how many responses answered it and with which values."""
    own = [response for response in responses if response.survey_id == survey.survey_id]
    breakdown = []
    for question in survey.questions or []:
        values = Counter(
            str((response.answers or {})[question["id"]]).strip()
            for response in own
            if _is_answered((response.answers or {}).get(question["id"]))
        )
        breakdown.append(
            QuestionBreakdown(
                question_id=question["id"],
                text=question["text"],
                type=question["type"],
                answered=sum(values.values()),
                answers=dict(values),
            )
        )
    return breakdown


class AggregationService:
    """Loads surveys and responses and runs the analytics folds over them."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()
        self.survey_service = SurveyService(db)
        self.response_service = ResponseService(db)

    async def _snapshot(self) -> tuple[list[Survey], list[SurveyResponse]]:
        surveys = await self.survey_service.list_surveys()
        responses = await self.response_service.get_responses()
        return surveys, responses

    async def overview(self, today: Optional[date] = None) -> AnalyticsOverview:
        surveys, responses = await self._snapshot()
        window_days = self.settings.time_series_window_days
        aggregates = aggregate_by_survey(surveys, responses)
        return AnalyticsOverview(
            summary=summarize(surveys, responses),
            surveys=list(aggregates.values()),
            time_series=compute_time_series(responses, window_days, today=today),
            leaderboard=leaderboard(surveys, responses, self.settings.leaderboard_size),
            window_days=window_days,
            generated_for=today or utc_today(),
        )

    async def survey_aggregates(self) -> list[SurveyAggregate]:
        surveys, responses = await self._snapshot()
        return list(aggregate_by_survey(surveys, responses).values())

    async def time_series(
        self,
        window_days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[TimeSeriesBucket]:
        responses = await self.response_service.get_responses()
        return compute_time_series(
            responses,
            window_days if window_days is not None else self.settings.time_series_window_days,
            today=today,
        )

    async def leaderboard(self, top_n: Optional[int] = None) -> list[LeaderboardEntry]:
        surveys, responses = await self._snapshot()
        return leaderboard(surveys, responses, top_n if top_n is not None else self.settings.leaderboard_size)

    async def survey_analytics(self, survey_id: UUID) -> SurveyAnalytics:
        """Aggregate, per-question breakdown, response time and raw answers for one survey."""
        survey = await self.survey_service.get_survey(survey_id)
        responses = await self.response_service.get_responses(survey_id)

        aggregate = aggregate_by_survey([survey], responses)[survey.survey_id]
        logger.debug(f"Computed analytics for survey {survey_id} over {len(responses)} response(s)")
        return SurveyAnalytics(
            survey_id=survey.survey_id,
            title=survey.title,
            status=survey.status,
            questions=[Question.model_validate(question) for question in survey.questions or []],
            aggregate=aggregate,
            question_breakdown=question_breakdown(survey, responses),
            average_response_time_minutes=average_response_time(survey, responses),
            responses=await self.response_service.to_records(responses),
        )
