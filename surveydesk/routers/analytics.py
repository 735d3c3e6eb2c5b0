"""Dashboard analytics endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.analytics import (
    AnalyticsOverview,
    LeaderboardEntry,
    SurveyAggregate,
    TimeSeriesBucket,
)
from surveydesk.services import AggregationService, Capability, Principal, ServiceError

router = APIRouter()


@router.get("/overview", response_model=AnalyticsOverview)
async def get_overview(
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    """Totals, per-survey aggregates, time series and leaderboard in one payload."""
    return await AggregationService(db).overview()


@router.get("/surveys", response_model=list[SurveyAggregate])
async def get_survey_aggregates(
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    return await AggregationService(db).survey_aggregates()


@router.get("/time-series", response_model=list[TimeSeriesBucket])
async def get_time_series(
    window_days: Optional[int] = Query(default=None, le=366),
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await AggregationService(db).time_series(window_days)
    except ServiceError as exc:
        raise_http(exc)


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    top_n: Optional[int] = Query(default=None, ge=1, le=100),
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    return await AggregationService(db).leaderboard(top_n)
