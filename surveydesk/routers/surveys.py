"""Survey endpoints: authoring, lifecycle, assignment and per-survey analytics."""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.models.base import SurveyStatus
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.analytics import SurveyAnalytics
from surveydesk.schemas.question import Question
from surveydesk.schemas.survey import (
    SurveyCreate,
    SurveyGroupsRequest,
    SurveyOut,
    SurveyStatusUpdate,
    SurveyUpdate,
)
from surveydesk.services import (
    AggregationService,
    AssignmentService,
    Capability,
    Principal,
    ServiceError,
    SurveyService,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[SurveyOut])
async def list_surveys(
    status: Optional[SurveyStatus] = None,
    principal: Principal = Depends(require(Capability.VIEW_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    surveys = await SurveyService(db).list_surveys(status=status)
    return [SurveyOut.model_validate(survey) for survey in surveys]


@router.post("", response_model=SurveyOut, status_code=201)
async def create_survey(
    request: SurveyCreate,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        survey = await SurveyService(db).create_survey(
            principal.user_id,
            request.title,
            request.questions,
            description=request.description,
            status=request.status,
            theme=request.theme,
        )
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.post("/from-template/{template_id}", response_model=SurveyOut, status_code=201)
async def create_survey_from_template(
    template_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    """Start a draft survey from a template's questions."""
    try:
        survey = await SurveyService(db).create_from_template(template_id, principal.user_id)
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.get("/{survey_id}", response_model=SurveyOut)
async def get_survey(
    survey_id: UUID,
    principal: Principal = Depends(require(Capability.VIEW_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        survey = await SurveyService(db).get_survey(survey_id)
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.get("/{survey_id}/questions", response_model=list[Question])
async def get_survey_questions(
    survey_id: UUID,
    principal: Principal = Depends(require(Capability.VIEW_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        questions = await SurveyService(db).get_questions(survey_id)
    except ServiceError as exc:
        raise_http(exc)
    return [Question.model_validate(question) for question in questions]


@router.put("/{survey_id}", response_model=SurveyOut)
async def update_survey(
    survey_id: UUID,
    request: SurveyUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        survey = await SurveyService(db).update_survey(
            survey_id,
            title=request.title,
            description=request.description,
            questions=request.questions,
            theme=request.theme,
            status=request.status,
        )
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.patch("/{survey_id}/status", response_model=SurveyOut)
async def update_survey_status(
    survey_id: UUID,
    request: SurveyStatusUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    """Publish or close a survey."""
    try:
        survey = await SurveyService(db).set_status(survey_id, request.status)
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.delete("/{survey_id}", status_code=204)
async def delete_survey(
    survey_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        await SurveyService(db).delete_survey(survey_id)
    except ServiceError as exc:
        raise_http(exc)
    return Response(status_code=204)


@router.post("/{survey_id}/assign", response_model=SurveyOut)
async def assign_groups(
    survey_id: UUID,
    request: SurveyGroupsRequest,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    """Assign the survey to groups."""
    try:
        survey = await AssignmentService(db).assign_groups_to_survey(survey_id, request.group_ids)
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.post("/{survey_id}/unassign", response_model=SurveyOut)
async def unassign_groups(
    survey_id: UUID,
    request: SurveyGroupsRequest,
    principal: Principal = Depends(require(Capability.MANAGE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        survey = await AssignmentService(db).unassign_groups_from_survey(survey_id, request.group_ids)
    except ServiceError as exc:
        raise_http(exc)
    return SurveyOut.model_validate(survey)


@router.get("/{survey_id}/analytics", response_model=SurveyAnalytics)
async def get_survey_analytics(
    survey_id: UUID,
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await AggregationService(db).survey_analytics(survey_id)
    except ServiceError as exc:
        raise_http(exc)
