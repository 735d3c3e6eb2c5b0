"""Response submission and listing endpoints."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.response import ResponseRecord, ResponseSubmission, ResponseSubmitted
from surveydesk.services import Capability, Principal, ResponseService, ServiceError

router = APIRouter()


@router.post("", response_model=ResponseSubmitted, status_code=201)
async def submit_response(
    request: ResponseSubmission,
    principal: Principal = Depends(require(Capability.TAKE_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    """Record the caller's answers to an active survey."""
    try:
        response = await ResponseService(db).submit_response(
            request.survey_id,
            principal.user_id,
            request.answers,
            submitted_at=request.submitted_at,
        )
    except ServiceError as exc:
        raise_http(exc)
    return ResponseSubmitted(response_id=response.response_id, message="Response submitted successfully")


@router.get("", response_model=list[ResponseRecord])
async def list_responses(
    survey_id: Optional[UUID] = None,
    principal: Principal = Depends(require(Capability.VIEW_ANALYTICS)),
    db: AsyncSession = Depends(get_db),
):
    return await ResponseService(db).list_responses(survey_id)
