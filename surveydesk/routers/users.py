"""User administration and the caller's assigned surveys."""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.models.base import SurveyStatus
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.survey import AssignedSurveyOut, SurveyOut
from surveydesk.schemas.user import UserCreateRequest, UserOut, UserRoleUpdate
from surveydesk.services import Capability, Principal, ServiceError, SurveyService, UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[UserOut])
async def list_users(
    principal: Principal = Depends(require(Capability.MANAGE_USERS)),
    db: AsyncSession = Depends(get_db),
):
    users = await UserService(db).list_users()
    return [UserOut.model_validate(user) for user in users]


@router.post("", response_model=UserOut, status_code=201)
async def create_user(
    request: UserCreateRequest,
    principal: Principal = Depends(require(Capability.MANAGE_USERS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await UserService(db).create_user(
            request.username, request.email, request.password, role=request.role
        )
    except ServiceError as exc:
        raise_http(exc)
    return UserOut.model_validate(user)


@router.get("/assigned-surveys", response_model=list[AssignedSurveyOut])
async def list_assigned_surveys(
    status: Optional[SurveyStatus] = None,
    principal: Principal = Depends(require(Capability.VIEW_SURVEYS)),
    db: AsyncSession = Depends(get_db),
):
    """Surveys assigned to any of the caller's groups."""
    try:
        assigned = await SurveyService(db).list_assigned_surveys(principal.user_id, status=status)
    except ServiceError as exc:
        raise_http(exc)
    return [
        AssignedSurveyOut(**SurveyOut.model_validate(survey).model_dump(), group_name=group_name)
        for survey, group_name in assigned
    ]


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_USERS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await UserService(db).get_user(user_id)
    except ServiceError as exc:
        raise_http(exc)
    return UserOut.model_validate(user)


@router.patch("/{user_id}", response_model=UserOut)
async def update_user_role(
    user_id: UUID,
    request: UserRoleUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_USERS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        user = await UserService(db).update_role(user_id, request.role)
    except ServiceError as exc:
        raise_http(exc)
    return UserOut.model_validate(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_USERS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        await UserService(db).delete_user(user_id)
    except ServiceError as exc:
        raise_http(exc)
    return Response(status_code=204)
