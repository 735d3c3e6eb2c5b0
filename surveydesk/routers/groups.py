"""Group CRUD and membership endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.group import GroupCreate, GroupOut, GroupUpdate, GroupUsersRequest
from surveydesk.services import AssignmentService, Capability, GroupService, Principal, ServiceError

router = APIRouter()


@router.get("", response_model=list[GroupOut])
async def list_groups(
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    groups = await GroupService(db).list_groups()
    return [GroupOut.model_validate(group) for group in groups]


@router.post("", response_model=GroupOut, status_code=201)
async def create_group(
    request: GroupCreate,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    group = await GroupService(db).create_group(request.name, request.description)
    return GroupOut.model_validate(group)


@router.get("/{group_id}", response_model=GroupOut)
async def get_group(
    group_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        group = await GroupService(db).get_group(group_id)
    except ServiceError as exc:
        raise_http(exc)
    return GroupOut.model_validate(group)


@router.put("/{group_id}", response_model=GroupOut)
async def update_group(
    group_id: UUID,
    request: GroupUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        group = await GroupService(db).update_group(
            group_id, name=request.name, description=request.description
        )
    except ServiceError as exc:
        raise_http(exc)
    return GroupOut.model_validate(group)


@router.delete("/{group_id}", status_code=204)
async def delete_group(
    group_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    try:
        await GroupService(db).delete_group(group_id)
    except ServiceError as exc:
        raise_http(exc)
    return Response(status_code=204)


@router.post("/{group_id}/assign", response_model=GroupOut)
async def assign_users(
    group_id: UUID,
    request: GroupUsersRequest,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    """Add users to the group."""
    try:
        group = await AssignmentService(db).assign_users_to_group(group_id, request.user_ids)
    except ServiceError as exc:
        raise_http(exc)
    return GroupOut.model_validate(group)


@router.post("/{group_id}/remove", response_model=GroupOut)
async def remove_users(
    group_id: UUID,
    request: GroupUsersRequest,
    principal: Principal = Depends(require(Capability.MANAGE_GROUPS)),
    db: AsyncSession = Depends(get_db),
):
    """Remove users from the group."""
    try:
        group = await AssignmentService(db).remove_users_from_group(group_id, request.user_ids)
    except ServiceError as exc:
        raise_http(exc)
    return GroupOut.model_validate(group)
