"""Survey template endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.database import get_db
from surveydesk.dependencies import require
from surveydesk.routers.errors import raise_http
from surveydesk.schemas.template import (
    TemplateCreate,
    TemplateExistsRequest,
    TemplateExistsResponse,
    TemplateOut,
    TemplateUpdate,
)
from surveydesk.services import Capability, Principal, ServiceError, TemplateService

router = APIRouter()


@router.get("", response_model=list[TemplateOut])
async def list_templates(
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    templates = await TemplateService(db).list_templates()
    return [TemplateOut.model_validate(template) for template in templates]


@router.post("", response_model=TemplateOut, status_code=201)
async def create_template(
    request: TemplateCreate,
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    template = await TemplateService(db).create_template(
        request.title, request.questions, description=request.description
    )
    return TemplateOut.model_validate(template)


@router.post("/check-existing", response_model=TemplateExistsResponse)
async def check_existing_template(
    request: TemplateExistsRequest,
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    """Report whether a template with the same title (and description) is already stored."""
    exists = await TemplateService(db).template_exists(request.title, request.description)
    return TemplateExistsResponse(exists=exists)


@router.get("/{template_id}", response_model=TemplateOut)
async def get_template(
    template_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    try:
        template = await TemplateService(db).get_template(template_id)
    except ServiceError as exc:
        raise_http(exc)
    return TemplateOut.model_validate(template)


@router.patch("/{template_id}", response_model=TemplateOut)
async def update_template(
    template_id: UUID,
    request: TemplateUpdate,
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    try:
        template = await TemplateService(db).update_template(
            template_id,
            title=request.title,
            description=request.description,
            questions=request.questions,
        )
    except ServiceError as exc:
        raise_http(exc)
    return TemplateOut.model_validate(template)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: UUID,
    principal: Principal = Depends(require(Capability.MANAGE_TEMPLATES)),
    db: AsyncSession = Depends(get_db),
):
    try:
        await TemplateService(db).delete_template(template_id)
    except ServiceError as exc:
        raise_http(exc)
    return Response(status_code=204)
