"""Template entity store."""
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.models.template import Template
from surveydesk.schemas.question import Question, dump_questions
from surveydesk.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class TemplateService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_template(self, template_id: UUID) -> Template:
        result = await self.db.execute(select(Template).where(Template.template_id == template_id))
        template = result.scalar_one_or_none()
        if not template:
            raise NotFoundError("template_not_found")
        return template

    async def list_templates(self) -> list[Template]:
        result = await self.db.execute(select(Template).order_by(Template.created_at.desc()))
        return list(result.scalars().all())

    async def create_template(
        self,
        title: str,
        questions: list[Question],
        description: Optional[str] = None,
    ) -> Template:
        template = Template(
            title=title.strip(),
            description=description,
            questions=dump_questions(questions),
        )
        self.db.add(template)
        await self.db.commit()
        await self.db.refresh(template)
        logger.info(f"Created template {template.template_id} ({template.title})")
        return template

    async def update_template(
        self,
        template_id: UUID,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        questions: Optional[list[Question]] = None,
    ) -> Template:
        template = await self.get_template(template_id)
        if title is not None:
            template.title = title.strip()
        if description is not None:
            template.description = description
        if questions is not None:
            template.questions = dump_questions(questions)
        await self.db.commit()
        await self.db.refresh(template)
        return template

    async def delete_template(self, template_id: UUID) -> None:
        """Delete a template. Surveys created from it keep their own copy of the questions."""
        template = await self.get_template(template_id)
        await self.db.delete(template)
        await self.db.commit()
        logger.info(f"Deleted template {template_id}")

    async def template_exists(self, title: str, description: Optional[str] = None) -> bool:
        """Whether a template with this title (and description, when given) is already stored."""
        query = select(Template.template_id).where(Template.title == title.strip())
        if description is not None:
            query = query.where(Template.description == description)
        result = await self.db.execute(query.limit(1))
        return result.first() is not None
