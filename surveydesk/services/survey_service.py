"""Survey entity store and lifecycle."""
from __future__ import annotations

import copy
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from surveydesk.models.base import SurveyStatus
from surveydesk.models.group import Group
from surveydesk.models.survey import Survey
from surveydesk.models.user import User
from surveydesk.schemas.question import Question, dump_questions
from surveydesk.services.errors import NotFoundError, ValidationError
from surveydesk.services.template_service import TemplateService
from surveydesk.utils.datetime_helpers import ensure_utc

logger = logging.getLogger(__name__)

# draft --publish--> active --close--> closed
STATUS_TRANSITIONS: dict[SurveyStatus, frozenset[SurveyStatus]] = {
    SurveyStatus.DRAFT: frozenset({SurveyStatus.ACTIVE}),
    SurveyStatus.ACTIVE: frozenset({SurveyStatus.CLOSED}),
    SurveyStatus.CLOSED: frozenset(),
}
CREATABLE_STATUSES = frozenset({SurveyStatus.DRAFT, SurveyStatus.ACTIVE})


def check_status_transition(current: SurveyStatus, target: SurveyStatus) -> bool:
    """Return True when moving from ``current`` to ``target`` changes anything.

    Raises:
        ValidationError: if the move is not a forward lifecycle step.
    """
    current, target = SurveyStatus(current), SurveyStatus(target)
    if current == target:
        return False
    if target not in STATUS_TRANSITIONS[current]:
        raise ValidationError("invalid_status_transition")
    return True


class SurveyService:
    """Survey entity store: CRUD, lifecycle and template instantiation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_survey(self, survey_id: UUID) -> Survey:
        result = await self.db.execute(select(Survey).where(Survey.survey_id == survey_id))
        survey = result.scalar_one_or_none()
        if not survey:
            raise NotFoundError("survey_not_found")
        return survey

    async def list_surveys(self, status: Optional[SurveyStatus] = None) -> list[Survey]:
        query = select(Survey).order_by(Survey.created_at.desc())
        if status is not None:
            query = query.where(Survey.status == SurveyStatus(status).value)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_questions(self, survey_id: UUID) -> list[dict]:
        survey = await self.get_survey(survey_id)
        return list(survey.questions or [])

    async def create_survey(
        self,
        creator_id: UUID,
        title: str,
        questions: list[Question],
        *,
        description: Optional[str] = None,
        status: SurveyStatus = SurveyStatus.DRAFT,
        theme: Optional[str] = None,
    ) -> Survey:
        """Create a survey as a draft, or publish it directly with ``status=active``."""
        status = SurveyStatus(status)
        if status not in CREATABLE_STATUSES:
            raise ValidationError("invalid_initial_status")

        survey = Survey(
            title=title.strip(),
            description=description,
            creator_id=creator_id,
            status=status.value,
            questions=dump_questions(questions),
            theme=theme,
        )
        return await self._save_new(survey)

    async def create_from_template(
        self,
        template_id: UUID,
        creator_id: UUID,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Survey:
        """Start a draft survey whose question list is a verbatim copy of the template's."""
        template = await TemplateService(self.db).get_template(template_id)
        survey = Survey(
            title=(title or template.title).strip(),
            description=description if description is not None else template.description,
            creator_id=creator_id,
            status=SurveyStatus.DRAFT.value,
            questions=copy.deepcopy(template.questions or []),
        )
        survey = await self._save_new(survey)
        logger.info(f"Survey {survey.survey_id} created from template {template_id}")
        return survey

    async def _save_new(self, survey: Survey) -> Survey:
        self.db.add(survey)
        await self.db.commit()
        await self.db.refresh(survey)
        logger.info(f"Created survey {survey.survey_id} ({survey.title}) with status {survey.status}")
        return survey

    async def update_survey(
        self,
        survey_id: UUID,
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        questions: Optional[list[Question]] = None,
        theme: Optional[str] = None,
        status: Optional[SurveyStatus] = None,
    ) -> Survey:
        """Apply a partial update. A status change follows the lifecycle rules."""
        survey = await self.get_survey(survey_id)

        # Validate before touching the instance so a rejected update writes nothing
        status_changed = status is not None and check_status_transition(survey.status, status)

        if title is not None:
            survey.title = title.strip()
        if description is not None:
            survey.description = description
        if questions is not None:
            survey.questions = dump_questions(questions)
        if theme is not None:
            survey.theme = theme
        if status_changed:
            survey.status = SurveyStatus(status).value

        await self.db.commit()
        await self.db.refresh(survey)
        return survey

    async def set_status(self, survey_id: UUID, status: SurveyStatus) -> Survey:
        survey = await self.get_survey(survey_id)
        previous = survey.status
        if not check_status_transition(survey.status, status):
            return survey

        survey.status = SurveyStatus(status).value
        await self.db.commit()
        await self.db.refresh(survey)
        logger.info(f"Survey {survey_id} moved from {previous} to {survey.status}")
        return survey

    async def publish(self, survey_id: UUID) -> Survey:
        return await self.set_status(survey_id, SurveyStatus.ACTIVE)

    async def close(self, survey_id: UUID) -> Survey:
        return await self.set_status(survey_id, SurveyStatus.CLOSED)

    async def delete_survey(self, survey_id: UUID) -> None:
        """Delete a survey and its group links. Its responses are kept."""
        survey = await self.get_survey(survey_id)
        await self.db.delete(survey)
        await self.db.commit()
        logger.info(f"Deleted survey {survey_id}")

    async def list_assigned_surveys(
        self,
        user_id: UUID,
        status: Optional[SurveyStatus] = None,
    ) -> list[tuple[Survey, str]]:
        """Surveys reachable through the user's groups, each once, newest first.

        Each survey is paired with the name of the first group (by name) that
        carries it.
        """
        result = await self.db.execute(
            select(User)
            .where(User.user_id == user_id)
            .options(selectinload(User.groups).selectinload(Group.assigned_surveys))
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("user_not_found")

        seen: dict[UUID, tuple[Survey, str]] = {}
        for group in sorted(user.groups, key=lambda g: g.name):
            for survey in group.assigned_surveys:
                if status is not None and survey.status != SurveyStatus(status).value:
                    continue
                seen.setdefault(survey.survey_id, (survey, group.name))

        return sorted(seen.values(), key=lambda item: ensure_utc(item[0].created_at), reverse=True)
