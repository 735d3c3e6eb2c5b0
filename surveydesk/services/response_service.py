"""Response store: submission checks and listing."""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.config import get_settings
from surveydesk.models.base import CHOICE_QUESTION_TYPES, RANGE_QUESTION_TYPES, SurveyStatus, utcnow
from surveydesk.models.survey_response import SurveyResponse
from surveydesk.models.user import User
from surveydesk.schemas.response import ResponseRecord
from surveydesk.services.errors import ConflictError, ValidationError
from surveydesk.services.survey_service import SurveyService
from surveydesk.utils.datetime_helpers import ensure_utc

logger = logging.getLogger(__name__)

ANONYMOUS_USERNAME = "Anonymous"


def validate_answers(questions: Sequence[Mapping], answers: Mapping[str, str]) -> dict[str, str]:
    """Check answers against a survey's question list and return them normalised.

    Raises:
        ValidationError: on an unknown question id, a blank required answer,
            a choice outside the options or a range answer outside [min, max].
    """
    by_id = {question["id"]: question for question in questions}

    unknown = [question_id for question_id in answers if question_id not in by_id]
    if unknown:
        raise ValidationError("unknown_question")

    cleaned: dict[str, str] = {}
    for question_id, question in by_id.items():
        raw = answers.get(question_id)
        value = str(raw).strip() if raw is not None else ""

        if not value:
            if question.get("required"):
                raise ValidationError("missing_required_answer")
            continue

        if question["type"] in CHOICE_QUESTION_TYPES:
            if value not in (question.get("options") or []):
                raise ValidationError("invalid_choice")
        elif question["type"] in RANGE_QUESTION_TYPES:
            try:
                number = float(value)
            except ValueError as exc:
                raise ValidationError("invalid_number") from exc
            if not math.isfinite(number):
                raise ValidationError("invalid_number")
            low, high = question.get("min"), question.get("max")
            if (low is not None and number < low) or (high is not None and number > high):
                raise ValidationError("answer_out_of_range")

        cleaned[question_id] = value
    return cleaned


class ResponseService:
    """Stores survey responses and lists them with the responder's username."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.settings = get_settings()

    async def submit_response(
        self,
        survey_id: UUID,
        user_id: Optional[UUID],
        answers: Mapping[str, str],
        submitted_at: Optional[datetime] = None,
    ) -> SurveyResponse:
        survey = await SurveyService(self.db).get_survey(survey_id)
        if survey.status != SurveyStatus.ACTIVE.value:
            raise ValidationError("survey_not_active")

        cleaned = validate_answers(survey.questions or [], answers)

        if user_id is not None and not self.settings.allow_duplicate_responses:
            existing = await self.db.execute(
                select(SurveyResponse.response_id)
                .where(SurveyResponse.survey_id == survey_id)
                .where(SurveyResponse.user_id == user_id)
                .limit(1)
            )
            if existing.first() is not None:
                raise ConflictError("response_already_submitted")

        response = SurveyResponse(
            survey_id=survey_id,
            user_id=user_id,
            answers=cleaned,
            submitted_at=ensure_utc(submitted_at) or utcnow(),
        )
        self.db.add(response)
        await self.db.commit()
        await self.db.refresh(response)
        logger.info(f"Recorded response {response.response_id} for survey {survey_id} from user {user_id}")
        return response

    async def get_responses(self, survey_id: Optional[UUID] = None) -> list[SurveyResponse]:
        query = select(SurveyResponse).order_by(SurveyResponse.submitted_at.desc())
        if survey_id is not None:
            query = query.where(SurveyResponse.survey_id == survey_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_responses(self, survey_id: Optional[UUID] = None) -> list[ResponseRecord]:
        """Responses (optionally for one survey), newest first, with usernames attached."""
        responses = await self.get_responses(survey_id)
        return await self.to_records(responses)

    async def to_records(self, responses: Sequence[SurveyResponse]) -> list[ResponseRecord]:
        user_ids = {response.user_id for response in responses if response.user_id is not None}
        usernames: dict[UUID, str] = {}
        if user_ids:
            result = await self.db.execute(
                select(User.user_id, User.username).where(User.user_id.in_(user_ids))
            )
            usernames = {row.user_id: row.username for row in result}

        return [
            ResponseRecord(
                response_id=response.response_id,
                survey_id=response.survey_id,
                user_id=response.user_id,
                username=usernames.get(response.user_id, ANONYMOUS_USERNAME),
                answers=response.answers or {},
                submitted_at=ensure_utc(response.submitted_at),
            )
            for response in responses
        ]
