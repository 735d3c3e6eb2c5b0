"""Survey<->group and user<->group assignment.

Both relations live in link tables, so adding a link on one side is visible
from the other side through the same row. Every operation checks its inputs
before the session is touched and commits once at the end; a rejected call
writes nothing.
"""
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from surveydesk.models.group import Group
from surveydesk.models.survey import Survey
from surveydesk.models.user import User
from surveydesk.services.errors import NotFoundError, ValidationError
from surveydesk.services.group_service import GroupService

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[UUID]) -> list[UUID]:
    return list(dict.fromkeys(ids))


class AssignmentService:
    """Maintains the survey<->group and user<->group relations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load_one(self, model, key_column, key: UUID, error_code: str):
        result = await self.db.execute(
            select(model).where(key_column == key).execution_options(populate_existing=True)
        )
        instance = result.scalar_one_or_none()
        if instance is None:
            raise NotFoundError(error_code)
        return instance

    async def _load_all(self, model, key_column, keys: list[UUID], error_code: str) -> list:
        """Load every referenced row, or raise when any of them is missing."""
        result = await self.db.execute(
            select(model).where(key_column.in_(keys)).execution_options(populate_existing=True)
        )
        instances = list(result.scalars().all())
        if len(instances) != len(keys):
            found = {getattr(instance, key_column.key) for instance in instances}
            missing = [key for key in keys if key not in found]
            logger.warning(f"Rejected assignment referencing unknown ids: {missing}")
            raise NotFoundError(error_code)
        return instances

    async def assign_groups_to_survey(self, survey_id: UUID, group_ids: Iterable[UUID]) -> Survey:
        """Add the groups to the survey's assignments. Existing links are kept."""
        group_ids = _unique(group_ids)
        if not group_ids:
            raise ValidationError("group_ids_required")

        survey = await self._load_one(Survey, Survey.survey_id, survey_id, "survey_not_found")
        groups = await self._load_all(Group, Group.group_id, group_ids, "group_not_found")

        added = 0
        for group in groups:
            if group not in survey.assigned_groups:
                survey.assigned_groups.add(group)
                added += 1

        await self.db.commit()
        await self.db.refresh(survey)
        logger.info(f"Assigned survey {survey_id} to {added} new group(s) ({len(groups)} requested)")
        return survey

    async def unassign_groups_from_survey(self, survey_id: UUID, group_ids: Iterable[UUID]) -> Survey:
        """Remove groups from the survey's assignments. Unlinked ids are ignored."""
        group_ids = set(group_ids)
        if not group_ids:
            raise ValidationError("group_ids_required")

        survey = await self._load_one(Survey, Survey.survey_id, survey_id, "survey_not_found")
        for group in [g for g in survey.assigned_groups if g.group_id in group_ids]:
            survey.assigned_groups.discard(group)

        await self.db.commit()
        await self.db.refresh(survey)
        logger.info(f"Unassigned survey {survey_id} from groups {sorted(map(str, group_ids))}")
        return survey

    async def assign_users_to_group(self, group_id: UUID, user_ids: Iterable[UUID]) -> Group:
        """Add users to the group's members. Existing memberships are kept."""
        user_ids = _unique(user_ids)
        if not user_ids:
            raise ValidationError("user_ids_required")

        group = await self._load_one(Group, Group.group_id, group_id, "group_not_found")
        users = await self._load_all(User, User.user_id, user_ids, "user_not_found")

        added = 0
        for user in users:
            if user not in group.members:
                group.members.add(user)
                added += 1

        await self.db.commit()
        logger.info(f"Added {added} new member(s) to group {group_id} ({len(users)} requested)")
        return await GroupService(self.db).get_group(group_id)

    async def remove_users_from_group(self, group_id: UUID, user_ids: Iterable[UUID]) -> Group:
        """Remove users from the group's members. Non-members are ignored."""
        user_ids = set(user_ids)
        if not user_ids:
            raise ValidationError("user_ids_required")

        group = await self._load_one(Group, Group.group_id, group_id, "group_not_found")
        for user in [u for u in group.members if u.user_id in user_ids]:
            group.members.discard(user)

        await self.db.commit()
        logger.info(f"Removed users {sorted(map(str, user_ids))} from group {group_id}")
        return await GroupService(self.db).get_group(group_id)
