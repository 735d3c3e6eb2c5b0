"""Group entity store."""
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from surveydesk.models.group import Group
from surveydesk.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class GroupService:
    """CRUD for groups. Membership and survey links are handled by AssignmentService."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _select_groups():
        return select(Group).options(selectinload(Group.assigned_surveys))

    async def get_group(self, group_id: UUID) -> Group:
        result = await self.db.execute(
            self._select_groups()
            .where(Group.group_id == group_id)
            .execution_options(populate_existing=True)
        )
        group = result.scalar_one_or_none()
        if not group:
            raise NotFoundError("group_not_found")
        return group

    async def list_groups(self) -> list[Group]:
        result = await self.db.execute(
            self._select_groups().order_by(Group.name).execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create_group(self, name: str, description: Optional[str] = None) -> Group:
        group = Group(name=name.strip(), description=description)
        self.db.add(group)
        await self.db.commit()
        logger.info(f"Created group {group.group_id} ({group.name})")
        return await self.get_group(group.group_id)

    async def update_group(
        self,
        group_id: UUID,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Group:
        group = await self.get_group(group_id)
        if name is not None:
            group.name = name.strip()
        if description is not None:
            group.description = description
        await self.db.commit()
        return await self.get_group(group_id)

    async def delete_group(self, group_id: UUID) -> None:
        """Delete a group together with its membership and assignment links."""
        group = await self.get_group(group_id)
        await self.db.delete(group)
        await self.db.commit()
        logger.info(f"Deleted group {group_id}")
