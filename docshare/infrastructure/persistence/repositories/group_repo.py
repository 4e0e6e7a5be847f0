"""Group membership repository (group ids for identity scopes)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.infrastructure.persistence.models.group import Group, GroupMember
from docshare.infrastructure.persistence.repositories.base import BaseRepository


class GroupRepository(BaseRepository[Group]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Group)

    async def get_group_ids_for_user(self, user_id: str) -> list[str]:
        """Return ids of live groups the user is a live member of, ordered by name."""
        result = await self.db.execute(
            select(Group.id)
            .join(GroupMember, GroupMember.group_id == Group.id)
            .where(
                GroupMember.user_id == user_id,
                GroupMember.deleted_at.is_(None),
                Group.deleted_at.is_(None),
            )
            .order_by(Group.name)
        )
        return list(result.scalars().all())
