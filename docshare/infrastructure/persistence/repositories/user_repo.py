"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.user import UserResult
from docshare.infrastructure.persistence.models.user import User
from docshare.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    """User lookups for identity scopes and the by: search clause."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        row = await self._get_live(user_id)
        return _user_to_result(row) if row else None

    async def get_active_by_username(self, username: str) -> UserResult | None:
        """Return the active, non-deleted user with exactly this username."""
        result = await self.db.execute(
            select(User).where(
                User.username == username,
                User.is_active.is_(True),
                User.deleted_at.is_(None),
            )
        )
        row = result.scalar_one_or_none()
        return _user_to_result(row) if row else None
