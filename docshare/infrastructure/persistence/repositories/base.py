"""Base repository: primary-key lookup, create, update and soft delete."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.infrastructure.persistence.database import Base
from docshare.shared.utils import utc_now


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository over one soft-deleted model.

    Subclasses map ORM rows to application DTOs; rows with deleted_at set
    are invisible to every lookup here.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_live(self, entity_id: str) -> ModelType | None:
        """Return a non-deleted record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model).where(model.id == entity_id, model.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and return it refreshed."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush changes on an attached record and return it refreshed."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _soft_delete_where(self, *criteria: Any) -> int:
        """Set deleted_at on every live row matching criteria. Returns the row count."""
        model: Any = self.model
        result = await self.db.execute(
            update(self.model)
            .where(model.deleted_at.is_(None), *criteria)
            .values(deleted_at=utc_now())
        )
        return result.rowcount or 0
