"""Contributor repository: users who created or edited a document."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.document import ContributorResult
from docshare.infrastructure.persistence.models.contributor import Contributor
from docshare.infrastructure.persistence.models.user import User
from docshare.infrastructure.persistence.repositories.base import BaseRepository
from docshare.shared.utils import generate_cuid


class ContributorRepository(BaseRepository[Contributor]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Contributor)

    async def list_for_document(self, document_id: str) -> list[ContributorResult]:
        result = await self.db.execute(
            select(User.username, User.email)
            .join(Contributor, Contributor.user_id == User.id)
            .where(Contributor.document_id == document_id, User.deleted_at.is_(None))
            .order_by(User.username)
        )
        return [
            ContributorResult(username=username, email=email)
            for username, email in result.all()
        ]

    async def add_contributor(self, document_id: str, user_id: str) -> None:
        """Insert (document_id, user_id) unless it is already recorded."""
        await self.db.execute(
            insert(Contributor)
            .values(id=generate_cuid(), document_id=document_id, user_id=user_id)
            .on_conflict_do_nothing(constraint="uq_contributor_document_user")
        )
