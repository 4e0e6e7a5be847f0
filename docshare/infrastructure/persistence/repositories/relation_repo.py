"""Relation repository: links between documents, listed from both ends."""

from __future__ import annotations

from sqlalchemy import literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.document import RelationResult
from docshare.infrastructure.persistence.models.document import Document
from docshare.infrastructure.persistence.models.relation import Relation
from docshare.infrastructure.persistence.repositories.base import BaseRepository


class RelationRepository(BaseRepository[Relation]):
    """Relations as RelationResult values; deleted documents never appear."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Relation)

    async def list_for_document(self, document_id: str) -> list[RelationResult]:
        outgoing = (
            select(Document.id, Document.title, literal(True).label("source"))
            .join(Relation, Relation.to_document_id == Document.id)
            .where(Relation.from_document_id == document_id)
        )
        incoming = (
            select(Document.id, Document.title, literal(False).label("source"))
            .join(Relation, Relation.from_document_id == Document.id)
            .where(Relation.to_document_id == document_id)
        )
        live = (Relation.deleted_at.is_(None), Document.deleted_at.is_(None))
        linked = outgoing.where(*live).union_all(incoming.where(*live)).subquery()
        result = await self.db.execute(
            select(linked.c.id, linked.c.title, linked.c.source).order_by(
                linked.c.title, linked.c.id
            )
        )
        return [
            RelationResult(id=row.id, title=row.title, source=bool(row.source))
            for row in result.all()
        ]

    async def set_relations(self, document_id: str, target_ids: set[str]) -> None:
        """Soft-delete outgoing links not in target_ids and add the missing ones."""
        result = await self.db.execute(
            select(Relation.to_document_id).where(
                Relation.from_document_id == document_id,
                Relation.deleted_at.is_(None),
            )
        )
        current = set(result.scalars().all())
        removed = current - target_ids
        if removed:
            await self._soft_delete_where(
                Relation.from_document_id == document_id,
                Relation.to_document_id.in_(removed),
            )
        for target_id in sorted(target_ids - current):
            self.db.add(Relation(from_document_id=document_id, to_document_id=target_id))
        await self.db.flush()

    async def delete_for_document(self, document_id: str) -> int:
        """Soft-delete every live link starting or ending at the document."""
        return await self._soft_delete_where(
            or_(
                Relation.from_document_id == document_id,
                Relation.to_document_id == document_id,
            )
        )
