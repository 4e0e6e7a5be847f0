"""Tag repository: visibility-scoped lookups and document tag links."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.tag import TagResult
from docshare.domain.enums import AclSourceType, PermissionType
from docshare.infrastructure.persistence.models.acl import Acl
from docshare.infrastructure.persistence.models.tag import DocumentTag, Tag
from docshare.infrastructure.persistence.repositories.base import BaseRepository


def _tag_to_result(t: Tag) -> TagResult:
    return TagResult(id=t.id, name=t.name, color=t.color)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so value matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _readable_tag_ids(target_ids: list[str]):
    """Subquery of tag ids carrying a live READ grant for one of target_ids."""
    return select(Acl.source_id).where(
        Acl.source_type == AclSourceType.TAG.value,
        Acl.perm == PermissionType.READ.value,
        Acl.target_id.in_(target_ids),
        Acl.deleted_at.is_(None),
    )


class TagRepository(BaseRepository[Tag]):
    """Tags as TagResult values; visibility is a READ grant on the tag."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Tag)

    async def find_by_name_and_scope(
        self, name: str, target_ids: Iterable[str]
    ) -> list[TagResult]:
        """Return readable tags whose name contains name, case-insensitively."""
        targets = list(target_ids)
        if not name or not targets:
            return []
        result = await self.db.execute(
            select(Tag)
            .where(
                Tag.name.ilike(f"%{_escape_like(name)}%", escape="\\"),
                Tag.id.in_(_readable_tag_ids(targets)),
                Tag.deleted_at.is_(None),
            )
            .order_by(Tag.name)
        )
        return [_tag_to_result(t) for t in result.scalars().all()]

    async def list_for_document(self, document_id: str) -> list[TagResult]:
        result = await self.db.execute(
            select(Tag)
            .join(
                DocumentTag,
                and_(DocumentTag.tag_id == Tag.id, DocumentTag.deleted_at.is_(None)),
            )
            .where(DocumentTag.document_id == document_id, Tag.deleted_at.is_(None))
            .order_by(Tag.name)
        )
        return [_tag_to_result(t) for t in result.scalars().all()]

    async def get_visible_ids(self, target_ids: Iterable[str]) -> set[str]:
        targets = list(target_ids)
        if not targets:
            return set()
        result = await self.db.execute(
            select(Tag.id).where(
                Tag.id.in_(_readable_tag_ids(targets)), Tag.deleted_at.is_(None)
            )
        )
        return set(result.scalars().all())

    async def set_document_tags(self, document_id: str, tag_ids: set[str]) -> None:
        """Soft-delete links not in tag_ids and add the missing ones."""
        result = await self.db.execute(
            select(DocumentTag).where(
                DocumentTag.document_id == document_id,
                DocumentTag.deleted_at.is_(None),
            )
        )
        current = {link.tag_id for link in result.scalars().all()}
        removed = current - tag_ids
        if removed:
            await self._delete_links(
                DocumentTag.document_id == document_id,
                DocumentTag.tag_id.in_(removed),
            )
        for tag_id in sorted(tag_ids - current):
            self.db.add(DocumentTag(document_id=document_id, tag_id=tag_id))
        await self.db.flush()

    async def delete_document_links(self, document_id: str) -> int:
        """Soft-delete every live tag link of the document."""
        return await self._delete_links(DocumentTag.document_id == document_id)

    async def _delete_links(self, *criteria) -> int:
        link_repo = BaseRepository(self.db, DocumentTag)
        return await link_repo._soft_delete_where(*criteria)
