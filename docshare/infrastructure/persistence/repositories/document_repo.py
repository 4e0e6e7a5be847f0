"""Document repository: criteria search over readable documents. Returns application DTOs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import ColumnElement, and_, exists, func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.document import (
    DocumentCreate,
    DocumentInput,
    DocumentResult,
)
from docshare.application.dtos.search import SearchCriteria
from docshare.domain.enums import AclSourceType, PermissionType
from docshare.domain.exceptions import ResourceNotFoundException
from docshare.domain.value_objects import DocumentSource
from docshare.infrastructure.persistence.models.acl import Acl
from docshare.infrastructure.persistence.models.document import Document
from docshare.infrastructure.persistence.models.share import Share
from docshare.infrastructure.persistence.models.tag import DocumentTag
from docshare.infrastructure.persistence.models.user import User
from docshare.infrastructure.persistence.repositories.acl_repo import AclRepository
from docshare.infrastructure.persistence.repositories.base import BaseRepository
from docshare.infrastructure.persistence.repositories.relation_repo import (
    RelationRepository,
)
from docshare.infrastructure.persistence.repositories.tag_repo import TagRepository
from docshare.shared.utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# Text search configuration; documents are multilingual so no stemming.
_TS_CONFIG = "simple"

_SEARCH_COLUMNS = (Document.title, Document.description)
_FULL_SEARCH_COLUMNS = (
    Document.title,
    Document.description,
    Document.subject,
    Document.identifier,
    Document.publisher,
    Document.format,
    Document.source,
    Document.type,
    Document.coverage,
    Document.rights,
)


def _text_match(columns: tuple[Any, ...], query: str) -> ColumnElement[bool]:
    """plainto_tsquery match over the concatenation of columns."""
    document_text = func.concat_ws(" ", *(func.coalesce(c, "") for c in columns))
    return func.to_tsvector(_TS_CONFIG, document_text).op("@@")(
        func.plainto_tsquery(_TS_CONFIG, query)
    )


def _is_shared() -> ColumnElement[bool]:
    """True when a live direct grant on the document targets a live share."""
    return exists(
        select(Acl.id).where(
            Acl.source_type == AclSourceType.DOCUMENT.value,
            Acl.source_id == Document.id,
            Acl.deleted_at.is_(None),
            Acl.target_id.in_(select(Share.id).where(Share.deleted_at.is_(None))),
        )
    )


def _readable_by(target_ids: list[str]) -> ColumnElement[bool]:
    """Direct READ grant on the document, or READ grant on a live attached tag."""
    direct = exists(
        select(Acl.id).where(
            Acl.source_type == AclSourceType.DOCUMENT.value,
            Acl.source_id == Document.id,
            Acl.perm == PermissionType.READ.value,
            Acl.target_id.in_(target_ids),
            Acl.deleted_at.is_(None),
        )
    )
    via_tag = exists(
        select(DocumentTag.id)
        .join(
            Acl,
            and_(
                Acl.source_type == AclSourceType.TAG.value,
                Acl.source_id == DocumentTag.tag_id,
            ),
        )
        .where(
            DocumentTag.document_id == Document.id,
            DocumentTag.deleted_at.is_(None),
            Acl.perm == PermissionType.READ.value,
            Acl.target_id.in_(target_ids),
            Acl.deleted_at.is_(None),
        )
    )
    return or_(direct, via_tag)


def _has_tag(tag_id: str) -> ColumnElement[bool]:
    return exists(
        select(DocumentTag.id).where(
            DocumentTag.document_id == Document.id,
            DocumentTag.tag_id == tag_id,
            DocumentTag.deleted_at.is_(None),
        )
    )


def _criteria_filters(criteria: SearchCriteria) -> list[ColumnElement[bool]]:
    """WHERE clauses for criteria. Sentinel ids simply match no row."""
    filters: list[ColumnElement[bool]] = [_has_tag(t) for t in sorted(criteria.tag_ids)]
    if criteria.create_date_min is not None:
        filters.append(Document.create_date >= criteria.create_date_min)
    if criteria.create_date_max is not None:
        filters.append(Document.create_date <= criteria.create_date_max)
    if criteria.shared:
        filters.append(_is_shared())
    if criteria.language is not None:
        filters.append(Document.language == criteria.language)
    if criteria.creator_id is not None:
        filters.append(Document.user_id == criteria.creator_id)
    if criteria.search:
        filters.append(_text_match(_SEARCH_COLUMNS, criteria.search))
    if criteria.full_search:
        filters.append(_text_match(_FULL_SEARCH_COLUMNS, criteria.full_search))
    return filters


def _create_to_document(d: DocumentCreate) -> Document:
    """Map DocumentCreate (write-model) to ORM Document for persistence."""
    return Document(
        id=d.id,
        user_id=d.user_id,
        title=d.title,
        description=d.description,
        subject=d.subject,
        identifier=d.identifier,
        publisher=d.publisher,
        format=d.format,
        source=d.source,
        type=d.type,
        coverage=d.coverage,
        rights=d.rights,
        language=d.language,
        create_date=d.create_date,
    )


def _document_to_result(
    d: Document, creator: str | None = None, shared: bool = False
) -> DocumentResult:
    """Map ORM Document to application DocumentResult."""
    return DocumentResult(
        id=d.id,
        user_id=d.user_id,
        title=d.title,
        language=d.language,
        create_date=ensure_utc(d.create_date),
        description=d.description,
        subject=d.subject,
        identifier=d.identifier,
        publisher=d.publisher,
        format=d.format,
        source=d.source,
        type=d.type,
        coverage=d.coverage,
        rights=d.rights,
        update_date=ensure_utc(d.update_date),
        creator=creator,
        shared=bool(shared),
    )


class DocumentRepository(BaseRepository[Document]):
    """Document repository. Reads include the creator's username and the shared flag."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Document)

    def _select_with_extras(self):
        return select(
            Document, User.username, _is_shared().label("shared")
        ).outerjoin(User, User.id == Document.user_id)

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        result = await self.db.execute(
            self._select_with_extras().where(
                Document.id == document_id, Document.deleted_at.is_(None)
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        document, creator, shared = row
        return _document_to_result(document, creator, shared)

    async def find_by_criteria(
        self,
        criteria: SearchCriteria,
        target_ids: Iterable[str],
        *,
        limit: int,
        offset: int,
        sort_column: str,
        ascending: bool,
    ) -> tuple[list[DocumentResult], int]:
        """Return (page, total) of live documents readable by target_ids matching criteria."""
        targets = list(target_ids)
        if not targets:
            return [], 0
        where = [
            Document.deleted_at.is_(None),
            _readable_by(targets),
            *_criteria_filters(criteria),
        ]

        count_result = await self.db.execute(
            select(func.count(literal(1))).select_from(Document).where(*where)
        )
        total = count_result.scalar() or 0
        if total == 0:
            return [], 0

        column = getattr(Document, sort_column)
        order = column.asc() if ascending else column.desc()
        result = await self.db.execute(
            self._select_with_extras()
            .where(*where)
            .order_by(order.nulls_last(), Document.id)
            .offset(offset)
            .limit(limit)
        )
        page = [
            _document_to_result(document, creator, shared)
            for document, creator, shared in result.all()
        ]
        return page, total

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Create document from write-model DTO; return read-model."""
        created = await self.create(_create_to_document(document))
        return await self._reload(created.id)

    async def update_document(
        self, document_id: str, data: DocumentInput
    ) -> DocumentResult:
        orm = await self._get_live(document_id)
        if orm is None:
            raise ResourceNotFoundException("document", document_id)
        for column, value in data.metadata().items():
            setattr(orm, column, value)
        if data.create_date is not None:
            orm.create_date = data.create_date
        orm.update_date = utc_now()
        await self.update(orm)
        return await self._reload(document_id)

    async def delete_document(self, document_id: str, actor_id: str) -> None:
        """Soft-delete the document, then its direct grants, tag links and relations."""
        deleted = await self._soft_delete_where(Document.id == document_id)
        if deleted == 0:
            raise ResourceNotFoundException("document", document_id)
        acl_count = await AclRepository(self.db).delete_by_source(
            DocumentSource(document_id)
        )
        link_count = await TagRepository(self.db).delete_document_links(document_id)
        relation_count = await RelationRepository(self.db).delete_for_document(
            document_id
        )
        logger.debug(
            "Soft-deleted document %s for %s (%d grants, %d tag links, %d relations)",
            document_id,
            actor_id,
            acl_count,
            link_count,
            relation_count,
        )

    async def get_existing_ids(self, document_ids: Iterable[str]) -> set[str]:
        ids = list(document_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(Document.id).where(
                Document.id.in_(ids), Document.deleted_at.is_(None)
            )
        )
        return set(result.scalars().all())

    async def _reload(self, document_id: str) -> DocumentResult:
        result = await self.get_by_id(document_id)
        if result is None:
            raise ResourceNotFoundException("document", document_id)
        return result
