"""Document dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.interfaces.services import IDocumentEventPublisher
from docshare.application.services import PermissionResolver, SearchQueryParser
from docshare.application.use_cases.documents import (
    DocumentCommandService,
    DocumentQueryService,
)
from docshare.core.config import get_settings
from docshare.infrastructure.persistence.database import get_db, get_db_transactional
from docshare.infrastructure.persistence.repositories import (
    AclRepository,
    ContributorRepository,
    DocumentRepository,
    RelationRepository,
    TagRepository,
    UserRepository,
)


def get_document_event_publisher(request: Request) -> IDocumentEventPublisher | None:
    """Publisher connected at startup (None when Redis is disabled)."""
    return getattr(request.app.state, "document_event_publisher", None)


async def get_document_query_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentQueryService:
    """Build DocumentQueryService for listing and detail."""
    tag_repo = TagRepository(db)
    return DocumentQueryService(
        document_repo=DocumentRepository(db),
        permission_resolver=PermissionResolver(AclRepository(db), tag_repo),
        query_parser=SearchQueryParser(
            tag_repo=tag_repo,
            user_repo=UserRepository(db),
            supported_languages=get_settings().supported_language_set,
        ),
        relation_repo=RelationRepository(db),
        contributor_repo=ContributorRepository(db),
    )


async def get_document_command_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    publisher: Annotated[
        IDocumentEventPublisher | None, Depends(get_document_event_publisher)
    ],
) -> DocumentCommandService:
    """Build DocumentCommandService for create/update/delete.

    The write session doubles as the unit of work, so events go out only after commit.
    """
    acl_repo = AclRepository(db)
    tag_repo = TagRepository(db)
    return DocumentCommandService(
        document_repo=DocumentRepository(db),
        acl_repo=acl_repo,
        tag_repo=tag_repo,
        permission_resolver=PermissionResolver(acl_repo, tag_repo),
        supported_languages=get_settings().supported_language_set,
        relation_repo=RelationRepository(db),
        contributor_repo=ContributorRepository(db),
        unit_of_work=db,
        event_publisher=publisher,
    )
