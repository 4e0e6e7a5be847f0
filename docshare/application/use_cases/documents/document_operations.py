"""Document operations: query (list, detail) and commands (create, update, delete).

Access decisions go through IPermissionResolver; search strings go through
ISearchQueryParser. Commands commit through IUnitOfWork and only then
publish a DocumentEvent.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from docshare.application.dtos.acl import AclGrant, EffectiveGrant
from docshare.application.dtos.document import (
    DocumentCreate,
    DocumentDetail,
    DocumentEvent,
    DocumentInput,
    DocumentPage,
    DocumentResult,
    DocumentSummary,
)
from docshare.domain.enums import DocumentEventType, PermissionType
from docshare.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ShareAccessException,
    TagNotFoundException,
    ValidationException,
)
from docshare.domain.value_objects import DocumentSource, IdentityScope
from docshare.shared.utils import generate_cuid, utc_now

if TYPE_CHECKING:
    from docshare.application.interfaces.repositories import (
        IAclRepository,
        IContributorRepository,
        IDocumentRepository,
        IRelationRepository,
        ITagRepository,
        IUnitOfWork,
    )
    from docshare.application.interfaces.services import (
        IDocumentEventPublisher,
        IPermissionResolver,
        ISearchQueryParser,
    )

logger = logging.getLogger(__name__)

SORT_COLUMNS = ("title", "create_date", "update_date", "language")


def _grant_sort_key(grant: AclGrant) -> tuple[str, str, str]:
    return (grant.permission.value, grant.target_name or "", grant.target_id)


def _effective_sort_key(grant: EffectiveGrant) -> tuple[str, str, str, str]:
    tag_name = grant.via.tag_name if grant.via else ""
    return (tag_name, *_grant_sort_key(grant.grant))


def _require_user(scope: IdentityScope) -> str:
    """Return the caller's user id; anonymous (share-only) callers cannot use this operation."""
    if scope.user_id is None:
        raise AuthenticationException("Authentication required")
    return scope.user_id


class DocumentQueryService:
    """Single responsibility: document listing with search and per-document ACL detail."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        permission_resolver: IPermissionResolver,
        query_parser: ISearchQueryParser,
        relation_repo: IRelationRepository,
        contributor_repo: IContributorRepository,
    ) -> None:
        self.document_repo = document_repo
        self.permission_resolver = permission_resolver
        self.query_parser = query_parser
        self.relation_repo = relation_repo
        self.contributor_repo = contributor_repo

    async def list_documents(
        self,
        scope: IdentityScope,
        search: str | None = None,
        *,
        limit: int = 10,
        offset: int = 0,
        sort_column: str = "create_date",
        ascending: bool = False,
    ) -> DocumentPage:
        """Return a page of documents the caller can read that match search, with visible tags."""
        _require_user(scope)
        if sort_column not in SORT_COLUMNS:
            raise ValidationException(
                f"sort_column must be one of: {', '.join(SORT_COLUMNS)}",
                field="sort_column",
            )
        # Listing never goes through a share link.
        caller = scope.without_share()
        criteria = await self.query_parser.parse(search, caller)
        documents, total = await self.document_repo.find_by_criteria(
            criteria,
            caller.target_ids,
            limit=limit,
            offset=offset,
            sort_column=sort_column,
            ascending=ascending,
        )
        items = [
            DocumentSummary(
                document=doc,
                tags=await self.permission_resolver.visible_tags(doc.id, caller),
            )
            for doc in documents
        ]
        return DocumentPage(total=total, items=items)

    async def get_document(
        self, document_id: str, scope: IdentityScope
    ) -> DocumentDetail:
        """Return document detail with direct and inherited ACLs, relations and contributors.

        Raises ResourceNotFoundException when the document does not exist or
        the caller cannot read it; ShareAccessException when an anonymous
        caller's share link does not open it.
        """
        resolver = self.permission_resolver
        if not await resolver.has_permission(document_id, PermissionType.READ, scope):
            if scope.is_anonymous and scope.share_id:
                raise ShareAccessException(document_id, scope.share_id)
            raise ResourceNotFoundException("document", document_id)
        document = await self.document_repo.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)

        inherited: list[EffectiveGrant] | None = None
        if not scope.is_anonymous:
            inherited = sorted(
                await resolver.inherited_grants(document_id, scope),
                key=_effective_sort_key,
            )
        return DocumentDetail(
            document=document,
            tags=await resolver.visible_tags(document_id, scope),
            acls=sorted(
                await resolver.direct_grants(document_id, scope, read_checked=True),
                key=_grant_sort_key,
            ),
            writable=await resolver.has_permission(
                document_id, PermissionType.WRITE, scope
            ),
            inherited_acls=inherited,
            relations=await self.relation_repo.list_for_document(document_id),
            contributors=await self.contributor_repo.list_for_document(document_id),
        )


class DocumentCommandService:
    """Single responsibility: create, update and delete documents with ACL, tag and relation bookkeeping."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        acl_repo: IAclRepository,
        tag_repo: ITagRepository,
        permission_resolver: IPermissionResolver,
        supported_languages: Iterable[str],
        *,
        relation_repo: IRelationRepository,
        contributor_repo: IContributorRepository,
        unit_of_work: IUnitOfWork,
        event_publisher: IDocumentEventPublisher | None = None,
    ) -> None:
        self.document_repo = document_repo
        self.acl_repo = acl_repo
        self.tag_repo = tag_repo
        self.permission_resolver = permission_resolver
        self.supported_languages = frozenset(supported_languages)
        self.relation_repo = relation_repo
        self.contributor_repo = contributor_repo
        self.unit_of_work = unit_of_work
        self.event_publisher = event_publisher

    def _validate_language(self, language: str | None) -> None:
        if language is not None and language not in self.supported_languages:
            raise ValidationException(
                f"{language} is not a supported language", field="language"
            )

    async def _resolve_tag_ids(
        self, tag_ids: Iterable[str], scope: IdentityScope
    ) -> set[str]:
        """Return tag_ids as a set; every id must be a tag the caller can see."""
        visible = await self.tag_repo.get_visible_ids(scope.without_share().target_ids)
        requested: set[str] = set()
        for tag_id in tag_ids:
            if tag_id not in visible:
                raise TagNotFoundException(tag_id)
            requested.add(tag_id)
        return requested

    async def _update_relations(
        self, document_id: str, relation_ids: Iterable[str] | None
    ) -> None:
        """Replace outgoing links; unknown documents and self-links are dropped.

        Targets are not ACL-checked.
        """
        if relation_ids is None:
            return
        candidates = {r for r in relation_ids if r != document_id}
        existing = await self.document_repo.get_existing_ids(candidates)
        dropped = candidates - existing
        if dropped:
            logger.debug(
                "Ignoring %d unknown relation target(s) on %s", len(dropped), document_id
            )
        await self.relation_repo.set_relations(document_id, existing)

    async def _commit_and_publish(
        self, event_type: DocumentEventType, document_id: str, actor_id: str
    ) -> None:
        """Commit the unit of work, then publish. A failed commit publishes nothing."""
        await self.unit_of_work.commit()
        if self.event_publisher is None:
            return
        event = DocumentEvent(
            event_type=event_type,
            document_id=document_id,
            actor_id=actor_id,
            timestamp=utc_now(),
        )
        if not await self.event_publisher.publish(event):
            logger.warning(
                "Document event %s for %s was not published",
                event_type.value,
                document_id,
            )

    async def create_document(
        self, scope: IdentityScope, data: DocumentInput
    ) -> DocumentResult:
        """Create a document owned by the caller with READ and WRITE grants for them."""
        user_id = _require_user(scope)
        if not data.language:
            raise ValidationException("language is required", field="language")
        self._validate_language(data.language)
        tag_ids = (
            await self._resolve_tag_ids(data.tag_ids, scope)
            if data.tag_ids is not None
            else None
        )

        document_id = generate_cuid()
        created = await self.document_repo.create_document(
            DocumentCreate(
                id=document_id,
                user_id=user_id,
                create_date=data.create_date or utc_now(),
                **data.metadata(),
            )
        )
        source = DocumentSource(document_id)
        for permission in (PermissionType.READ, PermissionType.WRITE):
            await self.acl_repo.create_grant(
                AclGrant(source=source, target_id=user_id, permission=permission)
            )
        if tag_ids is not None:
            await self.tag_repo.set_document_tags(document_id, tag_ids)
        await self._update_relations(document_id, data.relation_ids)
        await self.contributor_repo.add_contributor(document_id, user_id)

        await self._commit_and_publish(DocumentEventType.CREATED, document_id, user_id)
        logger.info("Document %s created by %s", document_id, user_id)
        return created

    async def update_document(
        self, document_id: str, scope: IdentityScope, data: DocumentInput
    ) -> DocumentResult:
        """Overwrite document metadata (and tags or relations when given). Requires WRITE."""
        user_id = _require_user(scope)
        self._validate_language(data.language)
        caller = scope.without_share()
        if not await self.permission_resolver.has_permission(
            document_id, PermissionType.WRITE, caller
        ):
            raise AuthorizationException(document_id, PermissionType.WRITE.value)
        existing = await self.document_repo.get_by_id(document_id)
        if existing is None:
            raise ResourceNotFoundException("document", document_id)
        tag_ids = (
            await self._resolve_tag_ids(data.tag_ids, caller)
            if data.tag_ids is not None
            else None
        )

        data = dataclasses.replace(
            data,
            language=data.language or existing.language,
            create_date=data.create_date or existing.create_date,
        )
        updated = await self.document_repo.update_document(document_id, data)
        if tag_ids is not None:
            await self.tag_repo.set_document_tags(document_id, tag_ids)
        await self._update_relations(document_id, data.relation_ids)
        await self.contributor_repo.add_contributor(document_id, user_id)

        await self._commit_and_publish(DocumentEventType.UPDATED, document_id, user_id)
        logger.info("Document %s updated by %s", document_id, user_id)
        return updated

    async def delete_document(self, document_id: str, scope: IdentityScope) -> None:
        """Soft-delete a document. Callers without WRITE get ResourceNotFoundException."""
        user_id = _require_user(scope)
        if not await self.permission_resolver.has_permission(
            document_id, PermissionType.WRITE, scope.without_share()
        ):
            raise ResourceNotFoundException("document", document_id)
        await self.document_repo.delete_document(document_id, user_id)

        await self._commit_and_publish(DocumentEventType.DELETED, document_id, user_id)
        logger.info("Document %s deleted by %s", document_id, user_id)
