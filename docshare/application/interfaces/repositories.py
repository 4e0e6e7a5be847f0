"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain values only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docshare.application.dtos.acl import AclGrant
    from docshare.application.dtos.document import (
        ContributorResult,
        DocumentCreate,
        DocumentInput,
        DocumentResult,
        RelationResult,
    )
    from docshare.application.dtos.search import SearchCriteria
    from docshare.application.dtos.tag import TagResult
    from docshare.application.dtos.user import UserResult
    from docshare.domain.value_objects import AclSource


# ACL repository interface
class IAclRepository(Protocol):
    """Protocol for ACL rows keyed by a document or tag source (DIP)."""

    async def get_by_source(self, source: AclSource) -> list[AclGrant]:
        """Return every live grant whose source is the given document or tag."""

    async def create_grant(self, grant: AclGrant) -> None:
        """Persist a grant (no-op if an identical live grant exists)."""


# Tag repository interface
class ITagRepository(Protocol):
    """Protocol for tag lookups scoped to the caller's visibility (DIP)."""

    async def find_by_name_and_scope(
        self, name: str, target_ids: Iterable[str]
    ) -> list[TagResult]:
        """Return tags whose name contains name (case-insensitive) and that carry a READ grant for one of target_ids."""

    async def list_for_document(self, document_id: str) -> list[TagResult]:
        """Return every tag attached to the document, ordered by name."""

    async def get_visible_ids(self, target_ids: Iterable[str]) -> set[str]:
        """Return ids of all tags carrying a READ grant for one of target_ids."""

    async def set_document_tags(self, document_id: str, tag_ids: set[str]) -> None:
        """Replace the tags attached to the document with tag_ids."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookups (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_active_by_username(self, username: str) -> UserResult | None:
        """Return the active user with this exact username, or None."""


# Group repository interface
class IGroupRepository(Protocol):
    """Protocol for group membership used to build identity scopes (DIP)."""

    async def get_group_ids_for_user(self, user_id: str) -> list[str]:
        """Return ids of groups the user belongs to (ordered by group name)."""


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for document persistence and criteria search (DIP)."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return a non-deleted document by ID."""

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
        """Return (page, total) of documents readable by target_ids that match criteria."""

    async def create_document(self, document: DocumentCreate) -> DocumentResult:
        """Create document from write-model DTO; return read-model."""

    async def update_document(
        self, document_id: str, data: DocumentInput
    ) -> DocumentResult:
        """Overwrite editable metadata; return updated read-model."""

    async def delete_document(self, document_id: str, actor_id: str) -> None:
        """Soft-delete the document together with its ACLs, tag links and relations."""

    async def get_existing_ids(self, document_ids: Iterable[str]) -> set[str]:
        """Return the subset of document_ids naming live documents (no ACL check)."""


# Relation repository interface
class IRelationRepository(Protocol):
    """Protocol for links between documents (DIP)."""

    async def list_for_document(self, document_id: str) -> list[RelationResult]:
        """Return live documents linked from or to the document, ordered by title."""

    async def set_relations(self, document_id: str, target_ids: set[str]) -> None:
        """Replace the links originating at the document with target_ids."""


# Contributor repository interface
class IContributorRepository(Protocol):
    """Protocol for the users who created or edited a document (DIP)."""

    async def list_for_document(self, document_id: str) -> list[ContributorResult]:
        """Return contributors of the document, ordered by username."""

    async def add_contributor(self, document_id: str, user_id: str) -> None:
        """Record user_id as a contributor (no-op if already recorded)."""


# Unit of work interface
class IUnitOfWork(Protocol):
    """Protocol for committing the work done through the repositories (DIP).

    AsyncSession satisfies it.
    """

    async def commit(self) -> None:
        """Commit pending changes. Raises when the database rejects them."""
