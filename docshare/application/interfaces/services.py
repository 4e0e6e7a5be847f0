"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docshare.application.dtos.acl import AclGrant, EffectiveGrant
    from docshare.application.dtos.document import DocumentEvent
    from docshare.application.dtos.search import SearchCriteria
    from docshare.application.dtos.tag import TagResult
    from docshare.domain.enums import PermissionType
    from docshare.domain.value_objects import IdentityScope


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for document permission decisions and their provenance."""

    async def has_permission(
        self, resource_id: str, permission: PermissionType, scope: IdentityScope
    ) -> bool:
        """Return True if a direct or (non-anonymous) tag-cascaded grant matches."""

    async def direct_grants(
        self, resource_id: str, scope: IdentityScope, *, read_checked: bool = False
    ) -> set[AclGrant]:
        """Return grants sourced on the document itself (empty if caller cannot read it).

        read_checked=True skips the READ check when the caller already made it.
        """

    async def inherited_grants(
        self, resource_id: str, scope: IdentityScope
    ) -> set[EffectiveGrant]:
        """Return grants cascaded from the document's visible tags, with tag provenance."""

    async def visible_tags(
        self, resource_id: str, scope: IdentityScope
    ) -> list[TagResult]:
        """Return tags on the document that the caller may see (empty for anonymous)."""


# Search query parser interface
class ISearchQueryParser(Protocol):
    """Protocol for compiling a search string into SearchCriteria."""

    async def parse(self, query: str | None, scope: IdentityScope) -> SearchCriteria:
        """Compile query; never raises on malformed input."""


# Document event publisher interface
class IDocumentEventPublisher(Protocol):
    """Protocol for outbound document lifecycle notifications."""

    async def publish(self, event: DocumentEvent) -> bool:
        """Publish event. Returns False (never raises) when the transport is unavailable."""
