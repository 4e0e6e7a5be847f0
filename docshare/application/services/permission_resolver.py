"""Permission resolver: direct and tag-cascaded document grants (implements IPermissionResolver).

A grant is sourced on a document (direct) or on a tag (cascading to every
document carrying the tag). Decisions are set membership over grants; the
provenance listing is computed separately and never feeds a decision.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docshare.application.dtos.acl import AclGrant, EffectiveGrant, TagProvenance
from docshare.domain.enums import PermissionType
from docshare.domain.value_objects import DocumentSource, IdentityScope, TagSource

if TYPE_CHECKING:
    from docshare.application.dtos.tag import TagResult
    from docshare.application.interfaces.repositories import (
        IAclRepository,
        ITagRepository,
    )


def _grant_applies(
    grant: AclGrant,
    resource_id: str,
    tag_ids: set[str],
    permission: PermissionType,
    scope: IdentityScope,
) -> bool:
    """Return True if grant gives permission on resource_id to someone in scope."""
    if grant.permission != permission or grant.target_id not in scope:
        return False
    match grant.source:
        case DocumentSource(id=source_id):
            return source_id == resource_id
        case TagSource(id=source_id):
            return source_id in tag_ids
    return False


class PermissionResolver:
    """Resolves document permissions over ACL and tag lookups. Stateless per request."""

    def __init__(self, acl_repo: IAclRepository, tag_repo: ITagRepository) -> None:
        self.acl_repo = acl_repo
        self.tag_repo = tag_repo

    async def has_permission(
        self, resource_id: str, permission: PermissionType, scope: IdentityScope
    ) -> bool:
        """Return True if a direct grant, or for authenticated callers a tag grant, matches.

        Share ids are ordinary targets for direct grants. Anonymous scopes
        never consult tags.
        """
        direct = await self.acl_repo.get_by_source(DocumentSource(resource_id))
        if any(
            _grant_applies(g, resource_id, set(), permission, scope) for g in direct
        ):
            return True
        if scope.is_anonymous:
            return False

        tags = await self.tag_repo.list_for_document(resource_id)
        tag_ids = {t.id for t in tags}
        for tag_id in tag_ids:
            cascaded = await self.acl_repo.get_by_source(TagSource(tag_id))
            if any(
                _grant_applies(g, resource_id, tag_ids, permission, scope)
                for g in cascaded
            ):
                return True
        return False

    async def direct_grants(
        self, resource_id: str, scope: IdentityScope, *, read_checked: bool = False
    ) -> set[AclGrant]:
        """Return all grants sourced on the document, or an empty set if the caller cannot read it.

        Pass read_checked=True when has_permission(READ) already returned True
        for this scope in the same request.
        """
        if not read_checked and not await self.has_permission(
            resource_id, PermissionType.READ, scope
        ):
            return set()
        grants = await self.acl_repo.get_by_source(DocumentSource(resource_id))
        return set(grants)

    async def visible_tags(
        self, resource_id: str, scope: IdentityScope
    ) -> list[TagResult]:
        """Return tags attached to the document that carry a READ grant for the caller.

        Tag visibility ignores the share id; anonymous scopes see no tags.
        """
        if scope.is_anonymous:
            return []
        caller = scope.without_share()
        visible: list[TagResult] = []
        for tag in await self.tag_repo.list_for_document(resource_id):
            grants = await self.acl_repo.get_by_source(TagSource(tag.id))
            if any(
                g.permission == PermissionType.READ and g.target_id in caller
                for g in grants
            ):
                visible.append(tag)
        return visible

    async def inherited_grants(
        self, resource_id: str, scope: IdentityScope
    ) -> set[EffectiveGrant]:
        """Return every grant sourced on a visible attached tag, annotated with that tag.

        Presentation only: explains why a principal can act on the document.
        """
        inherited: set[EffectiveGrant] = set()
        for tag in await self.visible_tags(resource_id, scope):
            via = TagProvenance(tag_id=tag.id, tag_name=tag.name)
            for grant in await self.acl_repo.get_by_source(TagSource(tag.id)):
                inherited.add(EffectiveGrant(grant=grant, via=via))
        return inherited
