"""Unit tests for PermissionResolver (direct and tag-cascaded grants)."""

import pytest

from docshare.application.dtos.acl import AclGrant, EffectiveGrant, TagProvenance
from docshare.application.services.permission_resolver import PermissionResolver
from docshare.domain.enums import PermissionType
from docshare.domain.value_objects import DocumentSource, IdentityScope, TagSource

READ = PermissionType.READ
WRITE = PermissionType.WRITE


@pytest.fixture
def owner(library):
    return library.add_user("owner")


@pytest.fixture
def reader(library):
    return library.add_user("reader")


class TestHasPermission:
    async def test_direct_grant(self, resolver: PermissionResolver, library, owner) -> None:
        doc = library.add_document("Plan", owner)
        scope = IdentityScope(user_id=owner.id)
        assert await resolver.has_permission(doc.id, READ, scope)
        assert await resolver.has_permission(doc.id, WRITE, scope)

    async def test_no_grant(self, resolver: PermissionResolver, library, owner, reader) -> None:
        doc = library.add_document("Plan", owner)
        assert not await resolver.has_permission(
            doc.id, READ, IdentityScope(user_id=reader.id)
        )

    async def test_write_does_not_imply_read(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        doc = library.add_document("Plan", owner)
        library.grant(DocumentSource(doc.id), reader.id, WRITE)
        scope = IdentityScope(user_id=reader.id)
        assert await resolver.has_permission(doc.id, WRITE, scope)
        assert not await resolver.has_permission(doc.id, READ, scope)

    async def test_group_grant(self, resolver: PermissionResolver, library, owner) -> None:
        team = library.add_group("team")
        member = library.add_user("member", groups=[team])
        doc = library.add_document("Plan", owner)
        library.grant(DocumentSource(doc.id), team, READ)
        assert await resolver.has_permission(
            doc.id, READ, IdentityScope(user_id=member.id, group_ids=[team])
        )

    async def test_tag_cascade(self, resolver: PermissionResolver, library, owner, reader) -> None:
        tag = library.add_tag("Finance", readers=[reader.id])
        doc = library.add_document("Budget", owner, tags=[tag])
        scope = IdentityScope(user_id=reader.id)
        assert await resolver.has_permission(doc.id, READ, scope)
        assert not await resolver.has_permission(doc.id, WRITE, scope)

    async def test_tag_grant_on_unattached_tag_does_not_apply(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        library.add_tag("Finance", readers=[reader.id])
        doc = library.add_document("Budget", owner)
        assert not await resolver.has_permission(
            doc.id, READ, IdentityScope(user_id=reader.id)
        )

    async def test_share_direct_grant(self, resolver: PermissionResolver, library, owner) -> None:
        share_id = library.add_share("link")
        doc = library.add_document("Flyer", owner)
        library.grant(DocumentSource(doc.id), share_id, READ)
        assert await resolver.has_permission(doc.id, READ, IdentityScope(share_id=share_id))

    async def test_anonymous_scope_never_cascades(
        self, resolver: PermissionResolver, library, owner
    ) -> None:
        share_id = library.add_share()
        tag = library.add_tag("Public", readers=[share_id])
        doc = library.add_document("Flyer", owner, tags=[tag])
        assert not await resolver.has_permission(
            doc.id, READ, IdentityScope(share_id=share_id)
        )

    async def test_anonymous_scope_skips_tag_lookups(
        self, resolver: PermissionResolver, library, owner, acl_repo
    ) -> None:
        doc = library.add_document("Flyer", owner)
        await resolver.has_permission(doc.id, READ, IdentityScope(share_id="share-x"))
        assert acl_repo.calls == 1

    async def test_missing_resource_is_false(self, resolver: PermissionResolver, owner) -> None:
        assert not await resolver.has_permission(
            "missing", READ, IdentityScope(user_id=owner.id)
        )


class TestDirectGrants:
    async def test_returns_all_direct_grants_for_reader(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        doc = library.add_document("Plan", owner)
        library.grant(DocumentSource(doc.id), reader.id, READ)
        grants = await resolver.direct_grants(doc.id, IdentityScope(user_id=reader.id))
        assert {(g.target_id, g.permission) for g in grants} == {
            (owner.id, READ),
            (owner.id, WRITE),
            (reader.id, READ),
        }

    async def test_hidden_from_callers_without_read(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        doc = library.add_document("Plan", owner)
        assert await resolver.direct_grants(doc.id, IdentityScope(user_id=reader.id)) == set()

    async def test_duplicates_collapse(
        self, resolver: PermissionResolver, library, owner
    ) -> None:
        doc = library.add_document("Plan", owner)
        library.grants.append(library.grants[0])
        grants = await resolver.direct_grants(doc.id, IdentityScope(user_id=owner.id))
        assert len(grants) == 2

    async def test_read_checked_skips_the_read_lookup(
        self, resolver: PermissionResolver, acl_repo, library, owner
    ) -> None:
        doc = library.add_document("Plan", owner)
        scope = IdentityScope(user_id=owner.id)
        grants = await resolver.direct_grants(doc.id, scope, read_checked=True)
        assert len(grants) == 2
        assert acl_repo.calls == 1

    async def test_read_checked_trusts_the_caller(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        """read_checked=True does not repeat the READ check."""
        doc = library.add_document("Plan", owner)
        scope = IdentityScope(user_id=reader.id)
        assert len(await resolver.direct_grants(doc.id, scope, read_checked=True)) == 2


class TestVisibleTagsAndInheritedGrants:
    async def test_visible_tags_need_read_grant(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        seen = library.add_tag("Alpha", readers=[reader.id])
        hidden = library.add_tag("Beta", readers=[owner.id])
        doc = library.add_document("Plan", owner, tags=[seen, hidden])
        assert await resolver.visible_tags(doc.id, IdentityScope(user_id=reader.id)) == [seen]

    async def test_anonymous_sees_no_tags(self, resolver: PermissionResolver, library, owner) -> None:
        share_id = library.add_share()
        tag = library.add_tag("Public", readers=[share_id])
        doc = library.add_document("Flyer", owner, tags=[tag])
        assert await resolver.visible_tags(doc.id, IdentityScope(share_id=share_id)) == []
        assert await resolver.inherited_grants(doc.id, IdentityScope(share_id=share_id)) == set()

    async def test_inherited_grants_carry_provenance(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        tag = library.add_tag("Finance", readers=[reader.id], writers=[owner.id])
        doc = library.add_document("Budget", owner, tags=[tag])
        inherited = await resolver.inherited_grants(doc.id, IdentityScope(user_id=reader.id))
        via = TagProvenance(tag_id=tag.id, tag_name="Finance")
        assert inherited == {
            EffectiveGrant(library.grant(TagSource(tag.id), reader.id, READ), via),
            EffectiveGrant(library.grant(TagSource(tag.id), owner.id, WRITE), via),
        }
        assert all(not g.is_direct for g in inherited)

    async def test_inherited_grants_only_from_attached_tags(
        self, resolver: PermissionResolver, library, owner
    ) -> None:
        library.add_tag("Unrelated", readers=[owner.id])
        doc = library.add_document("Plan", owner)
        assert await resolver.inherited_grants(doc.id, IdentityScope(user_id=owner.id)) == set()

    async def test_duplicate_tag_rows_collapse_per_triple(
        self, resolver: PermissionResolver, library, owner, reader
    ) -> None:
        tag = library.add_tag("Finance", readers=[reader.id], writers=[owner.id])
        doc = library.add_document("Budget", owner, tags=[tag])
        library.grants.append(
            AclGrant(TagSource(tag.id), reader.id, READ, target_name="someone else")
        )
        inherited = await resolver.inherited_grants(doc.id, IdentityScope(user_id=reader.id))
        triples = {(g.grant.source, g.grant.target_id, g.grant.permission) for g in inherited}
        assert len(inherited) == len(triples) == 2
