"""Repository integration tests. Require Postgres with migrations applied; rolled back after each test."""

from datetime import UTC, datetime

import pytest

from docshare.application.dtos.acl import AclGrant
from docshare.application.dtos.document import DocumentCreate, DocumentInput
from docshare.application.dtos.search import SearchCriteria
from docshare.core.constants import NO_MATCH_ID
from docshare.domain.enums import AclTargetType, PermissionType
from docshare.domain.value_objects import DocumentSource, TagSource
from docshare.infrastructure.persistence.models import Share, Tag, User
from docshare.infrastructure.persistence.repositories import (
    AclRepository,
    ContributorRepository,
    DocumentRepository,
    RelationRepository,
    TagRepository,
    UserRepository,
)
from docshare.shared.utils import generate_cuid

pytestmark = pytest.mark.requires_db

CREATED = datetime(2022, 4, 1, 12, 0, tzinfo=UTC)


async def _user(db_session, username: str) -> User:
    user = User(
        username=f"{username}-{generate_cuid()[:8]}",
        email=f"{generate_cuid()}@example.com",
        is_active=True,
    )
    db_session.add(user)
    await db_session.flush()
    return user


async def _document(db_session, owner: User, title: str, **fields) -> str:
    repo = DocumentRepository(db_session)
    document_id = generate_cuid()
    await repo.create_document(
        DocumentCreate(
            id=document_id,
            user_id=owner.id,
            title=title,
            language=fields.pop("language", "eng"),
            create_date=fields.pop("create_date", CREATED),
            **fields,
        )
    )
    acl_repo = AclRepository(db_session)
    for permission in (PermissionType.READ, PermissionType.WRITE):
        await acl_repo.create_grant(
            AclGrant(source=DocumentSource(document_id), target_id=owner.id, permission=permission)
        )
    return document_id


def _search(**kwargs) -> dict:
    return {"limit": 10, "offset": 0, "sort_column": "create_date", "ascending": False, **kwargs}


async def test_create_and_get_document(db_session) -> None:
    owner = await _user(db_session, "owner")
    document_id = await _document(db_session, owner, "Annual report", subject="Finance")
    found = await DocumentRepository(db_session).get_by_id(document_id)
    assert found is not None
    assert found.title == "Annual report"
    assert found.subject == "Finance"
    assert found.creator == owner.username
    assert found.create_date == CREATED
    assert found.shared is False


async def test_find_by_criteria_respects_read_grants(db_session) -> None:
    owner = await _user(db_session, "owner")
    stranger = await _user(db_session, "stranger")
    document_id = await _document(db_session, owner, "Private notes")
    repo = DocumentRepository(db_session)

    page, total = await repo.find_by_criteria(SearchCriteria(), [owner.id], **_search())
    assert total == 1
    assert [d.id for d in page] == [document_id]

    page, total = await repo.find_by_criteria(SearchCriteria(), [stranger.id], **_search())
    assert (page, total) == ([], 0)


async def test_tag_grant_makes_document_readable(db_session) -> None:
    owner = await _user(db_session, "owner")
    reader = await _user(db_session, "reader")
    tag = Tag(user_id=owner.id, name="Finance")
    db_session.add(tag)
    await db_session.flush()
    document_id = await _document(db_session, owner, "Budget")
    await TagRepository(db_session).set_document_tags(document_id, {tag.id})
    await AclRepository(db_session).create_grant(
        AclGrant(source=TagSource(tag.id), target_id=reader.id, permission=PermissionType.READ)
    )

    repo = DocumentRepository(db_session)
    page, total = await repo.find_by_criteria(
        SearchCriteria(tag_ids=frozenset({tag.id})), [reader.id], **_search()
    )
    assert total == 1
    assert page[0].id == document_id

    _, total = await repo.find_by_criteria(
        SearchCriteria(tag_ids=frozenset({tag.id, NO_MATCH_ID})), [reader.id], **_search()
    )
    assert total == 0


async def test_text_and_language_filters(db_session) -> None:
    owner = await _user(db_session, "owner")
    await _document(db_session, owner, "Quarterly budget", language="fra")
    await _document(db_session, owner, "Meeting minutes", publisher="Budget office")
    repo = DocumentRepository(db_session)

    page, _ = await repo.find_by_criteria(
        SearchCriteria(free_terms=("budget",)), [owner.id], **_search()
    )
    assert [d.title for d in page] == ["Quarterly budget"]

    page, _ = await repo.find_by_criteria(
        SearchCriteria(full_text_terms=("office",)), [owner.id], **_search()
    )
    assert [d.title for d in page] == ["Meeting minutes"]

    page, _ = await repo.find_by_criteria(
        SearchCriteria(language="fra"), [owner.id], **_search()
    )
    assert [d.language for d in page] == ["fra"]


async def test_shared_flag_and_acl_target_names(db_session) -> None:
    owner = await _user(db_session, "owner")
    share = Share(name="press kit")
    db_session.add(share)
    await db_session.flush()
    document_id = await _document(db_session, owner, "Flyer")
    acl_repo = AclRepository(db_session)
    grant = AclGrant(
        source=DocumentSource(document_id), target_id=share.id, permission=PermissionType.READ
    )
    await acl_repo.create_grant(grant)
    await acl_repo.create_grant(grant)

    grants = await acl_repo.get_by_source(DocumentSource(document_id))
    assert len(grants) == 3
    by_target = {(g.target_id, g.permission): g for g in grants}
    assert by_target[(share.id, PermissionType.READ)].target_type == AclTargetType.SHARE
    assert by_target[(owner.id, PermissionType.WRITE)].target_name == owner.username

    document = await DocumentRepository(db_session).get_by_id(document_id)
    assert document is not None and document.shared is True
    page, _ = await DocumentRepository(db_session).find_by_criteria(
        SearchCriteria(shared=True), [owner.id], **_search()
    )
    assert [d.id for d in page] == [document_id]


async def test_update_and_delete_document(db_session) -> None:
    owner = await _user(db_session, "owner")
    document_id = await _document(db_session, owner, "Draft")
    repo = DocumentRepository(db_session)

    updated = await repo.update_document(
        document_id, DocumentInput(title="Final", language="deu", create_date=CREATED)
    )
    assert updated.title == "Final"
    assert updated.language == "deu"
    assert updated.update_date is not None

    await repo.delete_document(document_id, owner.id)
    assert await repo.get_by_id(document_id) is None
    assert await AclRepository(db_session).get_by_source(DocumentSource(document_id)) == []


async def test_tag_lookup_is_scoped_and_escaped(db_session) -> None:
    owner = await _user(db_session, "owner")
    other = await _user(db_session, "other")
    visible = Tag(user_id=owner.id, name="100%_done")
    hidden = Tag(user_id=other.id, name="100 percent")
    db_session.add_all([visible, hidden])
    await db_session.flush()
    acl_repo = AclRepository(db_session)
    for tag, target in ((visible, owner), (hidden, other)):
        await acl_repo.create_grant(
            AclGrant(source=TagSource(tag.id), target_id=target.id, permission=PermissionType.READ)
        )
    tag_repo = TagRepository(db_session)

    assert [t.id for t in await tag_repo.find_by_name_and_scope("0%_", [owner.id])] == [visible.id]
    assert await tag_repo.find_by_name_and_scope("100", [owner.id, other.id]) != []
    assert await tag_repo.find_by_name_and_scope("0%", [other.id]) == []
    assert await tag_repo.get_visible_ids([owner.id]) == {visible.id}


async def test_get_active_by_username(db_session) -> None:
    user = await _user(db_session, "carol")
    repo = UserRepository(db_session)
    found = await repo.get_active_by_username(user.username)
    assert found is not None and found.id == user.id
    user.is_active = False
    await db_session.flush()
    assert await repo.get_active_by_username(user.username) is None


async def test_relations_listed_from_both_ends(db_session) -> None:
    owner = await _user(db_session, "owner")
    budget = await _document(db_session, owner, "Budget")
    appendix = await _document(db_session, owner, "Appendix")
    memo = await _document(db_session, owner, "Memo")
    repo = RelationRepository(db_session)
    await repo.set_relations(budget, {appendix})
    await repo.set_relations(memo, {budget})
    linked = await repo.list_for_document(budget)
    assert [(r.id, r.title, r.source) for r in linked] == [
        (appendix, "Appendix", True),
        (memo, "Memo", False),
    ]


async def test_set_relations_replaces_outgoing(db_session) -> None:
    owner = await _user(db_session, "owner")
    budget = await _document(db_session, owner, "Budget")
    old = await _document(db_session, owner, "Old")
    new = await _document(db_session, owner, "New")
    repo = RelationRepository(db_session)
    await repo.set_relations(budget, {old})
    await repo.set_relations(budget, {new})
    assert [r.id for r in await repo.list_for_document(budget)] == [new]
    await repo.set_relations(budget, {old})
    assert [r.id for r in await repo.list_for_document(budget)] == [old]


async def test_deleted_document_drops_relations(db_session) -> None:
    owner = await _user(db_session, "owner")
    budget = await _document(db_session, owner, "Budget")
    appendix = await _document(db_session, owner, "Appendix")
    await RelationRepository(db_session).set_relations(budget, {appendix})
    document_repo = DocumentRepository(db_session)
    await document_repo.delete_document(appendix, owner.id)
    assert await RelationRepository(db_session).list_for_document(budget) == []
    assert await document_repo.get_existing_ids([budget, appendix, "missing"]) == {budget}


async def test_contributor_recorded_once(db_session) -> None:
    owner = await _user(db_session, "owner")
    editor = await _user(db_session, "editor")
    budget = await _document(db_session, owner, "Budget")
    repo = ContributorRepository(db_session)
    for user_id in (owner.id, editor.id, owner.id):
        await repo.add_contributor(budget, user_id)
    contributors = await repo.list_for_document(budget)
    assert sorted(c.username for c in contributors) == sorted(
        [owner.username, editor.username]
    )
