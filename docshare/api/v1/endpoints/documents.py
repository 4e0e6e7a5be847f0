"""Document API: thin routes delegating to DocumentQueryService and DocumentCommandService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from docshare.api.v1.dependencies import (
    get_authenticated_scope,
    get_document_command_service,
    get_document_query_service,
    get_identity_scope,
)
from docshare.application.dtos.acl import AclGrant, EffectiveGrant
from docshare.application.dtos.document import (
    DocumentDetail,
    DocumentInput,
    DocumentSummary,
)
from docshare.application.use_cases.documents import (
    DocumentCommandService,
    DocumentQueryService,
)
from docshare.core.config import get_settings
from docshare.core.limiter import limit_writes
from docshare.domain.value_objects import IdentityScope
from docshare.schemas.document import (
    AclResponse,
    ContributorResponse,
    DocumentCreateRequest,
    DocumentDetailResponse,
    DocumentIdResponse,
    DocumentListItem,
    DocumentListResponse,
    DocumentUpdateRequest,
    InheritedAclResponse,
    RelationResponse,
    StatusResponse,
    TagResponse,
)
from docshare.shared.utils import ensure_utc

router = APIRouter()


def _acl_response(grant: AclGrant) -> AclResponse:
    return AclResponse(
        perm=grant.permission.value,
        id=grant.target_id,
        name=grant.target_name,
        type=grant.target_type.value if grant.target_type else None,
    )


def _inherited_response(effective: EffectiveGrant) -> InheritedAclResponse:
    grant = effective.grant
    return InheritedAclResponse(
        perm=grant.permission.value,
        id=grant.target_id,
        name=grant.target_name,
        type=grant.target_type.value if grant.target_type else None,
        source_id=effective.via.tag_id if effective.via else grant.source.id,
        source_name=effective.via.tag_name if effective.via else "",
    )


def _list_item(summary: DocumentSummary) -> DocumentListItem:
    doc = summary.document
    return DocumentListItem(
        id=doc.id,
        title=doc.title,
        description=doc.description,
        language=doc.language,
        create_date=doc.create_date,
        update_date=doc.update_date,
        creator=doc.creator,
        shared=doc.shared,
        tags=[TagResponse.model_validate(t) for t in summary.tags],
    )


def _detail_response(detail: DocumentDetail) -> DocumentDetailResponse:
    doc = detail.document
    inherited = (
        [_inherited_response(g) for g in detail.inherited_acls]
        if detail.inherited_acls is not None
        else None
    )
    return DocumentDetailResponse(
        id=doc.id,
        title=doc.title,
        description=doc.description,
        language=doc.language,
        create_date=doc.create_date,
        update_date=doc.update_date,
        creator=doc.creator,
        shared=doc.shared,
        tags=[TagResponse.model_validate(t) for t in detail.tags],
        subject=doc.subject,
        identifier=doc.identifier,
        publisher=doc.publisher,
        format=doc.format,
        source=doc.source,
        type=doc.type,
        coverage=doc.coverage,
        rights=doc.rights,
        writable=detail.writable,
        acls=[_acl_response(g) for g in detail.acls],
        inherited_acls=inherited,
        relations=[RelationResponse.model_validate(r) for r in detail.relations],
        contributors=[
            ContributorResponse.model_validate(c) for c in detail.contributors
        ],
    )


def _to_input(body: DocumentCreateRequest | DocumentUpdateRequest) -> DocumentInput:
    return DocumentInput(
        title=body.title,
        language=body.language,
        description=body.description,
        subject=body.subject,
        identifier=body.identifier,
        publisher=body.publisher,
        format=body.format,
        source=body.source,
        type=body.type,
        coverage=body.coverage,
        rights=body.rights,
        create_date=ensure_utc(body.create_date),
        tag_ids=tuple(body.tags) if body.tags is not None else None,
        relation_ids=tuple(body.relations) if body.relations is not None else None,
    )


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    scope: Annotated[IdentityScope, Depends(get_authenticated_scope)],
    query_svc: Annotated[DocumentQueryService, Depends(get_document_query_service)],
    search: Annotated[str | None, Query(description="Search query")] = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    sort_column: Annotated[str, Query()] = "create_date",
    asc: Annotated[bool, Query()] = False,
) -> DocumentListResponse:
    """List readable documents matching the search query (e.g. `tag:invoice after:2023 acme`)."""
    settings = get_settings()
    page_size = min(
        limit or settings.document_list_default_limit,
        settings.document_list_max_limit,
    )
    page = await query_svc.list_documents(
        scope,
        search,
        limit=page_size,
        offset=offset,
        sort_column=sort_column,
        ascending=asc,
    )
    return DocumentListResponse(
        total=page.total, documents=[_list_item(s) for s in page.items]
    )


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str,
    scope: Annotated[IdentityScope, Depends(get_identity_scope)],
    query_svc: Annotated[DocumentQueryService, Depends(get_document_query_service)],
) -> DocumentDetailResponse:
    """Get a document with its ACLs. Anonymous callers pass ?share=<share id>."""
    detail = await query_svc.get_document(document_id, scope)
    return _detail_response(detail)


@router.post("", response_model=DocumentIdResponse, status_code=201)
@limit_writes
async def create_document(
    request: Request,
    body: DocumentCreateRequest,
    scope: Annotated[IdentityScope, Depends(get_authenticated_scope)],
    command_svc: Annotated[
        DocumentCommandService, Depends(get_document_command_service)
    ],
) -> DocumentIdResponse:
    """Create a document owned by the caller."""
    created = await command_svc.create_document(scope, _to_input(body))
    return DocumentIdResponse(id=created.id)


@router.put("/{document_id}", response_model=DocumentIdResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdateRequest,
    scope: Annotated[IdentityScope, Depends(get_authenticated_scope)],
    command_svc: Annotated[
        DocumentCommandService, Depends(get_document_command_service)
    ],
) -> DocumentIdResponse:
    """Replace document metadata (and tags or relations when given). Requires WRITE."""
    updated = await command_svc.update_document(document_id, scope, _to_input(body))
    return DocumentIdResponse(id=updated.id)


@router.delete("/{document_id}", response_model=StatusResponse)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    scope: Annotated[IdentityScope, Depends(get_authenticated_scope)],
    command_svc: Annotated[
        DocumentCommandService, Depends(get_document_command_service)
    ],
) -> StatusResponse:
    """Delete a document. Callers without WRITE get 404."""
    await command_svc.delete_document(document_id, scope)
    return StatusResponse()
