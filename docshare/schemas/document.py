"""Document API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from docshare.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    LANGUAGE_CODE_LENGTH,
    LONG_METADATA_MAX_LENGTH,
    SHORT_METADATA_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)


class _DocumentFields(BaseModel):
    """Editable document metadata shared by create and update."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    subject: str | None = Field(default=None, max_length=LONG_METADATA_MAX_LENGTH)
    identifier: str | None = Field(default=None, max_length=LONG_METADATA_MAX_LENGTH)
    publisher: str | None = Field(default=None, max_length=LONG_METADATA_MAX_LENGTH)
    format: str | None = Field(default=None, max_length=LONG_METADATA_MAX_LENGTH)
    source: str | None = Field(default=None, max_length=LONG_METADATA_MAX_LENGTH)
    type: str | None = Field(default=None, max_length=SHORT_METADATA_MAX_LENGTH)
    coverage: str | None = Field(default=None, max_length=SHORT_METADATA_MAX_LENGTH)
    rights: str | None = Field(default=None, max_length=SHORT_METADATA_MAX_LENGTH)
    create_date: datetime | None = Field(
        default=None, description="Defaults to now on create; unchanged on update"
    )
    tags: list[str] | None = Field(
        default=None,
        description="Tag ids to attach; omit to leave tags unchanged",
    )
    relations: list[str] | None = Field(
        default=None,
        description="Ids of documents this one links to; omit to leave links unchanged",
    )


class DocumentCreateRequest(_DocumentFields):
    """Request body for POST /documents."""

    language: str = Field(
        ..., min_length=LANGUAGE_CODE_LENGTH, max_length=LANGUAGE_CODE_LENGTH
    )


class DocumentUpdateRequest(_DocumentFields):
    """Request body for PUT /documents/{document_id}. Omitted language is kept."""

    language: str | None = Field(
        default=None, min_length=LANGUAGE_CODE_LENGTH, max_length=LANGUAGE_CODE_LENGTH
    )


class DocumentIdResponse(BaseModel):
    """Response for create and update."""

    id: str


class StatusResponse(BaseModel):
    """Response for delete."""

    status: str = "ok"


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    color: str


class AclResponse(BaseModel):
    """A direct grant on the document."""

    perm: str
    id: str = Field(..., description="Target id (user, group or share)")
    name: str | None = None
    type: str | None = Field(default=None, description="USER, GROUP or SHARE")


class RelationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    source: bool = Field(..., description="True when this document is the origin of the link")


class ContributorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    username: str
    email: str


class InheritedAclResponse(AclResponse):
    """A grant reaching the document through one of its tags."""

    source_id: str = Field(..., description="Tag id")
    source_name: str = Field(..., description="Tag name")


class DocumentListItem(BaseModel):
    """Document in a search result page."""

    id: str
    title: str
    description: str | None = None
    language: str
    create_date: datetime
    update_date: datetime | None = None
    creator: str | None = None
    shared: bool = False
    tags: list[TagResponse] = Field(default_factory=list)


class DocumentListResponse(BaseModel):
    """Response for GET /documents."""

    total: int
    documents: list[DocumentListItem]


class DocumentDetailResponse(DocumentListItem):
    """Response for GET /documents/{document_id}."""

    subject: str | None = None
    identifier: str | None = None
    publisher: str | None = None
    format: str | None = None
    source: str | None = None
    type: str | None = None
    coverage: str | None = None
    rights: str | None = None
    writable: bool
    acls: list[AclResponse]
    inherited_acls: list[InheritedAclResponse] | None = Field(
        default=None, description="Absent for anonymous (share link) callers"
    )
    relations: list[RelationResponse] = Field(default_factory=list)
    contributors: list[ContributorResponse] = Field(default_factory=list)
