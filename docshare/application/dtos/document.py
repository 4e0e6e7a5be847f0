"""DTOs for document use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from docshare.application.dtos.acl import AclGrant, EffectiveGrant
from docshare.application.dtos.tag import TagResult
from docshare.domain.enums import DocumentEventType


@dataclass(frozen=True)
class DocumentInput:
    """Editable document fields (create and update).

    tag_ids and relation_ids set to None leave tags and relations untouched.
    """

    title: str
    language: str | None = None
    description: str | None = None
    subject: str | None = None
    identifier: str | None = None
    publisher: str | None = None
    format: str | None = None
    source: str | None = None
    type: str | None = None
    coverage: str | None = None
    rights: str | None = None
    create_date: datetime | None = None
    tag_ids: tuple[str, ...] | None = None
    relation_ids: tuple[str, ...] | None = None

    def metadata(self) -> dict[str, Any]:
        """Column values to persist (everything except tag_ids and relation_ids)."""
        return {
            "title": self.title,
            "language": self.language,
            "description": self.description,
            "subject": self.subject,
            "identifier": self.identifier,
            "publisher": self.publisher,
            "format": self.format,
            "source": self.source,
            "type": self.type,
            "coverage": self.coverage,
            "rights": self.rights,
        }


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Service builds this; repo persists it."""

    id: str
    user_id: str
    title: str
    language: str
    create_date: datetime
    description: str | None = None
    subject: str | None = None
    identifier: str | None = None
    publisher: str | None = None
    format: str | None = None
    source: str | None = None
    type: str | None = None
    coverage: str | None = None
    rights: str | None = None


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, find_by_criteria, create)."""

    id: str
    user_id: str
    title: str
    language: str
    create_date: datetime
    description: str | None = None
    subject: str | None = None
    identifier: str | None = None
    publisher: str | None = None
    format: str | None = None
    source: str | None = None
    type: str | None = None
    coverage: str | None = None
    rights: str | None = None
    update_date: datetime | None = None
    creator: str | None = None
    shared: bool = False


@dataclass(frozen=True)
class RelationResult:
    """A document linked to another one.

    source is True when the document being viewed is the origin of the link.
    """

    id: str
    title: str
    source: bool


@dataclass(frozen=True)
class ContributorResult:
    """A user who created or edited the document."""

    username: str
    email: str


@dataclass(frozen=True)
class DocumentSummary:
    """Document list item with the tags the caller can see on it."""

    document: DocumentResult
    tags: list[TagResult] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentPage:
    """One page of list_documents results."""

    total: int
    items: list[DocumentSummary]


@dataclass(frozen=True)
class DocumentDetail:
    """Document with its ACL explanation (get_document).

    inherited_acls is None for anonymous callers, who never see tag data.
    """

    document: DocumentResult
    tags: list[TagResult]
    acls: list[AclGrant]
    writable: bool
    inherited_acls: list[EffectiveGrant] | None
    relations: list[RelationResult] = field(default_factory=list)
    contributors: list[ContributorResult] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentEvent:
    """Lifecycle notification published after a successful mutation."""

    event_type: DocumentEventType
    document_id: str
    actor_id: str
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON publish."""
        return {
            "event_type": self.event_type.value,
            "document_id": self.document_id,
            "actor_id": self.actor_id,
            "timestamp": self.timestamp.isoformat(),
        }
