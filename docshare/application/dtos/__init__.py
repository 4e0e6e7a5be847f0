"""Application DTOs (no ORM dependency)."""

from docshare.application.dtos.acl import AclGrant, EffectiveGrant, TagProvenance
from docshare.application.dtos.document import (
    ContributorResult,
    DocumentCreate,
    DocumentDetail,
    DocumentEvent,
    DocumentInput,
    DocumentPage,
    DocumentResult,
    DocumentSummary,
    RelationResult,
)
from docshare.application.dtos.search import SearchCriteria
from docshare.application.dtos.tag import TagResult
from docshare.application.dtos.user import UserResult

__all__ = [
    "AclGrant",
    "ContributorResult",
    "DocumentCreate",
    "DocumentDetail",
    "DocumentEvent",
    "DocumentInput",
    "DocumentPage",
    "DocumentResult",
    "DocumentSummary",
    "EffectiveGrant",
    "RelationResult",
    "SearchCriteria",
    "TagProvenance",
    "TagResult",
    "UserResult",
]
