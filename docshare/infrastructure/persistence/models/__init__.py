"""Persistence models: ORM entities and mixins."""

from docshare.infrastructure.persistence.models.acl import Acl
from docshare.infrastructure.persistence.models.contributor import Contributor
from docshare.infrastructure.persistence.models.document import Document
from docshare.infrastructure.persistence.models.group import Group, GroupMember
from docshare.infrastructure.persistence.models.mixins import (
    CuidMixin,
    SoftDeleteMixin,
    SoftDeleteModel,
    TimestampMixin,
)
from docshare.infrastructure.persistence.models.relation import Relation
from docshare.infrastructure.persistence.models.share import Share
from docshare.infrastructure.persistence.models.tag import DocumentTag, Tag
from docshare.infrastructure.persistence.models.user import User

__all__ = [
    "Acl",
    "Contributor",
    "Document",
    "DocumentTag",
    "Group",
    "GroupMember",
    "Relation",
    "Share",
    "Tag",
    "User",
    "CuidMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
    "SoftDeleteModel",
]
