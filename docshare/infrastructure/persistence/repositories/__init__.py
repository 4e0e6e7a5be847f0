"""Repositories implementing the application ports over SQLAlchemy."""

from docshare.infrastructure.persistence.repositories.acl_repo import AclRepository
from docshare.infrastructure.persistence.repositories.base import BaseRepository
from docshare.infrastructure.persistence.repositories.contributor_repo import (
    ContributorRepository,
)
from docshare.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from docshare.infrastructure.persistence.repositories.group_repo import GroupRepository
from docshare.infrastructure.persistence.repositories.relation_repo import (
    RelationRepository,
)
from docshare.infrastructure.persistence.repositories.tag_repo import TagRepository
from docshare.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "AclRepository",
    "BaseRepository",
    "ContributorRepository",
    "DocumentRepository",
    "GroupRepository",
    "RelationRepository",
    "TagRepository",
    "UserRepository",
]
