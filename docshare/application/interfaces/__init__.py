"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from docshare.infrastructure or docshare.api.
"""

from docshare.application.interfaces.repositories import (
    IAclRepository,
    IContributorRepository,
    IDocumentRepository,
    IGroupRepository,
    IRelationRepository,
    ITagRepository,
    IUnitOfWork,
    IUserRepository,
)
from docshare.application.interfaces.services import (
    IDocumentEventPublisher,
    IPermissionResolver,
    ISearchQueryParser,
)

__all__ = [
    "IAclRepository",
    "IContributorRepository",
    "IDocumentEventPublisher",
    "IDocumentRepository",
    "IGroupRepository",
    "IPermissionResolver",
    "IRelationRepository",
    "ISearchQueryParser",
    "ITagRepository",
    "IUnitOfWork",
    "IUserRepository",
]
