"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
"""

from docshare.api.v1.dependencies.auth import (
    get_authenticated_scope,
    get_current_user,
    get_current_user_optional,
    get_group_repo,
    get_identity_scope,
    get_user_repo,
)
from docshare.api.v1.dependencies.document import (
    get_document_command_service,
    get_document_event_publisher,
    get_document_query_service,
)

__all__ = [
    "get_authenticated_scope",
    "get_current_user",
    "get_current_user_optional",
    "get_document_command_service",
    "get_document_event_publisher",
    "get_document_query_service",
    "get_group_repo",
    "get_identity_scope",
    "get_user_repo",
]
