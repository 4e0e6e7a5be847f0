"""Document use cases: query (list with search, detail with ACLs) and commands (create, update, delete)."""

from docshare.application.use_cases.documents.document_operations import (
    SORT_COLUMNS,
    DocumentCommandService,
    DocumentQueryService,
)

__all__ = [
    "SORT_COLUMNS",
    "DocumentCommandService",
    "DocumentQueryService",
]
