"""Application services: search query parsing and permission resolution."""

from docshare.application.services.permission_resolver import PermissionResolver
from docshare.application.services.search_query_parser import SearchQueryParser

__all__ = [
    "PermissionResolver",
    "SearchQueryParser",
]
