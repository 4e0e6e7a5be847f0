"""DTOs for tags (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TagResult:
    """Tag read-model (result of find_by_name_and_scope, list_for_document)."""

    id: str
    name: str
    color: str
