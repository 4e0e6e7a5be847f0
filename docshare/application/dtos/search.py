"""DTOs for document search criteria (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SearchCriteria:
    """Structured filter compiled from a search query string.

    Built once per query by SearchQueryParser and never mutated afterwards.
    tag_ids may contain NO_MATCH_ID and creator_id may equal NO_MATCH_ID;
    both force an empty result in the document repository.
    """

    free_terms: tuple[str, ...] = ()
    full_text_terms: tuple[str, ...] = ()
    tag_ids: frozenset[str] = frozenset()
    create_date_min: datetime | None = None
    create_date_max: datetime | None = None
    shared: bool | None = None
    language: str | None = None
    creator_id: str | None = None

    @property
    def search(self) -> str:
        """Free-text terms joined for the relevance search."""
        return " ".join(self.free_terms)

    @property
    def full_search(self) -> str:
        """full: terms joined for the full-text search."""
        return " ".join(self.full_text_terms)

    def is_empty(self) -> bool:
        """True when no clause restricts the result set."""
        return self == SearchCriteria()
