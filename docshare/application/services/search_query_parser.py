"""Search query mini-language: compiles a query string into SearchCriteria.

Syntax is whitespace-separated tokens; key:value tokens with a known key are
clauses, everything else is free text. Example:

    tag:invoice tag:2023 before:2024 after:2023-09 shared:yes lang:fra by:alice full:total acme

Parsing never fails. Unknown or malformed clauses become free text; clauses
that cannot match anything (unknown tag, unknown user, bad date) set
sentinel values so the storage query returns no documents.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from docshare.application.dtos.search import SearchCriteria
from docshare.core.constants import EPOCH_ORIGIN, FAR_FUTURE, NO_MATCH_ID

if TYPE_CHECKING:
    from docshare.application.interfaces.repositories import (
        ITagRepository,
        IUserRepository,
    )
    from docshare.domain.value_objects import IdentityScope

logger = logging.getLogger(__name__)

# Tried in order by before:/after:.
_DATE_FORMATS = ("%Y", "%Y-%m", "%Y-%m-%d")

ONE_SECOND = timedelta(seconds=1)


def _parse_date(value: str, fmt: str) -> datetime:
    """Parse value with fmt as a UTC datetime. Raises ValueError on mismatch."""
    return datetime.strptime(value, fmt).replace(tzinfo=UTC)


def parse_date_any(value: str) -> datetime | None:
    """Parse value with the first matching precision (year, month, day); None if none match."""
    for fmt in _DATE_FORMATS:
        try:
            return _parse_date(value, fmt)
        except ValueError:
            continue
    return None


def _next_day(start: datetime) -> datetime:
    return start + timedelta(days=1)


def _next_month(start: datetime) -> datetime:
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def _next_year(start: datetime) -> datetime:
    return start.replace(year=start.year + 1)


# at: precision selected by value length -> (format, start of next period).
_AT_PRECISIONS: dict[int, tuple[str, Callable[[datetime], datetime]]] = {
    10: ("%Y-%m-%d", _next_day),
    7: ("%Y-%m", _next_month),
    4: ("%Y", _next_year),
}


def calendar_period(value: str) -> tuple[datetime, datetime] | None:
    """Return (start, end) of the day, month or year named by value.

    end is one second before the next period starts. Returns None for an
    unsupported length or an unparsable value.
    """
    precision = _AT_PRECISIONS.get(len(value))
    if precision is None:
        return None
    fmt, next_period = precision
    try:
        start = _parse_date(value, fmt)
        end = next_period(start) - ONE_SECOND
    except (ValueError, OverflowError):
        return None
    return start, end


@dataclass
class _CriteriaBuilder:
    """Mutable accumulator; frozen into SearchCriteria once all tokens are read."""

    free_terms: list[str] = field(default_factory=list)
    full_text_terms: list[str] = field(default_factory=list)
    tag_ids: set[str] = field(default_factory=set)
    create_date_min: datetime | None = None
    create_date_max: datetime | None = None
    shared: bool | None = None
    language: str | None = None
    creator_id: str | None = None

    def build(self) -> SearchCriteria:
        return SearchCriteria(
            free_terms=tuple(self.free_terms),
            full_text_terms=tuple(self.full_text_terms),
            tag_ids=frozenset(self.tag_ids),
            create_date_min=self.create_date_min,
            create_date_max=self.create_date_max,
            shared=self.shared,
            language=self.language,
            creator_id=self.creator_id,
        )


class SearchQueryParser:
    """Compiles search strings; tag and user names resolve within the caller's scope.

    Tag names match by case-insensitive substring (policy of
    ITagRepository.find_by_name_and_scope) among tags the caller can read.
    """

    def __init__(
        self,
        tag_repo: ITagRepository,
        user_repo: IUserRepository,
        supported_languages: Iterable[str],
    ) -> None:
        self.tag_repo = tag_repo
        self.user_repo = user_repo
        self.supported_languages = frozenset(supported_languages)

    async def parse(self, query: str | None, scope: IdentityScope) -> SearchCriteria:
        """Compile query into SearchCriteria. Never raises on malformed input."""
        builder = _CriteriaBuilder()
        if not query or not query.strip():
            return builder.build()

        for token in query.split():
            key, sep, value = token.partition(":")
            if not sep or not key or not value:
                builder.free_terms.append(token)
                continue
            handled = await self._apply_clause(builder, key, value, scope)
            if not handled:
                builder.free_terms.append(token)

        return builder.build()

    async def _apply_clause(
        self,
        builder: _CriteriaBuilder,
        key: str,
        value: str,
        scope: IdentityScope,
    ) -> bool:
        """Apply one key:value clause. Returns False when key is not part of the language."""
        if key == "tag":
            await self._apply_tag(builder, value, scope)
        elif key in ("before", "after"):
            self._apply_date_bound(builder, key, value)
        elif key == "at":
            self._apply_at(builder, value)
        elif key == "shared":
            if value == "yes":
                builder.shared = True
        elif key == "lang":
            if value in self.supported_languages:
                builder.language = value
        elif key == "by":
            await self._apply_creator(builder, value)
        elif key == "full":
            builder.full_text_terms.append(value)
        else:
            return False
        return True

    async def _apply_tag(
        self, builder: _CriteriaBuilder, name: str, scope: IdentityScope
    ) -> None:
        # Share ids never make tags visible.
        target_ids = scope.without_share().target_ids
        tags = await self.tag_repo.find_by_name_and_scope(name, target_ids)
        if not tags:
            logger.debug("tag:%s matched no visible tag; forcing empty result", name)
            builder.tag_ids.add(NO_MATCH_ID)
            return
        builder.tag_ids.update(t.id for t in tags)

    def _apply_date_bound(
        self, builder: _CriteriaBuilder, key: str, value: str
    ) -> None:
        date = parse_date_any(value)
        if key == "before":
            builder.create_date_max = date if date is not None else EPOCH_ORIGIN
        else:
            builder.create_date_min = date if date is not None else FAR_FUTURE
        if date is None:
            logger.debug("%s:%s is not a date; forcing empty result", key, value)

    def _apply_at(self, builder: _CriteriaBuilder, value: str) -> None:
        period = calendar_period(value)
        if period is None:
            logger.debug("at:%s is not a date; forcing empty result", value)
            builder.create_date_min = EPOCH_ORIGIN
            builder.create_date_max = EPOCH_ORIGIN
            return
        builder.create_date_min, builder.create_date_max = period

    async def _apply_creator(self, builder: _CriteriaBuilder, username: str) -> None:
        user = await self.user_repo.get_active_by_username(username)
        if user is None:
            logger.debug("by:%s is not an active user; forcing empty result", username)
            builder.creator_id = NO_MATCH_ID
            return
        builder.creator_id = user.id
