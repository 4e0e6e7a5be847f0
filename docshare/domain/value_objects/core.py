"""Domain value objects for the docshare application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass

from docshare.domain.enums import AclSourceType


def _require_id(value: str, field_name: str) -> None:
    """Raise ValueError if value is not a non-empty string."""
    if not value:
        raise ValueError(f"{field_name} must be a non-empty string")


@dataclass(frozen=True)
class DocumentSource:
    """ACL source that is the document itself (direct grant)."""

    id: str

    def __post_init__(self) -> None:
        _require_id(self.id, "Document source id")

    @property
    def source_type(self) -> AclSourceType:
        return AclSourceType.DOCUMENT


@dataclass(frozen=True)
class TagSource:
    """ACL source that is a tag; the grant cascades to every document carrying it."""

    id: str

    def __post_init__(self) -> None:
        _require_id(self.id, "Tag source id")

    @property
    def source_type(self) -> AclSourceType:
        return AclSourceType.TAG


AclSource = DocumentSource | TagSource


def acl_source(source_type: AclSourceType | str, source_id: str) -> AclSource:
    """Build the AclSource variant for a stored (source_type, source_id) pair.

    Raises:
        ValueError: If source_type is not a known AclSourceType.
    """
    kind = AclSourceType(source_type)
    if kind is AclSourceType.TAG:
        return TagSource(source_id)
    return DocumentSource(source_id)


@dataclass(frozen=True)
class IdentityScope:
    """Who is asking: the caller's own id, their groups, and an optional share id.

    A scope without a user id is anonymous (share link or nobody). Anonymous
    scopes are checked against direct grants only and never see tags.
    """

    user_id: str | None = None
    group_ids: tuple[str, ...] = ()
    share_id: str | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of group ids but store an immutable tuple.
        object.__setattr__(self, "group_ids", tuple(self.group_ids))

    @property
    def is_anonymous(self) -> bool:
        """True when no authenticated user is part of the scope."""
        return self.user_id is None

    @property
    def target_ids(self) -> tuple[str, ...]:
        """Ordered, duplicate-free target ids: user, groups, then share."""
        ordered: list[str] = []
        candidates = [self.user_id, *self.group_ids, self.share_id]
        for target_id in candidates:
            if target_id and target_id not in ordered:
                ordered.append(target_id)
        return tuple(ordered)

    def without_share(self) -> "IdentityScope":
        """Same caller without the share id (tag visibility never comes from shares)."""
        return IdentityScope(user_id=self.user_id, group_ids=self.group_ids)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self.target_ids
