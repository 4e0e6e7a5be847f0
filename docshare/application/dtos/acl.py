"""DTOs for access-control grants (no dependency on ORM)."""

from dataclasses import dataclass, field

from docshare.domain.enums import AclTargetType, PermissionType
from docshare.domain.value_objects import AclSource


@dataclass(frozen=True)
class AclGrant:
    """One ACL row: source grants permission to target.

    Identity is (source, target_id, permission); target_name and target_type
    are display data resolved by the repository and do not affect equality,
    so duplicate rows collapse in sets.
    """

    source: AclSource
    target_id: str
    permission: PermissionType
    target_name: str | None = field(default=None, compare=False)
    target_type: AclTargetType | None = field(default=None, compare=False)


@dataclass(frozen=True)
class TagProvenance:
    """The tag through which an inherited grant applies."""

    tag_id: str
    tag_name: str


@dataclass(frozen=True)
class EffectiveGrant:
    """A grant annotated with where it comes from (presentation only).

    via is None for a direct grant; otherwise the tag that cascaded it.
    """

    grant: AclGrant
    via: TagProvenance | None = None

    @property
    def is_direct(self) -> bool:
        return self.via is None
