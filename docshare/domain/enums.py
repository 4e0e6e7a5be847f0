"""Domain enumerations for the docshare application.

Enums represent fixed sets of domain values (permission levels, ACL
source and target kinds, document lifecycle events).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class PermissionType(_ValuesMixin, str, Enum):
    """Permission level named by a grant.

    Levels are independent: a WRITE grant does not imply READ.
    """

    READ = "READ"
    WRITE = "WRITE"


class AclSourceType(_ValuesMixin, str, Enum):
    """What an ACL row is attached to: a document (direct) or a tag (cascading)."""

    DOCUMENT = "document"
    TAG = "tag"


class AclTargetType(_ValuesMixin, str, Enum):
    """Who an ACL row grants to."""

    USER = "USER"
    GROUP = "GROUP"
    SHARE = "SHARE"


class DocumentEventType(_ValuesMixin, str, Enum):
    """Document lifecycle notifications published after a successful mutation."""

    CREATED = "document_created"
    UPDATED = "document_updated"
    DELETED = "document_deleted"
