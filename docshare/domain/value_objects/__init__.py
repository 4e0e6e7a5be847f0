"""Domain value objects: identity scope and ACL sources."""

from docshare.domain.value_objects.core import (
    AclSource,
    DocumentSource,
    IdentityScope,
    TagSource,
    acl_source,
)

__all__ = [
    "AclSource",
    "DocumentSource",
    "IdentityScope",
    "TagSource",
    "acl_source",
]
