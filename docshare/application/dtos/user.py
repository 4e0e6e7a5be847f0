"""DTOs for user lookups (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, get_active_by_username). No password."""

    id: str
    username: str
    email: str
    is_active: bool
