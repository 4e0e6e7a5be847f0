"""Identity dependencies: bearer JWT -> user -> groups -> IdentityScope (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.user import UserResult
from docshare.domain.value_objects import IdentityScope
from docshare.infrastructure.persistence.database import get_db
from docshare.infrastructure.persistence.repositories import (
    GroupRepository,
    UserRepository,
)
from docshare.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_group_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> GroupRepository:
    """Group repository for read operations."""
    return GroupRepository(db)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None. Use for optional auth routes."""
    if not credentials:
        return None
    try:
        claims = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await user_repo.get_by_id(claims.user_id)
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


async def _scope_for(
    user: UserResult | None, group_repo: GroupRepository, share_id: str | None
) -> IdentityScope:
    if user is None:
        return IdentityScope(share_id=share_id)
    group_ids = await group_repo.get_group_ids_for_user(user.id)
    return IdentityScope(user_id=user.id, group_ids=group_ids, share_id=share_id)


async def get_identity_scope(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repo)],
    share: Annotated[
        str | None, Query(max_length=36, description="Share id for anonymous access")
    ] = None,
) -> IdentityScope:
    """Scope of the caller: user and groups when authenticated, plus the share id if given."""
    return await _scope_for(current_user, group_repo, share or None)


async def get_authenticated_scope(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    group_repo: Annotated[GroupRepository, Depends(get_group_repo)],
) -> IdentityScope:
    """Scope of an authenticated caller (no share id). 401 when not authenticated."""
    return await _scope_for(current_user, group_repo, None)
