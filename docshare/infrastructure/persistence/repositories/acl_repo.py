"""ACL repository: grants keyed by document or tag source. Returns application DTOs."""

from __future__ import annotations

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docshare.application.dtos.acl import AclGrant
from docshare.domain.enums import AclTargetType, PermissionType
from docshare.domain.value_objects import AclSource, acl_source
from docshare.infrastructure.persistence.models.acl import Acl
from docshare.infrastructure.persistence.models.group import Group
from docshare.infrastructure.persistence.models.share import Share
from docshare.infrastructure.persistence.models.user import User
from docshare.infrastructure.persistence.repositories.base import BaseRepository


def _target(
    username: str | None, group_name: str | None, share_id: str | None, share_name: str | None
) -> tuple[str | None, AclTargetType | None]:
    """Resolve display name and kind of an ACL target from the outer-joined rows."""
    if username is not None:
        return username, AclTargetType.USER
    if group_name is not None:
        return group_name, AclTargetType.GROUP
    if share_id is not None:
        return share_name, AclTargetType.SHARE
    return None, None


class AclRepository(BaseRepository[Acl]):
    """ACL rows as AclGrant values with target display data resolved."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Acl)

    async def get_by_source(self, source: AclSource) -> list[AclGrant]:
        """Return every live grant on source, ordered by permission then target id."""
        stmt = (
            select(Acl, User.username, Group.name, Share.id, Share.name)
            .outerjoin(User, and_(User.id == Acl.target_id, User.deleted_at.is_(None)))
            .outerjoin(
                Group, and_(Group.id == Acl.target_id, Group.deleted_at.is_(None))
            )
            .outerjoin(
                Share, and_(Share.id == Acl.target_id, Share.deleted_at.is_(None))
            )
            .where(
                Acl.source_type == source.source_type.value,
                Acl.source_id == source.id,
                Acl.deleted_at.is_(None),
            )
            .order_by(Acl.perm, Acl.target_id)
        )
        result = await self.db.execute(stmt)
        grants: list[AclGrant] = []
        for acl, username, group_name, share_id, share_name in result.all():
            target_name, target_type = _target(username, group_name, share_id, share_name)
            grants.append(
                AclGrant(
                    source=acl_source(acl.source_type, acl.source_id),
                    target_id=acl.target_id,
                    permission=PermissionType(acl.perm),
                    target_name=target_name,
                    target_type=target_type,
                )
            )
        return grants

    async def create_grant(self, grant: AclGrant) -> None:
        """Insert grant unless an identical live row already exists."""
        existing = await self.db.execute(
            select(Acl.id).where(
                Acl.source_type == grant.source.source_type.value,
                Acl.source_id == grant.source.id,
                Acl.target_id == grant.target_id,
                Acl.perm == grant.permission.value,
                Acl.deleted_at.is_(None),
            )
        )
        if existing.scalar_one_or_none() is not None:
            return
        await self.create(
            Acl(
                source_type=grant.source.source_type.value,
                source_id=grant.source.id,
                target_id=grant.target_id,
                perm=grant.permission.value,
            )
        )

    async def delete_by_source(self, source: AclSource) -> int:
        """Soft-delete every live grant on source. Returns the number of rows."""
        return await self._soft_delete_where(
            Acl.source_type == source.source_type.value,
            Acl.source_id == source.id,
        )
