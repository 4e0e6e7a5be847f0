"""Group ORM models: user_group and group_member."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Group(SoftDeleteModel, Base):
    """Group of users; an ACL target. Table: user_group."""

    __tablename__ = "user_group"

    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)


class GroupMember(SoftDeleteModel, Base):
    """Membership of a user in a group. Table: group_member."""

    __tablename__ = "group_member"

    group_id: Mapped[str] = mapped_column(
        String, ForeignKey("user_group.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_member"),
    )
