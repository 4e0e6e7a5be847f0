"""ACL ORM model: one grant of a permission from a source to a target."""

from sqlalchemy import CheckConstraint, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Acl(SoftDeleteModel, Base):
    """ACL entity. Table: acl.

    source_id is a document or tag id (discriminated by source_type);
    target_id is a user, group or share id.
    """

    __tablename__ = "acl"

    source_type: Mapped[str] = mapped_column(String(16), nullable=False)
    source_id: Mapped[str] = mapped_column(String, nullable=False)
    target_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    perm: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (
        CheckConstraint("source_type IN ('document', 'tag')", name="ck_acl_source_type"),
        CheckConstraint("perm IN ('READ', 'WRITE')", name="ck_acl_perm"),
        Index("ix_acl_source", "source_type", "source_id"),
        Index(
            "ux_acl_live_grant",
            "source_type",
            "source_id",
            "target_id",
            "perm",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
