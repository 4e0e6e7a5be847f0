"""Relation ORM model: a directed link between two documents."""

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Relation(SoftDeleteModel, Base):
    """Link from one document to another. Table: relation.

    Links are edited from their origin (from_document_id) and listed on both ends.
    """

    __tablename__ = "relation"

    from_document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False
    )
    to_document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        Index(
            "ux_relation_live",
            "from_document_id",
            "to_document_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
