"""Contributor ORM model: a user who created or edited a document."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Contributor(CuidMixin, TimestampMixin, Base):
    """Contributor of a document. Table: contributor. One row per (document, user)."""

    __tablename__ = "contributor"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("document_id", "user_id", name="uq_contributor_document_user"),
    )
