"""Tag ORM models: tag and the document_tag link table."""

from sqlalchemy import ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Tag(SoftDeleteModel, Base):
    """Tag entity. Table: tag. Visibility comes from acl rows with source_type 'tag'."""

    __tablename__ = "tag"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    color: Mapped[str] = mapped_column(
        String(7), nullable=False, server_default=text("'#3a87ad'")
    )


class DocumentTag(SoftDeleteModel, Base):
    """Link between a document and a tag. Table: document_tag."""

    __tablename__ = "document_tag"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("document.id", ondelete="CASCADE"), nullable=False
    )
    tag_id: Mapped[str] = mapped_column(
        String, ForeignKey("tag.id", ondelete="CASCADE"), nullable=False, index=True
    )

    __table_args__ = (
        # One live link per (document, tag).
        Index(
            "ux_document_tag_live",
            "document_id",
            "tag_id",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
