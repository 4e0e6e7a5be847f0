"""Document ORM model. Dublin Core style metadata owned by a user."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from docshare.core.constants import (
    DESCRIPTION_MAX_LENGTH,
    LANGUAGE_CODE_LENGTH,
    LONG_METADATA_MAX_LENGTH,
    SHORT_METADATA_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Document(SoftDeleteModel, Base):
    """Document entity. Table: document. Owner is user_id; access goes through acl rows."""

    __tablename__ = "document"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    subject: Mapped[str | None] = mapped_column(
        String(LONG_METADATA_MAX_LENGTH), nullable=True
    )
    identifier: Mapped[str | None] = mapped_column(
        String(LONG_METADATA_MAX_LENGTH), nullable=True
    )
    publisher: Mapped[str | None] = mapped_column(
        String(LONG_METADATA_MAX_LENGTH), nullable=True
    )
    format: Mapped[str | None] = mapped_column(
        String(LONG_METADATA_MAX_LENGTH), nullable=True
    )
    source: Mapped[str | None] = mapped_column(
        String(LONG_METADATA_MAX_LENGTH), nullable=True
    )
    type: Mapped[str | None] = mapped_column(
        String(SHORT_METADATA_MAX_LENGTH), nullable=True
    )
    coverage: Mapped[str | None] = mapped_column(
        String(SHORT_METADATA_MAX_LENGTH), nullable=True
    )
    rights: Mapped[str | None] = mapped_column(
        String(SHORT_METADATA_MAX_LENGTH), nullable=True
    )
    language: Mapped[str] = mapped_column(
        String(LANGUAGE_CODE_LENGTH), nullable=False, index=True
    )
    create_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    update_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index(
            "ix_document_live_create_date",
            "create_date",
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )
