"""Share ORM model: an anonymous access link; its id is an ACL target."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from docshare.infrastructure.persistence.database import Base
from docshare.infrastructure.persistence.models.mixins import SoftDeleteModel


class Share(SoftDeleteModel, Base):
    """Share link. Table: share. name is an optional label shown in ACL listings."""

    __tablename__ = "share"

    name: Mapped[str | None] = mapped_column(String(36), nullable=True)
