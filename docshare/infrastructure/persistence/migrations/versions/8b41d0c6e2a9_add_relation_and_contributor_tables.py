"""Add relation and contributor tables

Revision ID: 8b41d0c6e2a9
Revises: 3f9c2a71d5e0
Create Date: 2026-10-19 16:40:07.904112

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b41d0c6e2a9"
down_revision: Union[str, Sequence[str], None] = "3f9c2a71d5e0"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create relation (soft-deleted links) and contributor tables."""
    op.create_table(
        "relation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("from_document_id", sa.String(), nullable=False),
        sa.Column("to_document_id", sa.String(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["from_document_id"], ["document.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["to_document_id"], ["document.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_relation_to_document_id"), "relation", ["to_document_id"])
    op.create_index(op.f("ix_relation_deleted_at"), "relation", ["deleted_at"])
    op.create_index(
        "ux_relation_live",
        "relation",
        ["from_document_id", "to_document_id"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "contributor",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "document_id", "user_id", name="uq_contributor_document_user"
        ),
    )
    op.create_index(op.f("ix_contributor_user_id"), "contributor", ["user_id"])


def downgrade() -> None:
    """Drop relation and contributor tables."""
    op.drop_table("contributor")
    op.drop_table("relation")
