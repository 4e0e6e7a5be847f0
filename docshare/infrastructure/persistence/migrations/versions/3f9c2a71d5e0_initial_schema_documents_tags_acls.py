"""Initial schema: users, groups, shares, documents, tags, acls

Revision ID: 3f9c2a71d5e0
Revises:
Create Date: 2026-10-19 10:12:41.518203

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c2a71d5e0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns() -> list[sa.Column]:
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
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create initial schema."""
    op.create_table(
        "app_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column(
            "is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False
        ),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_app_user_deleted_at"), "app_user", ["deleted_at"])

    op.create_table(
        "user_group",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_user_group_deleted_at"), "user_group", ["deleted_at"])

    op.create_table(
        "group_member",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("group_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["group_id"], ["user_group.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("group_id", "user_id", name="uq_group_member"),
    )
    op.create_index(op.f("ix_group_member_user_id"), "group_member", ["user_id"])
    op.create_index(op.f("ix_group_member_deleted_at"), "group_member", ["deleted_at"])

    op.create_table(
        "share",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=36), nullable=True),
        *_audit_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_share_deleted_at"), "share", ["deleted_at"])

    op.create_table(
        "document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=4000), nullable=True),
        sa.Column("subject", sa.String(length=500), nullable=True),
        sa.Column("identifier", sa.String(length=500), nullable=True),
        sa.Column("publisher", sa.String(length=500), nullable=True),
        sa.Column("format", sa.String(length=500), nullable=True),
        sa.Column("source", sa.String(length=500), nullable=True),
        sa.Column("type", sa.String(length=100), nullable=True),
        sa.Column("coverage", sa.String(length=100), nullable=True),
        sa.Column("rights", sa.String(length=100), nullable=True),
        sa.Column("language", sa.String(length=3), nullable=False),
        sa.Column("create_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("update_date", sa.DateTime(timezone=True), nullable=True),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_document_user_id"), "document", ["user_id"])
    op.create_index(op.f("ix_document_language"), "document", ["language"])
    op.create_index(op.f("ix_document_create_date"), "document", ["create_date"])
    op.create_index(op.f("ix_document_deleted_at"), "document", ["deleted_at"])
    op.create_index(
        "ix_document_live_create_date",
        "document",
        ["create_date"],
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "tag",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=36), nullable=False),
        sa.Column(
            "color",
            sa.String(length=7),
            server_default=sa.text("'#3a87ad'"),
            nullable=False,
        ),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["user_id"], ["app_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tag_user_id"), "tag", ["user_id"])
    op.create_index(op.f("ix_tag_name"), "tag", ["name"])
    op.create_index(op.f("ix_tag_deleted_at"), "tag", ["deleted_at"])

    op.create_table(
        "document_tag",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("tag_id", sa.String(), nullable=False),
        *_audit_columns(),
        sa.ForeignKeyConstraint(["document_id"], ["document.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tag.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_document_tag_tag_id"), "document_tag", ["tag_id"])
    op.create_index(op.f("ix_document_tag_deleted_at"), "document_tag", ["deleted_at"])
    op.create_index(
        "ux_document_tag_live",
        "document_tag",
        ["document_id", "tag_id"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    op.create_table(
        "acl",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("source_type", sa.String(length=16), nullable=False),
        sa.Column("source_id", sa.String(), nullable=False),
        sa.Column("target_id", sa.String(), nullable=False),
        sa.Column("perm", sa.String(length=16), nullable=False),
        *_audit_columns(),
        sa.CheckConstraint(
            "source_type IN ('document', 'tag')", name="ck_acl_source_type"
        ),
        sa.CheckConstraint("perm IN ('READ', 'WRITE')", name="ck_acl_perm"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_acl_target_id"), "acl", ["target_id"])
    op.create_index(op.f("ix_acl_deleted_at"), "acl", ["deleted_at"])
    op.create_index("ix_acl_source", "acl", ["source_type", "source_id"])
    op.create_index(
        "ux_acl_live_grant",
        "acl",
        ["source_type", "source_id", "target_id", "perm"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )


def downgrade() -> None:
    """Drop initial schema."""
    op.drop_table("acl")
    op.drop_table("document_tag")
    op.drop_table("tag")
    op.drop_table("document")
    op.drop_table("share")
    op.drop_table("group_member")
    op.drop_table("user_group")
    op.drop_table("app_user")
