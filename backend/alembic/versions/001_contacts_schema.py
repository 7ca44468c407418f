"""Accounts and contact links.

Revision ID: 001_contacts_schema
Revises: None
Create Date: 2026-10-19

contact_links carries UNIQUE(owner_id, person_id), CHECK(owner_id <> person_id),
and ON DELETE CASCADE on both foreign keys to accounts.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_contacts_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "contact_links",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id", UUID(as_uuid=True),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "person_id", UUID(as_uuid=True),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("owner_id", "person_id", name="uq_contact_links_owner_person"),
        sa.CheckConstraint("owner_id <> person_id", name="ck_contact_links_not_self"),
    )
    op.create_index("ix_contact_links_owner_id", "contact_links", ["owner_id"])
    op.create_index("ix_contact_links_person_id", "contact_links", ["person_id"])


def downgrade() -> None:
    op.drop_index("ix_contact_links_person_id", table_name="contact_links")
    op.drop_index("ix_contact_links_owner_id", table_name="contact_links")
    op.drop_table("contact_links")
    op.drop_table("accounts")
