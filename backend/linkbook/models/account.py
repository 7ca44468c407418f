"""Account ORM — Identity Store accounts referenced by contact links.

Invariants:
    - id is UUID primary key
    - email is unique; lookups compare lower(email)
    - password_hash is opaque to this service and never serialized

Design Decisions:
    - Owned by the identity subsystem; the contact core only reads it
    - No relationship() to ContactLink: links are fetched through explicit joins
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from linkbook.db.base import Base


class Account(Base):
    """User account — the person on either end of a contact link."""
    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255), nullable=False, default="",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
