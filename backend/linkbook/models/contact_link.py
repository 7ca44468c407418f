"""ContactLink ORM — a directed "owner added person" relationship.

Invariants:
    - owner_id != person_id (CHECK ck_contact_links_not_self)
    - (owner_id, person_id) unique (uq_contact_links_owner_person); (A, B) and (B, A)
      are independent rows
    - Both FKs cascade on delete: removing either account removes its links
    - Immutable after insert: any flush that would UPDATE a link raises
      ImmutableContactLinkError; the only transition is DELETE

Design Decisions:
    - No relationship() to Account: every read of the person is an explicit join
      (services/contact_store.py, services/contact_listing.py)
    - owner_id and person_id indexed separately for by_owner / by_person lookups
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, UniqueConstraint, event,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from linkbook.core.errors import ImmutableContactLinkError
from linkbook.db.base import Base

UNIQUE_OWNER_PERSON = "uq_contact_links_owner_person"
CHECK_NOT_SELF = "ck_contact_links_not_self"


class ContactLink(Base):
    """Contact link entity — owner_id added person_id as a contact."""
    __tablename__ = "contact_links"
    __table_args__ = (
        UniqueConstraint("owner_id", "person_id", name=UNIQUE_OWNER_PERSON),
        CheckConstraint("owner_id <> person_id", name=CHECK_NOT_SELF),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    person_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )


@event.listens_for(ContactLink, "before_update")
def _reject_link_update(mapper, connection, target: ContactLink) -> None:
    raise ImmutableContactLinkError(str(target.id))
