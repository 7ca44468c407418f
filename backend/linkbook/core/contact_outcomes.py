"""Contact Outcomes — typed results returned by the contact service.

Invariants:
    - Business rejections (email not found, self-add, duplicate, transient storage)
      are values, never exceptions
    - ContactRejected always carries the email exactly as submitted
    - ContactEntry is a detached snapshot: a link joined with its person's display
      fields, safe to use after the DB session is closed
    - All types are frozen
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from linkbook.core.domain_types import (
    CONTACTS_PER_PAGE, CreateFailureReason, SortDirection, SortField,
)


@dataclass(frozen=True)
class ContactEntry:
    """One contact link plus the referenced account's display fields."""
    link_id: UUID
    owner_id: UUID
    person_id: UUID
    person_name: str
    person_email: str
    person_member_since: datetime
    created_at: datetime


@dataclass(frozen=True)
class ContactCreated:
    entry: ContactEntry

    @property
    def person_name(self) -> str:
        return self.entry.person_name


@dataclass(frozen=True)
class ContactRejected:
    reason: CreateFailureReason
    email: str


@dataclass(frozen=True)
class ContactRemoved:
    link_id: UUID
    person_name: str


@dataclass(frozen=True)
class ContactPage:
    """A bounded slice of the actor's contacts with pagination metadata.

    search/sort/direction are the values actually applied, after normalization,
    so callers can redisplay controls and build next/previous links.
    """
    entries: list[ContactEntry]
    page: int
    total: int
    search: str | None
    sort: SortField
    direction: SortDirection
    per_page: int = CONTACTS_PER_PAGE
    last_page: int = field(init=False)

    def __post_init__(self):
        pages = max(1, -(-self.total // self.per_page))
        object.__setattr__(self, "last_page", pages)

    @property
    def has_more(self) -> bool:
        return self.page < self.last_page
