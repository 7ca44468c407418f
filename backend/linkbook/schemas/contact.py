"""Contact Schemas — Pydantic models for the contacts API boundary.

Invariants:
    - ContactCreate.email: stripped, non-empty, email-shaped, <= 255 chars
    - Validation messages are the user-facing sentences from core/format_messages.py
    - Responses never expose account credentials

Design Decisions:
    - Shape check is a plain regex: the authoritative test is whether an account
      with that email exists
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator

from linkbook.core.contact_outcomes import ContactEntry, ContactPage
from linkbook.core.domain_types import MAX_EMAIL_LENGTH
from linkbook.core.format_messages import EMAIL_FIELD_MESSAGES

_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ContactCreate(BaseModel):
    """Add-contact request — one email address to look up."""
    email: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError(EMAIL_FIELD_MESSAGES["required"])
        if len(v) > MAX_EMAIL_LENGTH:
            raise ValueError(EMAIL_FIELD_MESSAGES["max_length"])
        if not _EMAIL_SHAPE.match(v):
            raise ValueError(EMAIL_FIELD_MESSAGES["format"])
        return v


class ContactResponse(BaseModel):
    """One contact: the link plus the person's public profile."""
    id: UUID
    person_id: UUID
    name: str
    email: str
    member_since: datetime
    added_at: datetime

    @classmethod
    def from_entry(cls, entry: ContactEntry) -> "ContactResponse":
        return cls(
            id=entry.link_id,
            person_id=entry.person_id,
            name=entry.person_name,
            email=entry.person_email,
            member_since=entry.person_member_since,
            added_at=entry.created_at,
        )


class PaginationMeta(BaseModel):
    page: int
    per_page: int
    total: int
    last_page: int
    has_more: bool


class ListingFilters(BaseModel):
    """Filters actually applied after normalization."""
    search: str | None
    sort: str
    direction: str


class ContactPageResponse(BaseModel):
    contacts: list[ContactResponse]
    pagination: PaginationMeta
    filters: ListingFilters

    @classmethod
    def from_page(cls, page: ContactPage) -> "ContactPageResponse":
        return cls(
            contacts=[ContactResponse.from_entry(e) for e in page.entries],
            pagination=PaginationMeta(
                page=page.page,
                per_page=page.per_page,
                total=page.total,
                last_page=page.last_page,
                has_more=page.has_more,
            ),
            filters=ListingFilters(
                search=page.search,
                sort=page.sort.value,
                direction=page.direction.value,
            ),
        )


class ContactCreatedResponse(BaseModel):
    contact: ContactResponse
    message: str


class ContactRemovedResponse(BaseModel):
    person_name: str
    message: str
