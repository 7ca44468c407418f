"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/contact_store.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Store methods are async because implementations do IO; the policy and
      query-normalization functions that consume these shapes are never async
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from linkbook.core.contact_outcomes import ContactEntry
from linkbook.core.domain_types import AccountId, LinkId


class OwnedLink(Protocol):
    """Anything the authorization policy can inspect: a link with an owner."""
    owner_id: UUID


class AccountLike(Protocol):
    """Display fields of an Identity Store account."""
    id: UUID
    name: str
    email: str
    created_at: datetime


class ContactLinkLike(Protocol):
    """Structural contract for a persisted contact link."""
    id: UUID
    owner_id: UUID
    person_id: UUID
    created_at: datetime


class AccountRepository(Protocol):
    """Contract for Identity Store reads — implemented by shell."""
    async def get(self, account_id: AccountId) -> AccountLike | None: ...
    async def find_by_email(self, email: str) -> AccountLike | None: ...


class ContactLinkRepository(Protocol):
    """Contract for contact link persistence — implemented by shell."""
    async def by_owner(self, owner_id: AccountId) -> list[ContactLinkLike]: ...
    async def by_person(self, person_id: AccountId) -> list[ContactLinkLike]: ...
    async def exists(self, owner_id: AccountId, person_id: AccountId) -> bool: ...
    async def insert(
        self, owner_id: AccountId, person_id: AccountId,
    ) -> ContactLinkLike: ...
    async def get_entry(self, link_id: LinkId) -> ContactEntry | None: ...
    async def delete(self, link_id: LinkId, owner_id: AccountId) -> bool: ...
