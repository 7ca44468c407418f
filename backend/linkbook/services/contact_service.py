"""Contact Service — list, get, create, and delete contacts on behalf of an actor.

Invariants:
    - Every operation takes the acting account id explicitly; there is no ambient user
    - list_contacts is always scoped to actor_id
    - create_contact checks, in order: email resolves -> not self -> not already linked
      -> insert; the first failing check wins
    - A unique-constraint violation on insert becomes DUPLICATE_CONTACT; any other
      storage failure, at any step of create, becomes TRANSIENT_STORAGE_ERROR;
      both roll back fully and keep the submitted email
    - delete_contact captures the person's name before deleting the row
    - A link that vanished between read and delete is NotFound, never a crash

Design Decisions:
    - The existence check and insert are not atomic; the storage-level unique
      constraint on (owner_id, person_id) is the only concurrency guard, no locks
    - get/delete load the link before authorizing so "absent" (404) and
      "forbidden" (403) stay distinguishable
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from linkbook.core.authorize_contacts import authorize
from linkbook.core.contact_outcomes import (
    ContactCreated, ContactEntry, ContactPage, ContactRejected, ContactRemoved,
)
from linkbook.core.contact_query import build_contact_query
from linkbook.core.domain_types import (
    AccountId, Capability, CreateFailureReason, LinkId,
)
from linkbook.core.errors import AuthorizationError, ErrorContext, ResourceNotFoundError
from linkbook.core.repository_protocols import AccountRepository, ContactLinkRepository
from linkbook.services.contact_listing import fetch_contact_page
from linkbook.services.contact_store import AccountStore, ContactLinkStore

logger = logging.getLogger(__name__)


class ContactService:
    """Request-scoped orchestration of the contact relationship core."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.accounts: AccountRepository = AccountStore(db)
        self.links: ContactLinkRepository = ContactLinkStore(db)

    async def list_contacts(
        self,
        actor_id: UUID,
        *,
        search: str | None = None,
        sort: str | None = None,
        direction: str | None = None,
        page: int | str | None = None,
    ) -> ContactPage:
        authorize(Capability.VIEW_COLLECTION, actor_id)
        query = build_contact_query(
            actor_id, search=search, sort=sort, direction=direction, page=page,
        )
        return await fetch_contact_page(self.db, query)

    async def get_contact(self, actor_id: UUID, link_id: UUID) -> ContactEntry:
        entry = await self._load_entry(link_id)
        self._authorize_link(Capability.VIEW_ONE, actor_id, entry)
        return entry

    async def create_contact(
        self, actor_id: UUID, email: str,
    ) -> ContactCreated | ContactRejected:
        """Add the account registered under email as actor's contact."""
        authorize(Capability.CREATE, actor_id)
        try:
            person = await self.accounts.find_by_email(email)
            if person is None:
                return self._reject(actor_id, email, CreateFailureReason.EMAIL_NOT_FOUND)
            if person.id == actor_id:
                return self._reject(
                    actor_id, email, CreateFailureReason.SELF_ADD_NOT_ALLOWED,
                )
            if await self.links.exists(AccountId(actor_id), AccountId(person.id)):
                return self._reject(
                    actor_id, email, CreateFailureReason.DUPLICATE_CONTACT,
                )
        except SQLAlchemyError as e:
            await self.db.rollback()
            return self._transient(actor_id, email, f"Contact pre-checks failed: {e}")

        # rollback expires ORM state; keep plain copies of what the result needs
        person_id, person_name, person_email = person.id, person.name, person.email
        person_member_since = person.created_at
        try:
            link = await self.links.insert(AccountId(actor_id), AccountId(person_id))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            return await self._classify_integrity_error(actor_id, person_id, email, e)
        except SQLAlchemyError as e:
            await self.db.rollback()
            return self._transient(actor_id, email, f"Contact insert failed: {e}")

        entry = ContactEntry(
            link_id=link.id,
            owner_id=link.owner_id,
            person_id=link.person_id,
            person_name=person_name,
            person_email=person_email,
            person_member_since=person_member_since,
            created_at=link.created_at,
        )
        logger.info(
            f"Contact {link.id} created",
            extra={
                "actor_id": str(actor_id), "link_id": str(link.id),
                "outcome": "created",
            },
        )
        return ContactCreated(entry)

    async def delete_contact(self, actor_id: UUID, link_id: UUID) -> ContactRemoved:
        """Remove an owned link. Returns the removed person's name."""
        entry = await self._load_entry(link_id)
        self._authorize_link(Capability.DELETE, actor_id, entry)
        person_name = entry.person_name

        removed = await self.links.delete(LinkId(link_id), AccountId(actor_id))
        await self.db.commit()
        if not removed:
            raise ResourceNotFoundError(
                "Contact", str(link_id), ErrorContext(actor_id=str(actor_id)),
            )
        logger.info(
            f"Contact {link_id} deleted",
            extra={
                "actor_id": str(actor_id), "link_id": str(link_id),
                "outcome": "deleted",
            },
        )
        return ContactRemoved(link_id=link_id, person_name=person_name)

    async def _load_entry(self, link_id: UUID) -> ContactEntry:
        entry = await self.links.get_entry(LinkId(link_id))
        if entry is None:
            raise ResourceNotFoundError("Contact", str(link_id))
        return entry

    def _authorize_link(
        self, capability: Capability, actor_id: UUID, entry: ContactEntry,
    ) -> None:
        try:
            authorize(capability, actor_id, entry)
        except AuthorizationError as e:
            e.context.link_id = str(entry.link_id)
            logger.warning(
                f"Denied {capability.value} on contact {entry.link_id}",
                extra={
                    "actor_id": str(actor_id), "link_id": str(entry.link_id),
                    "error_code": e.code,
                },
            )
            raise

    async def _classify_integrity_error(
        self, actor_id: UUID, person_id: UUID, email: str, error: IntegrityError,
    ) -> ContactRejected:
        """Lost the insert race -> duplicate; anything else -> transient."""
        try:
            duplicate = await self.links.exists(AccountId(actor_id), AccountId(person_id))
        except SQLAlchemyError as e:
            logger.error(
                f"Duplicate re-check failed: {e}",
                extra={"actor_id": str(actor_id), "outcome": "transient"},
            )
            duplicate = False
        if duplicate:
            return self._reject(actor_id, email, CreateFailureReason.DUPLICATE_CONTACT)
        return self._transient(
            actor_id, email, f"Contact insert violated a constraint: {error}",
        )

    def _transient(self, actor_id: UUID, email: str, detail: str) -> ContactRejected:
        logger.error(
            detail, extra={"actor_id": str(actor_id), "outcome": "transient"},
        )
        return ContactRejected(CreateFailureReason.TRANSIENT_STORAGE_ERROR, email)

    def _reject(
        self, actor_id: UUID, email: str, reason: CreateFailureReason,
    ) -> ContactRejected:
        logger.info(
            f"Contact not added: {reason.value}",
            extra={"actor_id": str(actor_id), "outcome": reason.value},
        )
        return ContactRejected(reason, email)
