"""Contact Stores — SQLAlchemy implementations of the account and contact link repositories.

Invariants:
    - Every read of a link's person is an explicit join (no lazy loading)
    - Stores never commit; the calling service owns the transaction
    - insert() lets IntegrityError propagate so the caller can classify it
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkbook.core.contact_outcomes import ContactEntry
from linkbook.core.domain_types import AccountId, LinkId
from linkbook.models.account import Account
from linkbook.models.contact_link import ContactLink


def to_entry(link: ContactLink, person: Account) -> ContactEntry:
    """Detach a (link, person) row pair into a ContactEntry."""
    return ContactEntry(
        link_id=link.id,
        owner_id=link.owner_id,
        person_id=link.person_id,
        person_name=person.name,
        person_email=person.email,
        person_member_since=person.created_at,
        created_at=link.created_at,
    )


class AccountStore:
    """Read access to Identity Store accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, account_id: AccountId) -> Account | None:
        result = await self.db.execute(
            select(Account).where(Account.id == account_id),
        )
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Account | None:
        """Case-insensitive email lookup."""
        result = await self.db.execute(
            select(Account)
            .where(func.lower(Account.email) == email.strip().lower())
            .order_by(Account.created_at)
            .limit(1)
        )
        return result.scalars().first()


class ContactLinkStore:
    """Persistence for contact links, keyed by owner and by person."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def by_owner(self, owner_id: AccountId) -> list[ContactLink]:
        result = await self.db.execute(
            select(ContactLink)
            .where(ContactLink.owner_id == owner_id)
            .order_by(ContactLink.created_at, ContactLink.id)
        )
        return list(result.scalars().all())

    async def by_person(self, person_id: AccountId) -> list[ContactLink]:
        result = await self.db.execute(
            select(ContactLink)
            .where(ContactLink.person_id == person_id)
            .order_by(ContactLink.created_at, ContactLink.id)
        )
        return list(result.scalars().all())

    async def contact_people(self, owner_id: AccountId) -> list[Account]:
        """Accounts this owner has added, in the order they were added."""
        result = await self.db.execute(
            select(Account)
            .join(ContactLink, ContactLink.person_id == Account.id)
            .where(ContactLink.owner_id == owner_id)
            .order_by(ContactLink.created_at, ContactLink.id)
        )
        return list(result.scalars().all())

    async def exists(self, owner_id: AccountId, person_id: AccountId) -> bool:
        result = await self.db.execute(
            select(ContactLink.id)
            .where(ContactLink.owner_id == owner_id)
            .where(ContactLink.person_id == person_id)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def insert(
        self, owner_id: AccountId, person_id: AccountId,
    ) -> ContactLink:
        """Add and flush a new link. Raises IntegrityError on constraint violation."""
        link = ContactLink(owner_id=owner_id, person_id=person_id)
        self.db.add(link)
        await self.db.flush()
        return link

    async def get_entry(self, link_id: LinkId) -> ContactEntry | None:
        result = await self.db.execute(
            select(ContactLink, Account)
            .join(Account, Account.id == ContactLink.person_id)
            .where(ContactLink.id == link_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        link, person = row
        return to_entry(link, person)

    async def delete(self, link_id: LinkId, owner_id: AccountId) -> bool:
        """Delete one owned link. False if it was already gone."""
        result = await self.db.execute(
            delete(ContactLink)
            .where(ContactLink.id == link_id)
            .where(ContactLink.owner_id == owner_id)
        )
        return result.rowcount > 0
