"""Contact Listing — builds and runs the filtered, sorted, paginated contact query.

Invariants:
    - Always scoped by ContactQuery.owner_id; no parameter can widen the scope
    - Search matches the person's name OR email, case-insensitive substring,
      using the pre-escaped pattern from core/contact_query.py with ESCAPE '\\'
    - ORDER BY column comes only from _SORT_COLUMNS (keyed by SortField enum)
    - Ties broken by contact_links.id so page boundaries repeat across calls
    - Two statements per page: one COUNT, one bounded SELECT joined to accounts
"""

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkbook.core.contact_outcomes import ContactPage
from linkbook.core.contact_query import LIKE_ESCAPE_CHAR, ContactQuery
from linkbook.core.domain_types import SortDirection, SortField
from linkbook.models.account import Account
from linkbook.models.contact_link import ContactLink
from linkbook.services.contact_store import to_entry

_SORT_COLUMNS = {
    SortField.NAME: Account.name,
    SortField.EMAIL: Account.email,
}


def _scoped(stmt: Select, query: ContactQuery) -> Select:
    stmt = (
        stmt
        .join(Account, Account.id == ContactLink.person_id)
        .where(ContactLink.owner_id == query.owner_id)
    )
    pattern = query.like_pattern
    if pattern is not None:
        stmt = stmt.where(or_(
            Account.name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            Account.email.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        ))
    return stmt


def build_listing_statement(query: ContactQuery) -> Select:
    """SELECT for one page of (ContactLink, Account) rows."""
    column = func.lower(_SORT_COLUMNS[query.sort])
    ordering = column.desc() if query.direction == SortDirection.DESC else column.asc()
    return (
        _scoped(select(ContactLink, Account), query)
        .order_by(ordering, ContactLink.id.asc())
        .limit(query.per_page)
        .offset(query.offset)
    )


def build_count_statement(query: ContactQuery) -> Select:
    """COUNT of all rows matching the query's scope and search."""
    return _scoped(select(func.count(ContactLink.id)), query)


async def fetch_contact_page(db: AsyncSession, query: ContactQuery) -> ContactPage:
    total = (await db.execute(build_count_statement(query))).scalar_one()
    rows = (await db.execute(build_listing_statement(query))).all()
    return ContactPage(
        entries=[to_entry(link, person) for link, person in rows],
        page=query.page,
        total=total,
        search=query.search,
        sort=query.sort,
        direction=query.direction,
        per_page=query.per_page,
    )
