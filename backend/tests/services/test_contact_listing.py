"""Contact listing — scoping, search, sort, and pagination against a real DB.

Invariants:
    - Only the actor's own links are ever returned
    - Search matches the person's name or email, case-insensitively, as a literal substring
    - Sort outside {name, email} / {asc, desc} silently falls back to name / asc
    - 25 per page, stable across calls
"""

from uuid import uuid4

from linkbook.core.contact_query import build_contact_query
from linkbook.core.domain_types import SortDirection, SortField
from linkbook.services.contact_listing import build_listing_statement
from linkbook.services.contact_service import ContactService


def _names(page) -> list[str]:
    return [e.person_name for e in page.entries]


async def test_list_shows_only_own_contacts(test_db, make_account, make_link):
    user = await make_account()
    other = await make_account()
    visible = await make_account("Alice Visible")
    hidden = await make_account("Bob Hidden")
    await make_link(user, visible)
    await make_link(other, hidden)

    page = await ContactService(test_db).list_contacts(user.id)

    assert _names(page) == ["Alice Visible"]
    assert all(e.owner_id == user.id for e in page.entries)


async def test_search_never_crosses_owners(test_db, make_account, make_link):
    user = await make_account()
    other = await make_account()
    await make_link(other, await make_account("Shared Name"))

    page = await ContactService(test_db).list_contacts(user.id, search="Shared")

    assert page.entries == []
    assert page.total == 0


async def test_list_entries_carry_person_fields(test_db, make_account, make_link):
    user = await make_account()
    person = await make_account("TestPerson Name", "testperson@example.com")
    link = await make_link(user, person)

    page = await ContactService(test_db).list_contacts(user.id)

    entry = page.entries[0]
    assert entry.link_id == link.id
    assert entry.person_id == person.id
    assert entry.person_name == "TestPerson Name"
    assert entry.person_email == "testperson@example.com"


async def test_empty_list(test_db, make_account):
    user = await make_account()

    page = await ContactService(test_db).list_contacts(user.id)

    assert page.entries == []
    assert page.total == 0
    assert page.last_page == 1
    assert not page.has_more


async def test_search_by_name(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Alice Wonderland"))
    await make_link(user, await make_account("Bob Builder"))

    page = await ContactService(test_db).list_contacts(user.id, search="alice")

    assert _names(page) == ["Alice Wonderland"]


async def test_search_by_email(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Alice", "alice@unique-search.com"))
    await make_link(user, await make_account("Bob", "bob@other-domain.com"))

    page = await ContactService(test_db).list_contacts(user.id, search="UNIQUE-search")

    assert _names(page) == ["Alice"]


async def test_search_with_quote(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("O'Brien"))

    page = await ContactService(test_db).list_contacts(user.id, search="O'Brien")

    assert _names(page) == ["O'Brien"]


async def test_percent_is_matched_literally(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("100% Complete"))
    await make_link(user, await make_account("1000 Things"))

    page = await ContactService(test_db).list_contacts(user.id, search="100%")

    assert _names(page) == ["100% Complete"]


async def test_underscore_is_matched_literally(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("test_user"))
    await make_link(user, await make_account("testXuser"))

    page = await ContactService(test_db).list_contacts(user.id, search="test_user")

    assert _names(page) == ["test_user"]


async def test_backslash_is_matched_literally(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("back\\slash"))
    await make_link(user, await make_account("backslash"))

    page = await ContactService(test_db).list_contacts(user.id, search="k\\s")

    assert _names(page) == ["back\\slash"]


async def test_blank_search_returns_everything(test_db, make_account, make_link):
    user = await make_account()
    for _ in range(3):
        await make_link(user, await make_account())

    page = await ContactService(test_db).list_contacts(user.id, search="   ")

    assert len(page.entries) == 3
    assert page.search is None


async def test_search_is_trimmed(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Alice"))

    page = await ContactService(test_db).list_contacts(user.id, search="  Alice  ")

    assert page.search == "Alice"
    assert _names(page) == ["Alice"]


async def test_sort_by_name_both_directions(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Charlie"))
    await make_link(user, await make_account("alice"))
    await make_link(user, await make_account("Bob"))
    service = ContactService(test_db)

    asc = await service.list_contacts(user.id, sort="name", direction="asc")
    desc = await service.list_contacts(user.id, sort="name", direction="desc")

    assert _names(asc) == ["alice", "Bob", "Charlie"]
    assert _names(desc) == ["Charlie", "Bob", "alice"]


async def test_sort_by_email_both_directions(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Z", "aaa@example.com"))
    await make_link(user, await make_account("A", "zzz@example.com"))
    service = ContactService(test_db)

    asc = await service.list_contacts(user.id, sort="email", direction="asc")
    desc = await service.list_contacts(user.id, sort="email", direction="desc")

    assert asc.entries[0].person_email == "aaa@example.com"
    assert desc.entries[0].person_email == "zzz@example.com"
    assert asc.sort == SortField.EMAIL


async def test_disallowed_sort_field_sorts_by_name(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Charlie", "a@example.com"))
    await make_link(user, await make_account("Alice", "z@example.com"))

    page = await ContactService(test_db).list_contacts(user.id, sort="password")

    assert page.sort == SortField.NAME
    assert _names(page) == ["Alice", "Charlie"]


async def test_invalid_direction_defaults_to_asc(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Beta"))
    await make_link(user, await make_account("Alpha"))

    page = await ContactService(test_db).list_contacts(user.id, direction="sideways")

    assert page.direction == SortDirection.ASC
    assert _names(page) == ["Alpha", "Beta"]


async def test_thirty_contacts_paginate_25_then_5(test_db, make_account, make_link):
    user = await make_account()
    for _ in range(30):
        await make_link(user, await make_account("SharedName"))
    service = ContactService(test_db)

    first = await service.list_contacts(user.id)
    second = await service.list_contacts(user.id, page=2)

    assert len(first.entries) == 25
    assert first.has_more
    assert first.total == 30
    assert len(second.entries) == 5
    assert not second.has_more
    first_ids = {e.link_id for e in first.entries}
    second_ids = {e.link_id for e in second.entries}
    assert first_ids.isdisjoint(second_ids)
    assert len(first_ids | second_ids) == 30


async def test_page_boundaries_repeat_with_tied_sort_keys(test_db, make_account, make_link):
    user = await make_account()
    for _ in range(30):
        await make_link(user, await make_account("Same"))
    service = ContactService(test_db)

    once = await service.list_contacts(user.id, page=1)
    again = await service.list_contacts(user.id, page=1)

    assert [e.link_id for e in once.entries] == [e.link_id for e in again.entries]


async def test_search_results_paginate(test_db, make_account, make_link):
    user = await make_account()
    for _ in range(30):
        await make_link(user, await make_account("SharedName"))
    await make_link(user, await make_account("Other"))

    page = await ContactService(test_db).list_contacts(user.id, search="SharedName")

    assert len(page.entries) == 25
    assert page.total == 30


async def test_bad_page_numbers_fall_back_to_first_page(test_db, make_account, make_link):
    user = await make_account()
    await make_link(user, await make_account("Only"))
    service = ContactService(test_db)

    for raw in (0, -1, "abc", "99999999999999999999"):
        page = await service.list_contacts(user.id, page=raw)
        assert page.page == 1
        assert _names(page) == ["Only"]


def test_sort_column_never_comes_from_raw_text():
    query = build_contact_query(uuid4(), sort="password; DROP TABLE accounts")
    sql = str(build_listing_statement(query))
    order_by = sql.split("ORDER BY", 1)[1]

    assert "DROP" not in sql
    assert "password" not in order_by
    assert "lower(accounts.name)" in order_by
