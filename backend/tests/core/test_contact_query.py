"""Contact Query — verifies listing-parameter normalization and LIKE escaping.

Tests:
    - Search is trimmed, blank -> None, truncated to 100 chars
    - %, _ and the escape char are escaped; plain text is unchanged
    - Sort field and direction fall back to name/asc for anything off the allow-list
    - Page numbers below 1 or non-numeric fall back to 1
    - owner_id passes through untouched
"""

from uuid import uuid4

import pytest

from linkbook.core.contact_query import (
    ContactQuery, build_contact_query, escape_like, resolve_direction,
    resolve_page, resolve_sort_field, sanitize_search,
)
from linkbook.core.domain_types import (
    CONTACTS_PER_PAGE, MAX_PAGE, MAX_SEARCH_LENGTH, SortDirection, SortField,
)


def test_search_none_means_no_filter():
    assert sanitize_search(None) is None


@pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
def test_blank_search_means_no_filter(raw):
    assert sanitize_search(raw) is None


def test_search_is_trimmed():
    assert sanitize_search("  Alice  ") == "Alice"


def test_search_is_truncated_to_max_length():
    result = sanitize_search("a" * 500)
    assert len(result) == MAX_SEARCH_LENGTH == 100


def test_search_truncation_happens_after_trim():
    result = sanitize_search("   " + "b" * 150)
    assert result == "b" * 100


def test_escape_like_percent():
    assert escape_like("100%") == "100\\%"


def test_escape_like_underscore():
    assert escape_like("test_user") == "test\\_user"


def test_escape_like_escapes_backslash_once():
    assert escape_like("a\\b") == "a\\\\b"
    assert escape_like("\\%") == "\\\\\\%"


def test_escape_like_leaves_plain_text_alone():
    assert escape_like("O'Brien") == "O'Brien"


def test_like_pattern_wraps_escaped_search():
    query = ContactQuery(owner_id=uuid4(), search="50%_off")
    assert query.like_pattern == "%50\\%\\_off%"


def test_like_pattern_none_without_search():
    assert ContactQuery(owner_id=uuid4()).like_pattern is None


@pytest.mark.parametrize("raw,expected", [
    ("name", SortField.NAME),
    ("email", SortField.EMAIL),
    ("password", SortField.NAME),
    ("created_at", SortField.NAME),
    ("name; DROP TABLE accounts", SortField.NAME),
    ("EMAIL", SortField.NAME),
    ("", SortField.NAME),
    (None, SortField.NAME),
])
def test_sort_field_allow_list(raw, expected):
    assert resolve_sort_field(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("asc", SortDirection.ASC),
    ("desc", SortDirection.DESC),
    ("invalid", SortDirection.ASC),
    ("DESC", SortDirection.ASC),
    (None, SortDirection.ASC),
])
def test_direction_allow_list(raw, expected):
    assert resolve_direction(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    (None, 1), (1, 1), (3, 3), ("2", 2), (0, 1), (-4, 1),
    ("abc", 1), ("", 1), ("1.5", 1), (True, 1),
    (MAX_PAGE, MAX_PAGE), (MAX_PAGE + 1, 1), ("99999999999999999999", 1),
])
def test_page_resolution(raw, expected):
    assert resolve_page(raw) == expected


def test_build_contact_query_defaults():
    owner = uuid4()
    query = build_contact_query(owner)
    assert query.owner_id == owner
    assert query.search is None
    assert query.sort == SortField.NAME
    assert query.direction == SortDirection.ASC
    assert query.page == 1
    assert query.per_page == CONTACTS_PER_PAGE == 25
    assert query.offset == 0


def test_build_contact_query_normalizes_everything():
    query = build_contact_query(
        uuid4(), search="  bob ", sort="password", direction="sideways", page="3",
    )
    assert query.search == "bob"
    assert query.sort == SortField.NAME
    assert query.direction == SortDirection.ASC
    assert query.page == 3
    assert query.offset == 50


def test_largest_page_offset_fits_64_bits():
    query = build_contact_query(uuid4(), page=MAX_PAGE)
    assert query.offset <= 2**63 - 1
