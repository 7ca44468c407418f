"""Contact List Query — normalizes raw listing parameters into a safe, closed form.

Invariants:
    - Pure function: no IO, no async, no DB
    - owner_id is mandatory and never taken from caller-supplied filters
    - search: trimmed; blank -> None; otherwise truncated to MAX_SEARCH_LENGTH chars
    - sort: only SortField members survive; anything else -> SortField.NAME
    - direction: only SortDirection members survive; anything else -> SortDirection.ASC
    - page: integers in [1, MAX_PAGE] survive; anything else -> 1
    - Malformed input never raises — it degrades to the defaults above

Design Decisions:
    - LIKE pattern built here, not in SQL: backslash, % and _ escaped so a search
      for "100%" or "test_user" matches those characters literally
    - The sort allow-list is the only path from a raw string to an ORDER BY column
"""

from dataclasses import dataclass
from uuid import UUID

from linkbook.core.domain_types import (
    CONTACTS_PER_PAGE, MAX_PAGE, MAX_SEARCH_LENGTH, SortDirection, SortField,
)

LIKE_ESCAPE_CHAR = "\\"
_LIKE_SPECIALS = (LIKE_ESCAPE_CHAR, "%", "_")


@dataclass(frozen=True)
class ContactQuery:
    """Normalized listing request for one owner's contacts."""
    owner_id: UUID
    search: str | None = None
    sort: SortField = SortField.NAME
    direction: SortDirection = SortDirection.ASC
    page: int = 1
    per_page: int = CONTACTS_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def like_pattern(self) -> str | None:
        """Substring pattern for the search text, or None when unfiltered."""
        if self.search is None:
            return None
        return f"%{escape_like(self.search)}%"


def sanitize_search(raw: str | None) -> str | None:
    """Trim and truncate search input. Blank input means no filter."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    return cleaned[:MAX_SEARCH_LENGTH]


def escape_like(text: str) -> str:
    """Neutralize LIKE wildcards. Escape char first so it is not double-escaped."""
    for char in _LIKE_SPECIALS:
        text = text.replace(char, LIKE_ESCAPE_CHAR + char)
    return text


def resolve_sort_field(raw: str | None) -> SortField:
    try:
        return SortField(raw)
    except ValueError:
        return SortField.NAME


def resolve_direction(raw: str | None) -> SortDirection:
    try:
        return SortDirection(raw)
    except ValueError:
        return SortDirection.ASC


def resolve_page(raw: int | str | None) -> int:
    if isinstance(raw, bool):
        return 1
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return page if 1 <= page <= MAX_PAGE else 1


def build_contact_query(
    owner_id: UUID,
    *,
    search: str | None = None,
    sort: str | None = None,
    direction: str | None = None,
    page: int | str | None = None,
) -> ContactQuery:
    """Build a ContactQuery from raw, untrusted listing parameters."""
    return ContactQuery(
        owner_id=owner_id,
        search=sanitize_search(search),
        sort=resolve_sort_field(sort),
        direction=resolve_direction(direction),
        page=resolve_page(page),
    )
