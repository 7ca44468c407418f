"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AccountId, LinkId wrap UUIDs — never use bare UUID in domain logic
    - Sort field and direction are closed enums; raw strings never reach a query
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AccountId = NewType("AccountId", UUID)
LinkId = NewType("LinkId", UUID)


# ─── Listing Constants ───────────────────────────────────────────

CONTACTS_PER_PAGE = 25
# OFFSET must fit a signed 64-bit integer on every backend
MAX_PAGE = (2**63 - 1) // CONTACTS_PER_PAGE
MAX_SEARCH_LENGTH = 100
MAX_EMAIL_LENGTH = 255


# ─── Enums ───────────────────────────────────────────────────────

class SortField(str, Enum):
    """Account columns a contact list may be ordered by."""
    NAME = "name"
    EMAIL = "email"


class SortDirection(str, Enum):
    """Ordering direction for the contact list."""
    ASC = "asc"
    DESC = "desc"


class Capability(str, Enum):
    """Operations the authorization policy answers for."""
    VIEW_COLLECTION = "view_collection"
    VIEW_ONE = "view_one"
    CREATE = "create"
    DELETE = "delete"


class CreateFailureReason(str, Enum):
    """Why a contact could not be added. Each maps to a user-facing sentence."""
    EMAIL_NOT_FOUND = "email_not_found"
    SELF_ADD_NOT_ALLOWED = "self_add_not_allowed"
    DUPLICATE_CONTACT = "duplicate_contact"
    TRANSIENT_STORAGE_ERROR = "transient_storage_error"
