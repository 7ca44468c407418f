"""Contact Message Formatting — pure functions for user-facing contact messages.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - Every CreateFailureReason has exactly one sentence
    - Messages never include internal identifiers or storage details
"""

from linkbook.core.contact_outcomes import (
    ContactCreated, ContactRejected, ContactRemoved,
)
from linkbook.core.domain_types import CreateFailureReason, MAX_EMAIL_LENGTH

REJECTION_MESSAGES: dict[CreateFailureReason, str] = {
    CreateFailureReason.EMAIL_NOT_FOUND: "No user found with that email address.",
    CreateFailureReason.SELF_ADD_NOT_ALLOWED: "You cannot add yourself as a contact.",
    CreateFailureReason.DUPLICATE_CONTACT: "This user is already in your contacts.",
    CreateFailureReason.TRANSIENT_STORAGE_ERROR: (
        "Unable to add this contact. Please try again."
    ),
}

EMAIL_FIELD_MESSAGES: dict[str, str] = {
    "required": "Please enter an email address to search for.",
    "format": "Please enter a valid email address.",
    "max_length": (
        f"The email address must not exceed {MAX_EMAIL_LENGTH} characters."
    ),
}


def format_created(outcome: ContactCreated) -> str:
    return f"{outcome.person_name} has been added to your contacts."


def format_rejected(outcome: ContactRejected) -> str:
    return REJECTION_MESSAGES[outcome.reason]


def format_removed(outcome: ContactRemoved) -> str:
    return f"{outcome.person_name} has been removed from your contacts."


def format_outcome(outcome: ContactCreated | ContactRejected | ContactRemoved) -> str:
    """Single sentence explaining an outcome to the end user."""
    if isinstance(outcome, ContactCreated):
        return format_created(outcome)
    if isinstance(outcome, ContactRejected):
        return format_rejected(outcome)
    return format_removed(outcome)
