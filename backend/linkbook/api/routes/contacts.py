"""Contacts Routes — HTTP surface over ContactService.

Invariants:
    - The acting account id comes from the upstream auth gateway header
      (Settings.actor_header); missing or malformed -> 400
    - Listing parameters are read as raw strings and normalized by core; bad values
      degrade to defaults, never 4xx
    - Create rejections return an error envelope that echoes the submitted email
    - No edit/update route exists: contact links are immutable
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from linkbook.config import get_settings
from linkbook.core.contact_outcomes import ContactRejected
from linkbook.core.domain_types import CreateFailureReason
from linkbook.core.errors import ContactValidationError, ErrorSeverity
from linkbook.core.format_messages import format_outcome
from linkbook.infrastructure.database import get_db
from linkbook.schemas.contact import (
    ContactCreate, ContactCreatedResponse, ContactPageResponse,
    ContactRemovedResponse, ContactResponse,
)
from linkbook.services.contact_service import ContactService

router = APIRouter(prefix="/api/v1/contacts", tags=["contacts"])

_REJECTION_STATUS: dict[CreateFailureReason, int] = {
    CreateFailureReason.EMAIL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    CreateFailureReason.SELF_ADD_NOT_ALLOWED: 422,
    CreateFailureReason.DUPLICATE_CONTACT: status.HTTP_409_CONFLICT,
    CreateFailureReason.TRANSIENT_STORAGE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def get_actor_id(request: Request) -> UUID:
    """Read the authenticated account id set by the auth gateway."""
    header = get_settings().actor_header
    raw = request.headers.get(header)
    if not raw:
        raise ContactValidationError(f"Missing {header} header", header)
    try:
        return UUID(raw)
    except ValueError:
        raise ContactValidationError(f"Malformed {header} header", header)


def _rejection_response(outcome: ContactRejected) -> JSONResponse:
    transient = outcome.reason == CreateFailureReason.TRANSIENT_STORAGE_ERROR
    return JSONResponse(
        status_code=_REJECTION_STATUS[outcome.reason],
        content={
            "error": {
                "code": outcome.reason.name,
                "message": format_outcome(outcome),
                "category": "database" if transient else "business_rule",
                "severity": (
                    ErrorSeverity.CRITICAL.value if transient
                    else ErrorSeverity.WARNING.value
                ),
                "field": "email",
                "retryable": transient,
            },
            "email": outcome.email,
        },
    )


@router.get("", response_model=ContactPageResponse)
async def list_contacts(
    search: str | None = Query(None),
    sort: str | None = Query(None),
    direction: str | None = Query(None),
    page: str | None = Query(None),
    actor_id: UUID = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """List the actor's contacts with search, sort, and pagination."""
    result = await ContactService(db).list_contacts(
        actor_id, search=search, sort=sort, direction=direction, page=page,
    )
    return ContactPageResponse.from_page(result)


@router.post(
    "", response_model=ContactCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contact(
    body: ContactCreate,
    actor_id: UUID = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Look up an account by email and add it to the actor's contacts."""
    outcome = await ContactService(db).create_contact(actor_id, body.email)
    if isinstance(outcome, ContactRejected):
        return _rejection_response(outcome)
    return ContactCreatedResponse(
        contact=ContactResponse.from_entry(outcome.entry),
        message=format_outcome(outcome),
    )


@router.get("/{link_id}", response_model=ContactResponse)
async def get_contact(
    link_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Show one of the actor's contacts."""
    entry = await ContactService(db).get_contact(actor_id, link_id)
    return ContactResponse.from_entry(entry)


@router.delete("/{link_id}", response_model=ContactRemovedResponse)
async def delete_contact(
    link_id: UUID,
    actor_id: UUID = Depends(get_actor_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove one of the actor's contacts. The person's account is untouched."""
    outcome = await ContactService(db).delete_contact(actor_id, link_id)
    return ContactRemovedResponse(
        person_name=outcome.person_name, message=format_outcome(outcome),
    )
