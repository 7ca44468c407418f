"""Contact Authorization Policy — who may do what with contact links.

Invariants:
    - Pure functions: no IO, no async, no ambient "current user"
    - The acting account is always an explicit parameter
    - view_collection and create are granted to every authenticated actor;
      scoping the collection to the actor's own links is the listing query's job
    - view_one and delete are granted only to the link's owner
    - The referenced person has no rights over a link that points at them
"""

from uuid import UUID

from linkbook.core.domain_types import Capability
from linkbook.core.errors import AuthorizationError, ErrorContext
from linkbook.core.repository_protocols import OwnedLink


def can_view_collection(actor_id: UUID) -> bool:
    return True


def can_create(actor_id: UUID) -> bool:
    return True


def can_view_one(actor_id: UUID, link: OwnedLink) -> bool:
    return actor_id == link.owner_id


def can_delete(actor_id: UUID, link: OwnedLink) -> bool:
    return actor_id == link.owner_id


def is_allowed(
    capability: Capability, actor_id: UUID, link: OwnedLink | None = None,
) -> bool:
    """Evaluate one capability. Link-scoped capabilities require a link."""
    if capability == Capability.VIEW_COLLECTION:
        return can_view_collection(actor_id)
    if capability == Capability.CREATE:
        return can_create(actor_id)
    if link is None:
        raise ValueError(f"{capability.value} requires a target link")
    if capability == Capability.VIEW_ONE:
        return can_view_one(actor_id, link)
    return can_delete(actor_id, link)


def authorize(
    capability: Capability, actor_id: UUID, link: OwnedLink | None = None,
) -> None:
    """Raise AuthorizationError unless actor holds the capability."""
    if is_allowed(capability, actor_id, link):
        return
    raise AuthorizationError(
        capability.value, ErrorContext(actor_id=str(actor_id)),
    )
