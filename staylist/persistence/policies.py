"""Row access rules for properties and everything that hangs off them.

Owners may do anything with their own rows. Anyone, signed in or not, may
read a published property together with its rooms and photos. Every other
request is rejected outright.
"""

import logging
import uuid
from enum import Enum

from staylist.listing.catalog import STATUS_PUBLISHED
from staylist.listing.errors import AccessDeniedError

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ = "read"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


def is_permitted(
    action: Action,
    caller_id: uuid.UUID | None,
    owner_id: uuid.UUID,
    status: str | None,
) -> bool:
    """Decide one request against one row (or the row's parent property).

    Args:
        action: What the caller wants to do.
        caller_id: Authenticated user id, or ``None`` for anonymous callers.
        owner_id: ``user_id`` of the property that owns the row.
        status: Status of that property; ``None`` for a row not yet written.
    """
    if caller_id is not None and caller_id == owner_id:
        return True
    return action is Action.READ and status == STATUS_PUBLISHED


def authorize(
    action: Action,
    caller_id: uuid.UUID | None,
    owner_id: uuid.UUID,
    status: str | None,
) -> None:
    """Raise ``AccessDeniedError`` unless ``is_permitted`` allows the request."""
    if not is_permitted(action, caller_id, owner_id, status):
        logger.warning(
            "Denied %s by %s on property owned by %s (status=%s)",
            action.value,
            caller_id,
            owner_id,
            status,
        )
        raise AccessDeniedError(f"Not allowed to {action.value} this property")
