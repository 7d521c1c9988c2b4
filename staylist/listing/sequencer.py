"""Turn a finished draft into database rows, one ordered step at a time.

Create mode inserts the property (published), then its rooms, then each
room's photos, then the property photos. Edit mode updates the property in
place, deletes its rooms and photos, and re-runs the child inserts against the
same property id, so room and photo ids change on every edit.

A failing step stops the sequence and raises ``SubmissionError``. Earlier steps
are not undone here: they stay in the caller's unit of work, and it is the
caller's transaction that decides whether they are kept.
"""

import logging
import uuid
from datetime import time
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from staylist.listing.catalog import STATUS_PUBLISHED, dump_amenities, dump_facilities
from staylist.listing.errors import AccessDeniedError, ListingError, PropertyNotFoundError, SubmissionError
from staylist.listing.form import PropertyDraft
from staylist.listing.steps import parse_price, validate_for_submit
from staylist.models.property import Property
from staylist.models.room import PropertyRoom
from staylist.persistence.policies import Action
from staylist.persistence.repository import ListingRepository

logger = logging.getLogger(__name__)

STEP_PROPERTY = "property"
STEP_CLEAR_CHILDREN = "clear_children"
STEP_ROOMS = "rooms"
STEP_ROOM_PHOTOS = "room_photos"
STEP_PROPERTY_PHOTOS = "property_photos"

FALLBACK_ERROR = "Failed to list property. Please try again."


def _parse_time(value: str | time | None) -> time | None:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


def property_values(draft: PropertyDraft) -> dict:
    """Scalar columns of the ``properties`` row for *draft* (status excluded)."""
    return {
        "property_type": draft.property_type,
        "name": draft.name.strip(),
        "description": draft.description or None,
        "street_address": draft.street_address.strip(),
        "city": draft.city.strip(),
        "state": draft.state.strip(),
        "amenities": dump_amenities(draft.amenities),
        "checkin_time": _parse_time(draft.checkin_time),
        "checkout_time": _parse_time(draft.checkout_time),
        "cancellation_policy": draft.cancellation_policy or None,
    }


def room_rows(draft: PropertyDraft) -> list[dict]:
    rows = []
    for room in draft.rooms:
        price = parse_price(room.price_lkr)
        rows.append(
            {
                "room_type": room.room_type,
                "bed_type": room.bed_type,
                "max_guests": room.max_guests,
                "units_available": room.units_available,
                "facilities": dump_facilities(room.facilities),
                "price_lkr": price.quantize(Decimal("0.01")) if price is not None else None,
            }
        )
    return rows


def photo_rows(urls: list[str]) -> list[dict]:
    """One row per URL; ``sort_order`` is the URL's position in the list."""
    return [{"photo_url": url, "sort_order": index} for index, url in enumerate(urls)]


class ListingSubmitter:
    """Runs the create and replace sequences against one repository."""

    def __init__(self, repository: ListingRepository) -> None:
        self.repository = repository
        self.completed: list[str] = []

    async def _run(self, step: str, operation):
        try:
            result = await operation
        except (AccessDeniedError, PropertyNotFoundError):
            raise
        except (ListingError, SQLAlchemyError, ValueError) as exc:
            logger.warning(
                "Submission step %s failed after %s: %s",
                step,
                self.completed or "nothing",
                exc,
            )
            message = str(getattr(exc, "orig", None) or exc) or FALLBACK_ERROR
            raise SubmissionError(step, list(self.completed), message) from exc
        self.completed.append(step)
        return result

    async def _insert_children(self, prop: Property, draft: PropertyDraft) -> None:
        rooms: list[PropertyRoom] = []
        if draft.rooms:
            rooms = await self._run(STEP_ROOMS, self.repository.insert_rooms(prop, room_rows(draft)))
            logger.info("Inserted %d room(s) for property %s", len(rooms), prop.id)

        photo_batches = [
            (room, photo_rows(room_draft.photos))
            for room, room_draft in zip(rooms, draft.rooms)
            if room_draft.photos
        ]
        if photo_batches:
            await self._run(STEP_ROOM_PHOTOS, self._insert_room_photos(prop, photo_batches))

        if draft.photos:
            await self._run(
                STEP_PROPERTY_PHOTOS,
                self.repository.insert_property_photos(prop, photo_rows(draft.photos)),
            )
            logger.info("Inserted %d photo(s) for property %s", len(draft.photos), prop.id)

    async def _insert_room_photos(self, prop: Property, batches: list[tuple[PropertyRoom, list[dict]]]) -> None:
        for room, rows in batches:
            await self.repository.insert_room_photos(prop, room, rows)
            logger.info("Inserted %d photo(s) for room %s", len(rows), room.id)

    async def _clear_children(self, prop: Property) -> None:
        rooms = await self.repository.delete_rooms(prop)
        photos = await self.repository.delete_property_photos(prop)
        logger.info("Cleared %d room(s) and %d photo(s) of property %s", rooms, photos, prop.id)

    async def _insert_property(self, owner_id: uuid.UUID, draft: PropertyDraft) -> Property:
        values = property_values(draft)
        values["status"] = STATUS_PUBLISHED
        return await self.repository.insert_property(owner_id, values)

    async def _update_property(self, prop: Property, draft: PropertyDraft) -> Property:
        return await self.repository.update_property(prop, property_values(draft))

    async def create(self, owner_id: uuid.UUID, draft: PropertyDraft) -> Property:
        """Publish a new property from *draft* and return it with rooms and photos loaded."""
        validate_for_submit(draft)
        self.completed = []

        prop = await self._run(STEP_PROPERTY, self._insert_property(owner_id, draft))
        await self._insert_children(prop, draft)

        logger.info("Published property %s (%d room(s))", prop.id, len(draft.rooms))
        return await self.repository.get_aggregate(prop.id)

    async def replace(self, property_id: uuid.UUID, draft: PropertyDraft) -> Property:
        """Overwrite an existing property with *draft*; rooms and photos are re-created."""
        validate_for_submit(draft)
        self.completed = []

        prop = await self.repository.get_property(property_id, Action.UPDATE)
        prop = await self._run(STEP_PROPERTY, self._update_property(prop, draft))
        await self._run(STEP_CLEAR_CHILDREN, self._clear_children(prop))
        await self._insert_children(prop, draft)

        logger.info("Replaced property %s (%d room(s))", prop.id, len(draft.rooms))
        return await self.repository.get_aggregate(prop.id)
