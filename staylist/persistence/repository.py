"""Listing repository: row-level reads and writes behind the access policy.

One repository is built per request from the request's session and the
caller's identity. Every method checks ``policies.authorize`` against the
owning property before it touches any row.
"""

import logging
import uuid
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from staylist.listing.catalog import STATUS_PUBLISHED
from staylist.listing.errors import AccessDeniedError, PropertyNotFoundError
from staylist.models.photo import PropertyPhoto, RoomPhoto
from staylist.models.property import Property
from staylist.models.room import PropertyRoom
from staylist.persistence.policies import Action, authorize

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    """Current time as naive UTC, matching the ``created_at`` columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ListingRepository:
    """Persistence adapter for properties, rooms and photos."""

    def __init__(self, session: AsyncSession, caller_id: uuid.UUID | None) -> None:
        self.session = session
        self.caller_id = caller_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_property(self, property_id: uuid.UUID, action: Action = Action.READ) -> Property:
        """Load one property and check *action* against it."""
        result = await self.session.execute(select(Property).where(Property.id == property_id))
        prop = result.scalar_one_or_none()
        if prop is None:
            raise PropertyNotFoundError(f"Property {property_id} not found")
        authorize(action, self.caller_id, prop.user_id, prop.status)
        return prop

    async def get_aggregate(self, property_id: uuid.UUID, action: Action = Action.READ) -> Property:
        """Load a property with its rooms, room photos and photos, bypassing stale identity-map state."""
        result = await self.session.execute(
            select(Property)
            .where(Property.id == property_id)
            .options(
                selectinload(Property.rooms).selectinload(PropertyRoom.photos),
                selectinload(Property.photos),
            )
            .execution_options(populate_existing=True)
        )
        prop = result.scalar_one_or_none()
        if prop is None:
            raise PropertyNotFoundError(f"Property {property_id} not found")
        authorize(action, self.caller_id, prop.user_id, prop.status)
        return prop

    async def list_owned(
        self,
        status: str | None = None,
        property_type: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Property], int]:
        """Return a page of the caller's own properties, newest first, and the total count."""
        if self.caller_id is None:
            raise AccessDeniedError("Sign in to see your properties")

        filters = [Property.user_id == self.caller_id]
        if status is not None:
            filters.append(Property.status == status)
        if property_type is not None:
            filters.append(Property.property_type == property_type)

        total_result = await self.session.execute(select(func.count()).select_from(Property).where(*filters))
        total = total_result.scalar_one()

        items_result = await self.session.execute(
            select(Property).where(*filters).order_by(Property.created_at.desc()).offset(skip).limit(limit)
        )
        return list(items_result.scalars().all()), total

    async def list_published(
        self,
        city: str | None = None,
        property_type: str | None = None,
        skip: int = 0,
        limit: int = 24,
    ) -> list[Property]:
        """Return published properties, newest first. This is the public read rule as a query."""
        filters = [Property.status == STATUS_PUBLISHED]
        if city is not None:
            filters.append(func.lower(Property.city) == city.lower())
        if property_type is not None:
            filters.append(Property.property_type == property_type)

        result = await self.session.execute(
            select(Property).where(*filters).order_by(Property.created_at.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Property writes
    # ------------------------------------------------------------------

    async def insert_property(self, owner_id: uuid.UUID, values: dict) -> Property:
        authorize(Action.INSERT, self.caller_id, owner_id, None)
        prop = Property(user_id=owner_id, **values)
        self.session.add(prop)
        await self.session.flush()
        await self.session.refresh(prop)
        logger.info("Inserted property %s for owner %s", prop.id, owner_id)
        return prop

    async def update_property(self, prop: Property, values: dict) -> Property:
        authorize(Action.UPDATE, self.caller_id, prop.user_id, prop.status)
        for field, value in values.items():
            setattr(prop, field, value)
        self.session.add(prop)
        await self.session.flush()
        await self.session.refresh(prop)
        return prop

    async def delete_property(self, property_id: uuid.UUID) -> None:
        """Delete a property; its rooms and all photos go with it."""
        prop = await self.get_aggregate(property_id, Action.DELETE)
        await self.session.delete(prop)
        await self.session.flush()
        logger.info("Deleted property %s", property_id)

    # ------------------------------------------------------------------
    # Child rows
    # ------------------------------------------------------------------

    async def insert_rooms(self, prop: Property, rows: Sequence[dict]) -> list[PropertyRoom]:
        """Insert room rows in one batch; the returned rooms are in input order.

        ``created_at`` is stamped one microsecond apart so rooms read back in
        the order they were entered.
        """
        authorize(Action.INSERT, self.caller_id, prop.user_id, prop.status)
        stamp = _utcnow()
        rooms = [
            PropertyRoom(property_id=prop.id, created_at=stamp + timedelta(microseconds=index), **row)
            for index, row in enumerate(rows)
        ]
        self.session.add_all(rooms)
        await self.session.flush()
        return rooms

    async def delete_rooms(self, prop: Property) -> int:
        """Delete every room of *prop*; their photos are deleted with them."""
        authorize(Action.DELETE, self.caller_id, prop.user_id, prop.status)
        result = await self.session.execute(
            select(PropertyRoom)
            .where(PropertyRoom.property_id == prop.id)
            .options(selectinload(PropertyRoom.photos))
        )
        rooms = list(result.scalars().all())
        for room in rooms:
            await self.session.delete(room)
        await self.session.flush()
        return len(rooms)

    async def insert_room_photos(self, prop: Property, room: PropertyRoom, rows: Sequence[dict]) -> list[RoomPhoto]:
        authorize(Action.INSERT, self.caller_id, prop.user_id, prop.status)
        photos = [RoomPhoto(room_id=room.id, **row) for row in rows]
        self.session.add_all(photos)
        await self.session.flush()
        return photos

    async def insert_property_photos(self, prop: Property, rows: Sequence[dict]) -> list[PropertyPhoto]:
        authorize(Action.INSERT, self.caller_id, prop.user_id, prop.status)
        photos = [PropertyPhoto(property_id=prop.id, **row) for row in rows]
        self.session.add_all(photos)
        await self.session.flush()
        return photos

    async def delete_property_photos(self, prop: Property) -> int:
        authorize(Action.DELETE, self.caller_id, prop.user_id, prop.status)
        result = await self.session.execute(select(PropertyPhoto).where(PropertyPhoto.property_id == prop.id))
        photos = list(result.scalars().all())
        for photo in photos:
            await self.session.delete(photo)
        await self.session.flush()
        return len(photos)
