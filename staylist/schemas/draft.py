"""Pydantic v2 schemas for the listing wizard's draft endpoints."""

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from staylist.listing.catalog import dump_amenities, dump_facilities
from staylist.listing.drafts import DraftSession
from staylist.listing.steps import step_errors

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class DraftFieldsUpdate(BaseModel):
    """Scalar property fields to overwrite. Only the fields sent are changed."""

    property_type: str | None = None
    name: str | None = None
    description: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    checkin_time: str | None = None
    checkout_time: str | None = None
    cancellation_policy: str | None = None


class AmenityToggle(BaseModel):
    category: str
    amenity: str
    present: bool


class RoomUpdate(BaseModel):
    """One room field and its new value, e.g. ``{"field": "max_guests", "value": 2}``."""

    field: str
    value: Any = None


class FacilityToggle(BaseModel):
    facility: str
    present: bool


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RoomDraftResponse(BaseModel):
    room_type: str
    bed_type: str
    max_guests: int
    units_available: int
    facilities: list[str]
    price_lkr: Any = None
    photos: list[str]


class PropertyDraftResponse(BaseModel):
    property_type: str
    name: str
    description: str
    street_address: str
    city: str
    state: str
    amenities: dict[str, list[str]]
    rooms: list[RoomDraftResponse]
    checkin_time: str
    checkout_time: str
    cancellation_policy: str
    photos: list[str]


class DraftResponse(BaseModel):
    """A wizard run: where it stands and what it holds so far."""

    id: uuid.UUID
    property_id: uuid.UUID | None = None
    step: int
    can_advance: bool
    errors: list[str] = Field(default_factory=list)
    draft: PropertyDraftResponse
    created_at: datetime

    @classmethod
    def from_session(cls, session: DraftSession) -> "DraftResponse":
        form = session.form
        draft = form.draft
        errors = step_errors(form.step, draft)
        return cls(
            id=session.id,
            property_id=form.property_id,
            step=form.step,
            can_advance=not errors,
            errors=errors,
            draft=PropertyDraftResponse(
                property_type=draft.property_type,
                name=draft.name,
                description=draft.description,
                street_address=draft.street_address,
                city=draft.city,
                state=draft.state,
                amenities=dump_amenities(draft.amenities),
                rooms=[
                    RoomDraftResponse(
                        room_type=room.room_type,
                        bed_type=room.bed_type,
                        max_guests=room.max_guests,
                        units_available=room.units_available,
                        facilities=dump_facilities(room.facilities),
                        price_lkr=room.price_lkr,
                        photos=list(room.photos),
                    )
                    for room in draft.rooms
                ],
                checkin_time=draft.checkin_time,
                checkout_time=draft.checkout_time,
                cancellation_policy=draft.cancellation_policy,
                photos=list(draft.photos),
            ),
            created_at=session.created_at,
        )


class PhotoAddResponse(BaseModel):
    """Upload outcome: the URLs stored in the draft and any overflow notice."""

    accepted: list[str]
    public_ids: list[str]
    rejected: int
    limit: int
    message: str | None = None
    draft: DraftResponse
