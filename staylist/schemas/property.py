"""Pydantic v2 request/response schemas for property and listing endpoints."""

import uuid
from datetime import datetime, time
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from staylist.listing.catalog import MAX_PROPERTY_PHOTOS, MAX_ROOM_PHOTOS, parse_amenities, parse_facilities
from staylist.listing.form import PropertyDraft, RoomDraft

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RoomSubmission(BaseModel):
    """One room type of a full listing submitted in a single request."""

    room_type: str = Field("", max_length=255)
    bed_type: Literal["Single", "Double", "Twin", "Queen", "King"]
    max_guests: int = Field(1, ge=1, le=9)
    units_available: int = Field(1, ge=1, le=9)
    facilities: list[str] = Field(default_factory=list)
    price_lkr: Decimal | None = None
    photos: list[str] = Field(default_factory=list, max_length=MAX_ROOM_PHOTOS)

    @field_validator("facilities")
    @classmethod
    def _known_facilities(cls, value: list[str]) -> list[str]:
        parse_facilities(value)
        return value


class PropertySubmission(BaseModel):
    """A whole listing (property, rooms and photo URLs) for create or replace.

    Wizard gates still run on submit, so required fields are checked there
    and reported with the same messages the wizard uses.
    """

    property_type: str = ""
    name: str = Field("", max_length=255)
    description: str | None = None
    street_address: str = Field("", max_length=255)
    city: str = Field("", max_length=120)
    state: str = Field("", max_length=120)
    amenities: dict[str, list[str]] = Field(default_factory=dict)
    rooms: list[RoomSubmission] = Field(default_factory=list)
    checkin_time: time | None = None
    checkout_time: time | None = None
    cancellation_policy: Literal["Free", "Non-refundable"] | None = None
    photos: list[str] = Field(default_factory=list, max_length=MAX_PROPERTY_PHOTOS)

    @field_validator("amenities")
    @classmethod
    def _known_amenities(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        parse_amenities(value)
        return value

    def to_draft(self) -> PropertyDraft:
        return PropertyDraft(
            property_type=self.property_type,
            name=self.name,
            description=self.description or "",
            street_address=self.street_address,
            city=self.city,
            state=self.state,
            amenities=parse_amenities(self.amenities),
            rooms=[
                RoomDraft(
                    room_type=room.room_type,
                    bed_type=room.bed_type,
                    max_guests=room.max_guests,
                    units_available=room.units_available,
                    facilities=set(room.facilities),
                    price_lkr=room.price_lkr,
                    photos=list(room.photos),
                )
                for room in self.rooms
            ],
            checkin_time=self.checkin_time.strftime("%H:%M") if self.checkin_time else "",
            checkout_time=self.checkout_time.strftime("%H:%M") if self.checkout_time else "",
            cancellation_policy=self.cancellation_policy or "",
            photos=list(self.photos),
        )


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PhotoResponse(BaseModel):
    id: uuid.UUID
    photo_url: str
    caption: str | None = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class RoomResponse(BaseModel):
    id: uuid.UUID
    room_type: str
    bed_type: str
    max_guests: int
    units_available: int
    facilities: list[str]
    price_lkr: Decimal
    photos: list[PhotoResponse]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyResponse(BaseModel):
    """Property summary for dashboard and browse lists, with its photos."""

    id: uuid.UUID
    user_id: uuid.UUID
    property_type: str
    name: str
    description: str | None = None
    street_address: str
    city: str
    state: str
    status: str
    photos: list[PhotoResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PropertyDetailResponse(PropertyResponse):
    """Full listing: scalars, amenities, policies, rooms and photos."""

    amenities: dict[str, list[str]]
    checkin_time: time | None = None
    checkout_time: time | None = None
    cancellation_policy: str | None = None
    rooms: list[RoomResponse]


class PropertyListResponse(BaseModel):
    """Paginated list of properties."""

    items: list[PropertyResponse]
    total: int


class PublicListingResponse(BaseModel):
    items: list[PropertyResponse]
