"""In-progress listing aggregate held across the wizard steps.

``ListingForm`` is the only mutable state of a wizard run. It performs
in-memory updates only: no I/O, no persistence, and no validation beyond the
closed catalogs and the 1..9 occupancy choices. Forward-navigation rules live
in ``staylist.listing.steps``.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from staylist.listing.catalog import (
    BED_TYPES,
    MAX_PROPERTY_PHOTOS,
    MAX_ROOM_PHOTOS,
    OCCUPANCY_CHOICES,
    check_amenity,
    check_facility,
    parse_amenities,
    parse_facilities,
)
from staylist.listing.errors import CatalogError, DraftFieldError, DraftIndexError

if TYPE_CHECKING:
    from staylist.models.property import Property

SCALAR_FIELDS = frozenset(
    {
        "property_type",
        "name",
        "description",
        "street_address",
        "city",
        "state",
        "checkin_time",
        "checkout_time",
        "cancellation_policy",
    }
)
ROOM_FIELDS = frozenset(
    {"room_type", "bed_type", "max_guests", "units_available", "facilities", "price_lkr"}
)


@dataclass
class RoomDraft:
    """One room type as entered in the wizard. ``price_lkr`` stays raw until review."""

    room_type: str = ""
    bed_type: str = ""
    max_guests: int = 1
    units_available: int = 1
    facilities: set[str] = field(default_factory=set)
    price_lkr: Any = None
    photos: list[str] = field(default_factory=list)


@dataclass
class PropertyDraft:
    property_type: str = ""
    name: str = ""
    description: str = ""
    street_address: str = ""
    city: str = ""
    state: str = ""
    amenities: dict[str, set[str]] = field(default_factory=dict)
    rooms: list[RoomDraft] = field(default_factory=list)
    checkin_time: str = ""
    checkout_time: str = ""
    cancellation_policy: str = ""
    photos: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PhotoAddResult:
    """Outcome of adding photos to a bounded collection."""

    accepted: list[str]
    rejected: int
    remaining: int  # capacity before the add
    limit: int

    @property
    def message(self) -> str | None:
        if self.remaining <= 0:
            return f"You can upload up to {self.limit} photos."
        if self.rejected:
            return f"Only {self.remaining} more photo(s) can be uploaded (max {self.limit})."
        return None


def _occupancy(field_name: str, value: Any) -> int:
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int) or value not in OCCUPANCY_CHOICES:
        raise DraftFieldError(f"{field_name} must be one of {OCCUPANCY_CHOICES[0]}..{OCCUPANCY_CHOICES[-1]}")
    return value


def _bounded_add(photos: list[str], urls: Iterable[str], limit: int) -> PhotoAddResult:
    urls = list(urls)
    remaining = max(limit - len(photos), 0)
    accepted = urls[:remaining]
    photos.extend(accepted)
    return PhotoAddResult(
        accepted=accepted,
        rejected=len(urls) - len(accepted),
        remaining=remaining,
        limit=limit,
    )


class ListingForm:
    """Wizard state: the draft aggregate, the current step, and the edit target."""

    def __init__(
        self,
        draft: PropertyDraft | None = None,
        property_id: uuid.UUID | None = None,
        step: int = 1,
    ) -> None:
        self.draft = draft or PropertyDraft()
        self.property_id = property_id
        self.step = step

    @property
    def is_edit(self) -> bool:
        return self.property_id is not None

    @classmethod
    def from_property(cls, prop: Property) -> ListingForm:
        """Rehydrate an edit form from a persisted property with rooms and photos loaded."""
        rooms = [
            RoomDraft(
                room_type=room.room_type,
                bed_type=room.bed_type,
                max_guests=room.max_guests,
                units_available=room.units_available,
                facilities=parse_facilities(room.facilities),
                price_lkr=room.price_lkr,
                photos=[photo.photo_url for photo in room.photos],
            )
            for room in prop.rooms
        ]
        draft = PropertyDraft(
            property_type=prop.property_type,
            name=prop.name,
            description=prop.description or "",
            street_address=prop.street_address,
            city=prop.city,
            state=prop.state,
            amenities=parse_amenities(prop.amenities),
            rooms=rooms,
            checkin_time=prop.checkin_time.strftime("%H:%M") if prop.checkin_time else "",
            checkout_time=prop.checkout_time.strftime("%H:%M") if prop.checkout_time else "",
            cancellation_policy=prop.cancellation_policy or "",
            photos=[photo.photo_url for photo in prop.photos],
        )
        return cls(draft=draft, property_id=prop.id)

    # ------------------------------------------------------------------
    # Property fields
    # ------------------------------------------------------------------

    def set_field(self, key: str, value: Any) -> None:
        if key not in SCALAR_FIELDS:
            raise DraftFieldError(f"Unknown property field '{key}'")
        setattr(self.draft, key, value)

    def toggle_amenity(self, category: str, amenity: str, present: bool) -> None:
        """Add or remove one amenity. Removing never deletes the category key."""
        try:
            check_amenity(category, amenity)
        except CatalogError as exc:
            raise DraftFieldError(str(exc)) from exc

        if present:
            self.draft.amenities.setdefault(category, set()).add(amenity)
        elif category in self.draft.amenities:
            self.draft.amenities[category].discard(amenity)

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def _room(self, index: int) -> RoomDraft:
        if not 0 <= index < len(self.draft.rooms):
            raise DraftIndexError(f"Room {index} does not exist")
        return self.draft.rooms[index]

    def add_room(self) -> RoomDraft:
        room = RoomDraft()
        self.draft.rooms.append(room)
        return room

    def update_room(self, index: int, field_name: str, value: Any) -> None:
        room = self._room(index)
        if field_name not in ROOM_FIELDS:
            raise DraftFieldError(f"Unknown room field '{field_name}'")

        if field_name in ("max_guests", "units_available"):
            value = _occupancy(field_name, value)
        elif field_name == "room_type":
            if not isinstance(value, str):
                raise DraftFieldError("room_type must be text")
        elif field_name == "bed_type":
            if value not in BED_TYPES:
                raise DraftFieldError(f"bed_type must be one of {', '.join(BED_TYPES)}")
        elif field_name == "facilities":
            if not isinstance(value, (list, tuple, set)) or not all(isinstance(name, str) for name in value):
                raise DraftFieldError("facilities must be a list of facility names")
            try:
                for name in value:
                    check_facility(name)
            except CatalogError as exc:
                raise DraftFieldError(str(exc)) from exc
            value = set(value)

        setattr(room, field_name, value)

    def toggle_facility(self, index: int, facility: str, present: bool) -> None:
        room = self._room(index)
        try:
            check_facility(facility)
        except CatalogError as exc:
            raise DraftFieldError(str(exc)) from exc
        if present:
            room.facilities.add(facility)
        else:
            room.facilities.discard(facility)

    def remove_room(self, index: int) -> None:
        self._room(index)
        del self.draft.rooms[index]

    # ------------------------------------------------------------------
    # Photos
    # ------------------------------------------------------------------

    def photo_limit(self, room_index: int | None = None) -> int:
        if room_index is None:
            return MAX_PROPERTY_PHOTOS
        self._room(room_index)
        return MAX_ROOM_PHOTOS

    def photo_capacity(self, room_index: int | None = None) -> int:
        """How many more photos the property (or one room) can take."""
        if room_index is None:
            return max(MAX_PROPERTY_PHOTOS - len(self.draft.photos), 0)
        return max(MAX_ROOM_PHOTOS - len(self._room(room_index).photos), 0)

    def add_photos(self, urls: Iterable[str]) -> PhotoAddResult:
        return _bounded_add(self.draft.photos, urls, MAX_PROPERTY_PHOTOS)

    def remove_photo(self, index: int) -> None:
        if not 0 <= index < len(self.draft.photos):
            raise DraftIndexError(f"Photo {index} does not exist")
        del self.draft.photos[index]

    def add_room_photos(self, room_index: int, urls: Iterable[str]) -> PhotoAddResult:
        return _bounded_add(self._room(room_index).photos, urls, MAX_ROOM_PHOTOS)

    def remove_room_photo(self, room_index: int, index: int) -> None:
        photos = self._room(room_index).photos
        if not 0 <= index < len(photos):
            raise DraftIndexError(f"Photo {index} of room {room_index} does not exist")
        del photos[index]
