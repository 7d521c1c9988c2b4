"""Closed vocabularies for listings: property/bed types, policies, amenities, facilities.

Amenities and facilities are stored as JSON in the database. Reading them back
goes through ``parse_amenities`` / ``parse_facilities``, which reject anything
outside this catalog instead of coercing it.
"""

from collections.abc import Mapping

from staylist.listing.errors import CatalogError

PROPERTY_TYPES: tuple[str, ...] = ("Hotel", "Villa")
BED_TYPES: tuple[str, ...] = ("Single", "Double", "Twin", "Queen", "King")
CANCELLATION_POLICIES: tuple[str, ...] = ("Free", "Non-refundable")

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
PROPERTY_STATUSES: tuple[str, ...] = (STATUS_DRAFT, STATUS_PUBLISHED)

# Selectable values for max_guests and units_available.
OCCUPANCY_CHOICES: tuple[int, ...] = tuple(range(1, 10))

MAX_PROPERTY_PHOTOS = 20
MAX_ROOM_PHOTOS = 15

AMENITY_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Front Desk & Guest Services": (
        "24-hour front desk",
        "Express check-in/check-out",
        "Concierge desk",
        "Baggage storage",
        "Tour desk",
        "Ticket service",
        "Room service",
    ),
    "Accessibility & Convenience": (
        "Elevators",
        "ATM on site",
        "Currency exchange",
        "Secured parking",
        "Valet parking",
        "Indoor/outdoor parking",
        "Accessible parking",
    ),
    "Comfort & Utilities": (
        "Air conditioning",
        "Heating",
        "Safe in room",
        "Non-smoking rooms",
        "Hairdresser/beautician",
        "Ironing service",
        "Dry cleaning",
        "Laundry services",
    ),
    "Dining & Refreshments": (
        "Restaurant",
        "Bar",
        "Breakfast (buffet or included)",
        "Snack bar",
        "Vending machines (drinks/snacks)",
    ),
    "Leisure & Wellness": (
        "Fitness center",
        "Sauna",
        "Jacuzzi/hot tub",
        "Outdoor/indoor pool",
        "Turkish/steam bath",
        "Solarium",
    ),
    "Family & Entertainment": (
        "Game room",
        "Kids' club",
        "Playground",
        "Indoor play area",
        "Evening entertainment",
        "Music/DVD library for children",
        "Board games/puzzles",
    ),
    "Sport & Outdoor Activities": (
        "Tennis court and equipment",
        "Golf course (within 2 miles)",
        "Water sports facilities",
        "Horseback riding",
        "Hiking",
        "Fishing",
        "Diving",
        "Canoeing",
        "Snorkeling",
        "Windsurfing",
        "Mini golf",
        "Table tennis",
        "Billiard (on site)",
    ),
    "Room & Miscellaneous Amenities": (
        "Shops (on site)",
        "Minimarket",
        "Shared kitchen",
        "Business center",
        "Meeting/banquet facilities",
        "Bicycle rentals",
        "Outdoor furniture",
        "Garden",
        "Terrace",
        "Sun terrace",
        "Shared lounge/TV area",
        "Private beach area or beachfront",
    ),
}

ROOM_FACILITIES: tuple[str, ...] = (
    "Flat-screen TV",
    "Free WiFi",
    "Air conditioning",
    "View",
    "Mountain view",
    "Minibar",
    "Ensuite bathroom",
    "Cable channels",
    "Free toiletries",
    "Shower",
    "Bathrobe",
    "Safety deposit box",
    "Bidet",
    "Toilet",
    "Towels",
    "Linen",
    "Socket near the bed",
    "Desk",
    "Seating area",
    "Slippers",
    "Telephone",
    "Ironing facilities",
    "Satellite channels",
    "Tea/coffee maker",
    "Iron",
    "Hairdryer",
    "Fan",
    "Wake-up service/alarm clock",
    "Carpeted floor",
    "Electric kettle",
    "Outdoor furniture",
    "Wake-up service",
    "Tumble dryer",
    "Wardrobe/closet",
    "Clothes rack",
    "Toilet paper",
    "Hand sanitizer",
)


def check_amenity(category: str, amenity: str) -> None:
    """Raise ``CatalogError`` unless *amenity* belongs to *category*."""
    if category not in AMENITY_CATEGORIES:
        raise CatalogError(f"Unknown amenity category '{category}'")
    if amenity not in AMENITY_CATEGORIES[category]:
        raise CatalogError(f"Unknown amenity '{amenity}' in category '{category}'")


def check_facility(facility: str) -> None:
    if facility not in ROOM_FACILITIES:
        raise CatalogError(f"Unknown room facility '{facility}'")


def parse_amenities(raw: object) -> dict[str, set[str]]:
    """Convert a stored amenities value into category -> set of amenity names.

    ``None`` reads as no amenities. Anything that is not a mapping of known
    categories to lists of known amenity names raises ``CatalogError``.
    """
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise CatalogError(f"Amenities must be a mapping, got {type(raw).__name__}")

    parsed: dict[str, set[str]] = {}
    for category, names in raw.items():
        if not isinstance(names, (list, tuple, set, frozenset)):
            raise CatalogError(f"Amenities for '{category}' must be a list, got {type(names).__name__}")
        for name in names:
            check_amenity(category, name)
        parsed[category] = set(names)
    return parsed


def parse_facilities(raw: object) -> set[str]:
    """Convert a stored facilities value into a set of facility names."""
    if raw is None:
        return set()
    if not isinstance(raw, (list, tuple, set, frozenset)):
        raise CatalogError(f"Facilities must be a list, got {type(raw).__name__}")
    for name in raw:
        check_facility(name)
    return set(raw)


def dump_amenities(amenities: Mapping[str, set[str]]) -> dict[str, list[str]]:
    """JSON shape for storage: names in catalog order, empty categories kept."""
    return {
        category: [name for name in AMENITY_CATEGORIES[category] if name in names]
        for category, names in amenities.items()
    }


def dump_facilities(facilities: set[str]) -> list[str]:
    return [name for name in ROOM_FACILITIES if name in facilities]
