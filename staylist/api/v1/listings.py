"""Public browse API: published listings, readable without signing in."""

import uuid

from fastapi import APIRouter, Depends, Query

from staylist.api.deps import get_public_repository
from staylist.api.errors import to_http_exception
from staylist.config import settings
from staylist.listing.catalog import (
    AMENITY_CATEGORIES,
    BED_TYPES,
    CANCELLATION_POLICIES,
    MAX_PROPERTY_PHOTOS,
    MAX_ROOM_PHOTOS,
    OCCUPANCY_CHOICES,
    PROPERTY_TYPES,
    ROOM_FACILITIES,
)
from staylist.listing.errors import ListingError
from staylist.persistence.repository import ListingRepository
from staylist.schemas.property import PropertyDetailResponse, PropertyResponse, PublicListingResponse

router = APIRouter(prefix="/api/v1/listings", tags=["listings"])


@router.get(
    "",
    response_model=PublicListingResponse,
    summary="Browse published listings",
)
async def list_published(
    city: str | None = Query(None),
    property_type: str | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.public_listing_page_size, ge=1, le=100),
    repository: ListingRepository = Depends(get_public_repository),
) -> PublicListingResponse:
    """Return published properties with their photos, newest first."""
    items = await repository.list_published(city=city, property_type=property_type, skip=skip, limit=limit)
    return PublicListingResponse(items=[PropertyResponse.model_validate(p) for p in items])


@router.get("/catalog", summary="Choices offered by the listing wizard")
async def get_catalog() -> dict:
    return {
        "property_types": list(PROPERTY_TYPES),
        "bed_types": list(BED_TYPES),
        "cancellation_policies": list(CANCELLATION_POLICIES),
        "occupancy_choices": list(OCCUPANCY_CHOICES),
        "amenities": {category: list(names) for category, names in AMENITY_CATEGORIES.items()},
        "room_facilities": list(ROOM_FACILITIES),
        "max_property_photos": MAX_PROPERTY_PHOTOS,
        "max_room_photos": MAX_ROOM_PHOTOS,
    }


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="View a published listing",
)
async def get_listing(
    property_id: uuid.UUID,
    repository: ListingRepository = Depends(get_public_repository),
) -> PropertyDetailResponse:
    """Published listings are public; an owner may also view their own drafts."""
    try:
        prop = await repository.get_aggregate(property_id)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return PropertyDetailResponse.model_validate(prop)
