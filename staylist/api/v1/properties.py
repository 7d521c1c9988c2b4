"""Owner dashboard API: list, create, view, replace and delete own properties."""

import logging
import uuid

from fastapi import APIRouter, Depends, Query, status

from staylist.api.deps import get_repository
from staylist.api.errors import to_http_exception
from staylist.listing.errors import ListingError
from staylist.listing.sequencer import ListingSubmitter
from staylist.persistence.repository import ListingRepository
from staylist.schemas.auth import MessageResponse
from staylist.schemas.property import (
    PropertyDetailResponse,
    PropertyListResponse,
    PropertyResponse,
    PropertySubmission,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/properties", tags=["properties"])


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List properties owned by the current user",
)
async def list_properties(
    status_filter: str | None = Query(None, alias="status"),
    property_type: str | None = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    repository: ListingRepository = Depends(get_repository),
) -> PropertyListResponse:
    """Return the caller's properties, newest first."""
    try:
        items, total = await repository.list_owned(status_filter, property_type, skip, limit)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return PropertyListResponse(
        items=[PropertyResponse.model_validate(p) for p in items],
        total=total,
    )


@router.post(
    "",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a new listing",
)
async def create_property(
    body: PropertySubmission,
    repository: ListingRepository = Depends(get_repository),
) -> PropertyDetailResponse:
    """Publish a property with its rooms and photos in one request."""
    try:
        prop = await ListingSubmitter(repository).create(repository.caller_id, body.to_draft())
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return PropertyDetailResponse.model_validate(prop)


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Get a property with rooms and photos",
)
async def get_property(
    property_id: uuid.UUID,
    repository: ListingRepository = Depends(get_repository),
) -> PropertyDetailResponse:
    try:
        prop = await repository.get_aggregate(property_id)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return PropertyDetailResponse.model_validate(prop)


@router.put(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    summary="Replace a listing",
)
async def replace_property(
    property_id: uuid.UUID,
    body: PropertySubmission,
    repository: ListingRepository = Depends(get_repository),
) -> PropertyDetailResponse:
    """Overwrite a property; all rooms and photos are re-created from the body."""
    try:
        prop = await ListingSubmitter(repository).replace(property_id, body.to_draft())
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return PropertyDetailResponse.model_validate(prop)


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Delete a property",
)
async def delete_property(
    property_id: uuid.UUID,
    repository: ListingRepository = Depends(get_repository),
) -> MessageResponse:
    """Delete a property together with its rooms and photos."""
    try:
        await repository.delete_property(property_id)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Property deleted")
