"""Listing wizard API: drive a server-held draft step by step, then submit it."""

import dataclasses
import logging
import uuid

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from staylist.api.deps import get_current_user, get_draft_store, get_media_uploader, get_repository
from staylist.api.errors import to_http_exception
from staylist.listing.drafts import DraftSession, DraftStore
from staylist.listing.errors import ListingError, PhotoLimitError
from staylist.listing.form import ListingForm, PhotoAddResult
from staylist.listing.sequencer import FALLBACK_ERROR, ListingSubmitter
from staylist.listing.steps import advance, go_back
from staylist.media.cloudinary import CloudinaryUploader, MediaFile
from staylist.models.user import User
from staylist.persistence.policies import Action
from staylist.persistence.repository import ListingRepository
from staylist.schemas.auth import MessageResponse
from staylist.schemas.draft import (
    AmenityToggle,
    DraftFieldsUpdate,
    DraftResponse,
    FacilityToggle,
    PhotoAddResponse,
    RoomUpdate,
)
from staylist.schemas.property import PropertyDetailResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/drafts", tags=["drafts"])


def _session(store: DraftStore, user: User, draft_id: uuid.UUID) -> DraftSession:
    try:
        return store.get(user.id, draft_id)
    except ListingError as exc:
        raise to_http_exception(exc) from exc


async def _upload_into(
    session: DraftSession,
    files: list[UploadFile],
    uploader: CloudinaryUploader,
    room_index: int | None = None,
) -> PhotoAddResponse:
    """Upload the files that still fit, in selection order, and add their URLs to the draft."""
    form: ListingForm = session.form
    try:
        capacity = form.photo_capacity(room_index)
        limit = form.photo_limit(room_index)
        if capacity <= 0:
            raise PhotoLimitError(limit)

        selected = files[:capacity]
        media = [
            MediaFile(
                filename=upload.filename or "photo",
                content=await upload.read(),
                content_type=upload.content_type or "application/octet-stream",
            )
            for upload in selected
        ]
        uploaded = await uploader.upload_many(media)

        urls = [item.url for item in uploaded]
        if room_index is None:
            result = form.add_photos(urls)
        else:
            result = form.add_room_photos(room_index, urls)
    except ListingError as exc:
        raise to_http_exception(exc) from exc

    result = dataclasses.replace(result, rejected=len(files) - len(result.accepted), remaining=capacity)
    if result.rejected:
        logger.info("Draft %s: %d photo(s) over the limit of %d were skipped", session.id, result.rejected, limit)
    return _photo_response(session, result, [item.public_id for item in uploaded])


def _photo_response(session: DraftSession, result: PhotoAddResult, public_ids: list[str]) -> PhotoAddResponse:
    return PhotoAddResponse(
        accepted=result.accepted,
        public_ids=public_ids[: len(result.accepted)],
        rejected=result.rejected,
        limit=result.limit,
        message=result.message,
        draft=DraftResponse.from_session(session),
    )


# ---------------------------------------------------------------------------
# Draft lifecycle
# ---------------------------------------------------------------------------


@router.post("", response_model=DraftResponse, status_code=status.HTTP_201_CREATED, summary="Start a new listing")
async def create_draft(
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    return DraftResponse.from_session(store.create(current_user.id))


@router.post(
    "/from-property/{property_id}",
    response_model=DraftResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start editing an existing listing",
)
async def create_edit_draft(
    property_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    repository: ListingRepository = Depends(get_repository),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    """Prefill a draft from a property the caller owns; submitting it replaces that property."""
    try:
        prop = await repository.get_aggregate(property_id, Action.UPDATE)
        session = store.create_from_property(current_user.id, prop)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.get("", response_model=list[DraftResponse], summary="List the caller's open drafts")
async def list_drafts(
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> list[DraftResponse]:
    return [DraftResponse.from_session(session) for session in store.list_for(current_user.id)]


@router.get("/{draft_id}", response_model=DraftResponse)
async def get_draft(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    return DraftResponse.from_session(_session(store, current_user, draft_id))


@router.delete("/{draft_id}", response_model=MessageResponse, summary="Abandon a draft")
async def discard_draft(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> MessageResponse:
    try:
        store.discard(current_user.id, draft_id)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Draft discarded")


# ---------------------------------------------------------------------------
# Property fields and amenities
# ---------------------------------------------------------------------------


@router.patch("/{draft_id}", response_model=DraftResponse, summary="Set property fields")
async def update_fields(
    draft_id: uuid.UUID,
    body: DraftFieldsUpdate,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        for key, value in body.model_dump(exclude_unset=True).items():
            session.form.set_field(key, "" if value is None else value)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.put("/{draft_id}/amenities", response_model=DraftResponse, summary="Tick or untick an amenity")
async def toggle_amenity(
    draft_id: uuid.UUID,
    body: AmenityToggle,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.toggle_amenity(body.category, body.amenity, body.present)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------


@router.post("/{draft_id}/rooms", response_model=DraftResponse, status_code=status.HTTP_201_CREATED)
async def add_room(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    session.form.add_room()
    return DraftResponse.from_session(session)


@router.patch("/{draft_id}/rooms/{room_index}", response_model=DraftResponse)
async def update_room(
    draft_id: uuid.UUID,
    room_index: int,
    body: RoomUpdate,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.update_room(room_index, body.field, body.value)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.put("/{draft_id}/rooms/{room_index}/facilities", response_model=DraftResponse)
async def toggle_facility(
    draft_id: uuid.UUID,
    room_index: int,
    body: FacilityToggle,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.toggle_facility(room_index, body.facility, body.present)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.delete("/{draft_id}/rooms/{room_index}", response_model=DraftResponse)
async def remove_room(
    draft_id: uuid.UUID,
    room_index: int,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.remove_room(room_index)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


# ---------------------------------------------------------------------------
# Photos
# ---------------------------------------------------------------------------


@router.post("/{draft_id}/photos", response_model=PhotoAddResponse, summary="Upload property photos")
async def upload_photos(
    draft_id: uuid.UUID,
    files: list[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
    uploader: CloudinaryUploader = Depends(get_media_uploader),
) -> PhotoAddResponse:
    session = _session(store, current_user, draft_id)
    return await _upload_into(session, files, uploader)


@router.delete("/{draft_id}/photos/{photo_index}", response_model=DraftResponse)
async def remove_photo(
    draft_id: uuid.UUID,
    photo_index: int,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.remove_photo(photo_index)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.post(
    "/{draft_id}/rooms/{room_index}/photos",
    response_model=PhotoAddResponse,
    summary="Upload photos of one room",
)
async def upload_room_photos(
    draft_id: uuid.UUID,
    room_index: int,
    files: list[UploadFile] = File(...),
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
    uploader: CloudinaryUploader = Depends(get_media_uploader),
) -> PhotoAddResponse:
    session = _session(store, current_user, draft_id)
    return await _upload_into(session, files, uploader, room_index)


@router.delete("/{draft_id}/rooms/{room_index}/photos/{photo_index}", response_model=DraftResponse)
async def remove_room_photo(
    draft_id: uuid.UUID,
    room_index: int,
    photo_index: int,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    try:
        session.form.remove_room_photo(room_index, photo_index)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


# ---------------------------------------------------------------------------
# Navigation and submit
# ---------------------------------------------------------------------------


@router.post("/{draft_id}/next", response_model=DraftResponse, summary="Go to the next step")
async def next_step(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    """Advance one step; 422 with the blocking messages if the current step is incomplete."""
    session = _session(store, current_user, draft_id)
    try:
        advance(session.form)
    except ListingError as exc:
        raise to_http_exception(exc) from exc
    return DraftResponse.from_session(session)


@router.post("/{draft_id}/back", response_model=DraftResponse, summary="Go to the previous step")
async def previous_step(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    store: DraftStore = Depends(get_draft_store),
) -> DraftResponse:
    session = _session(store, current_user, draft_id)
    go_back(session.form)
    return DraftResponse.from_session(session)


@router.post("/{draft_id}/submit", response_model=PropertyDetailResponse, summary="Publish or save the listing")
async def submit_draft(
    draft_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    repository: ListingRepository = Depends(get_repository),
    store: DraftStore = Depends(get_draft_store),
) -> PropertyDetailResponse:
    """Create a new property, or replace the one being edited. The draft is discarded on success."""
    session = _session(store, current_user, draft_id)
    form = session.form
    submitter = ListingSubmitter(repository)
    try:
        if form.is_edit:
            prop = await submitter.replace(form.property_id, form.draft)
        else:
            prop = await submitter.create(current_user.id, form.draft)
    except ListingError as exc:
        raise to_http_exception(exc) from exc

    # The draft is dropped only once the rows are committed.
    try:
        await repository.session.commit()
    except SQLAlchemyError as exc:
        logger.warning("Commit of draft %s failed: %s", draft_id, exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=FALLBACK_ERROR) from exc

    store.discard(current_user.id, draft_id)
    return PropertyDetailResponse.model_validate(prop)
