"""Translate listing workflow errors into HTTP responses."""

from fastapi import HTTPException, status

from staylist.listing.errors import (
    AccessDeniedError,
    DraftFieldError,
    DraftIndexError,
    DraftNotFoundError,
    ListingError,
    MediaUploadError,
    PhotoLimitError,
    PropertyNotFoundError,
    StepGateError,
)
from staylist.listing.sequencer import FALLBACK_ERROR


def to_http_exception(exc: ListingError) -> HTTPException:
    """Status code and detail for *exc*. Submission failures (and anything else)
    are a 400 carrying only the message; the failing step is logged, not returned.
    """
    if isinstance(exc, StepGateError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"step": int(exc.step), "errors": exc.messages},
        )
    if isinstance(exc, DraftFieldError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if isinstance(exc, (DraftNotFoundError, PropertyNotFoundError, DraftIndexError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, AccessDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, PhotoLimitError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, MediaUploadError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc) or FALLBACK_ERROR)
