"""Exceptions raised by the listing workflow.

Routers translate these into HTTP responses; nothing here knows about HTTP.
"""


class ListingError(Exception):
    """Base class for listing workflow errors."""


class CatalogError(ListingError, ValueError):
    """A value is outside the closed amenity/facility/enum catalog."""


class DraftFieldError(ListingError, ValueError):
    """A draft field name or value was rejected by the form."""


class DraftIndexError(ListingError, IndexError):
    """A room or photo index does not exist in the draft."""


class StepGateError(ListingError):
    """Forward navigation or submission was blocked by a step gate."""

    def __init__(self, step: int, messages: list[str]) -> None:
        self.step = step
        self.messages = messages
        super().__init__("; ".join(messages))


class PhotoLimitError(ListingError):
    """The photo collection is already full."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"You can upload up to {limit} photos.")


class DraftNotFoundError(ListingError):
    """No draft with this id belongs to the caller."""


class PropertyNotFoundError(ListingError):
    """The property row does not exist."""


class AccessDeniedError(ListingError):
    """The authorization policy rejected the request."""


class MediaUploadError(ListingError):
    """The media host rejected an upload or could not be reached."""


class MediaNotConfiguredError(MediaUploadError):
    """Cloudinary credentials are missing from the settings."""


class SubmissionError(ListingError):
    """A submission step failed; later steps were not attempted."""

    def __init__(self, step: str, completed_steps: list[str], message: str) -> None:
        self.step = step
        self.completed_steps = completed_steps
        super().__init__(message)
