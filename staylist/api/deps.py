"""Shared API dependencies: single import point for all routers.

Re-exports the database session, authentication, draft store and media
uploader dependencies, and builds the per-request listing repository::

    from staylist.api.deps import get_db, get_current_user, get_repository
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from staylist.auth.dependencies import get_current_user, get_optional_user
from staylist.database import get_db
from staylist.listing.drafts import get_draft_store
from staylist.media.cloudinary import get_media_uploader
from staylist.models.user import User
from staylist.persistence.repository import ListingRepository

__all__ = [
    "get_db",
    "get_current_user",
    "get_optional_user",
    "get_draft_store",
    "get_media_uploader",
    "get_repository",
    "get_public_repository",
]


async def get_repository(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ListingRepository:
    """Repository acting as the signed-in owner."""
    return ListingRepository(db, current_user.id)


async def get_public_repository(
    db: AsyncSession = Depends(get_db),
    user: User | None = Depends(get_optional_user),
) -> ListingRepository:
    """Repository acting as whoever is calling, anonymous included."""
    return ListingRepository(db, user.id if user is not None else None)
