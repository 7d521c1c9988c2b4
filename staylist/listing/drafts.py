"""Server-held wizard drafts, one ``ListingForm`` per wizard run.

Drafts live in process memory and are scoped to their owner: a draft id
created by one user is invisible to every other user. They are not persisted
and do not survive a restart. Each owner keeps at most
``settings.draft_max_per_owner`` drafts (the oldest is evicted first), and a
draft older than ``settings.draft_ttl_minutes`` is dropped.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from staylist.config import settings
from staylist.listing.errors import DraftNotFoundError
from staylist.listing.form import ListingForm
from staylist.models.property import Property

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DraftSession:
    id: uuid.UUID
    owner_id: uuid.UUID
    form: ListingForm
    created_at: datetime = field(default_factory=_utcnow)


class DraftStore:
    """In-memory drafts keyed by owner, then draft id (in creation order)."""

    def __init__(self, max_per_owner: int | None = None, ttl: timedelta | None = None) -> None:
        self.max_per_owner = max_per_owner if max_per_owner is not None else settings.draft_max_per_owner
        self.ttl = ttl if ttl is not None else timedelta(minutes=settings.draft_ttl_minutes)
        self._drafts: dict[uuid.UUID, dict[uuid.UUID, DraftSession]] = {}

    def _expired(self, session: DraftSession, now: datetime) -> bool:
        return now - session.created_at > self.ttl

    def _remove(self, owner_id: uuid.UUID, draft_id: uuid.UUID) -> None:
        drafts = self._drafts[owner_id]
        del drafts[draft_id]
        if not drafts:
            del self._drafts[owner_id]

    def purge_expired(self) -> int:
        """Drop every draft past its TTL; return how many were dropped."""
        now = _utcnow()
        stale = [
            (owner_id, draft_id)
            for owner_id, drafts in self._drafts.items()
            for draft_id, session in drafts.items()
            if self._expired(session, now)
        ]
        for owner_id, draft_id in stale:
            self._remove(owner_id, draft_id)
        if stale:
            logger.info("Dropped %d expired draft(s)", len(stale))
        return len(stale)

    def _put(self, owner_id: uuid.UUID, form: ListingForm) -> DraftSession:
        self.purge_expired()
        session = DraftSession(id=uuid.uuid4(), owner_id=owner_id, form=form)
        drafts = self._drafts.setdefault(owner_id, {})
        drafts[session.id] = session
        while len(drafts) > self.max_per_owner:
            oldest = next(iter(drafts))
            del drafts[oldest]
            logger.info("Evicted draft %s of owner %s (limit %d)", oldest, owner_id, self.max_per_owner)
        return session

    def create(self, owner_id: uuid.UUID) -> DraftSession:
        """Start a blank create-mode draft."""
        session = self._put(owner_id, ListingForm())
        logger.info("Started draft %s for owner %s", session.id, owner_id)
        return session

    def create_from_property(self, owner_id: uuid.UUID, prop: Property) -> DraftSession:
        """Start an edit-mode draft prefilled from *prop* (rooms and photos loaded)."""
        session = self._put(owner_id, ListingForm.from_property(prop))
        logger.info("Started edit draft %s of property %s for owner %s", session.id, prop.id, owner_id)
        return session

    def get(self, owner_id: uuid.UUID, draft_id: uuid.UUID) -> DraftSession:
        try:
            session = self._drafts[owner_id][draft_id]
        except KeyError:
            raise DraftNotFoundError(f"Draft {draft_id} not found") from None
        if self._expired(session, _utcnow()):
            self._remove(owner_id, draft_id)
            raise DraftNotFoundError(f"Draft {draft_id} has expired")
        return session

    def discard(self, owner_id: uuid.UUID, draft_id: uuid.UUID) -> None:
        self.get(owner_id, draft_id)
        self._remove(owner_id, draft_id)
        logger.info("Discarded draft %s", draft_id)

    def list_for(self, owner_id: uuid.UUID) -> list[DraftSession]:
        self.purge_expired()
        return sorted(self._drafts.get(owner_id, {}).values(), key=lambda s: s.created_at)


draft_store = DraftStore()


def get_draft_store() -> DraftStore:
    """Return the process-wide draft store for FastAPI dependency injection."""
    return draft_store
