"""Tests for the per-owner in-memory draft store."""

import uuid
from datetime import timedelta
from types import SimpleNamespace

import pytest

from staylist.listing.drafts import DraftStore
from staylist.listing.errors import DraftNotFoundError


@pytest.fixture
def store() -> DraftStore:
    return DraftStore()


def test_create_and_get(store: DraftStore):
    owner = uuid.uuid4()
    session = store.create(owner)
    assert store.get(owner, session.id) is session
    assert not session.form.is_edit


def test_drafts_are_private_to_their_owner(store: DraftStore):
    session = store.create(uuid.uuid4())
    with pytest.raises(DraftNotFoundError):
        store.get(uuid.uuid4(), session.id)


def test_discard(store: DraftStore):
    owner = uuid.uuid4()
    session = store.create(owner)
    store.discard(owner, session.id)
    with pytest.raises(DraftNotFoundError):
        store.get(owner, session.id)
    with pytest.raises(DraftNotFoundError):
        store.discard(owner, session.id)


def test_list_for_owner_in_creation_order(store: DraftStore):
    owner = uuid.uuid4()
    first = store.create(owner)
    second = store.create(owner)
    store.create(uuid.uuid4())
    assert [s.id for s in store.list_for(owner)] == [first.id, second.id]


def test_create_from_property_is_edit_mode(store: DraftStore):
    owner = uuid.uuid4()
    prop = SimpleNamespace(
        id=uuid.uuid4(),
        property_type="Hotel",
        name="Seaside Inn",
        description="",
        street_address="12 Lighthouse Street",
        city="Galle",
        state="Southern",
        amenities={},
        checkin_time=None,
        checkout_time=None,
        cancellation_policy="Free",
        photos=[],
        rooms=[],
    )
    session = store.create_from_property(owner, prop)
    assert session.form.property_id == prop.id
    assert session.form.draft.cancellation_policy == "Free"


def test_oldest_draft_is_evicted_beyond_the_cap():
    store = DraftStore(max_per_owner=3)
    owner = uuid.uuid4()
    sessions = [store.create(owner) for _ in range(5)]
    other = store.create(uuid.uuid4())

    assert [s.id for s in store.list_for(owner)] == [s.id for s in sessions[2:]]
    with pytest.raises(DraftNotFoundError):
        store.get(owner, sessions[0].id)
    assert store.get(other.owner_id, other.id) is other


def test_expired_draft_is_dropped():
    store = DraftStore(ttl=timedelta(minutes=30))
    owner = uuid.uuid4()
    stale = store.create(owner)
    fresh = store.create(owner)
    stale.created_at -= timedelta(minutes=31)

    with pytest.raises(DraftNotFoundError):
        store.get(owner, stale.id)
    assert [s.id for s in store.list_for(owner)] == [fresh.id]


def test_purge_expired_counts_across_owners():
    store = DraftStore(ttl=timedelta(minutes=30))
    aged = [store.create(uuid.uuid4()) for _ in range(2)]
    kept = store.create(uuid.uuid4())
    for session in aged:
        session.created_at -= timedelta(hours=1)

    assert store.purge_expired() == 2
    assert store.list_for(kept.owner_id) == [kept]
    assert store.list_for(aged[0].owner_id) == []
