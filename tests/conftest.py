"""Shared test configuration and fixtures.

Every test gets its own in-memory SQLite database (aiosqlite), created from
the model metadata and thrown away afterwards, so tests never see each
other's rows. Cloudinary is replaced by an ``httpx.MockTransport`` that
answers like the real upload API.
"""

import os

# Settings are read at import time, so the environment must be in place first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-staylist-tests-only"
os.environ["CLOUDINARY_CLOUD_NAME"] = "test-cloud"
os.environ["CLOUDINARY_UPLOAD_PRESET"] = "unsigned-test"

import re  # noqa: E402
import uuid  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from staylist.auth.jwt import create_token_pair  # noqa: E402
from staylist.auth.passwords import hash_password  # noqa: E402
from staylist.database import Base, get_db  # noqa: E402
from staylist.listing.drafts import DraftStore, get_draft_store  # noqa: E402
from staylist.main import app  # noqa: E402
from staylist.media.cloudinary import CloudinaryUploader, get_media_uploader  # noqa: E402
from staylist.models.user import User  # noqa: E402

CLOUD_URL = "https://res.cloudinary.com/test-cloud/image/upload"

# ---------------------------------------------------------------------------
# Database: one in-memory SQLite database per test
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session on the per-test database."""
    session = AsyncSession(bind=test_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


# ---------------------------------------------------------------------------
# Cloudinary: mock transport answering like the unsigned upload endpoint
# ---------------------------------------------------------------------------


@pytest.fixture
def cloudinary_requests() -> list[httpx.Request]:
    """Every request the mock Cloudinary received, in arrival order."""
    return []


@pytest_asyncio.fixture
async def media_uploader(cloudinary_requests: list[httpx.Request]) -> AsyncGenerator[CloudinaryUploader, None]:
    """Uploader whose URLs are ``CLOUD_URL/<uploaded filename>``."""

    def handler(request: httpx.Request) -> httpx.Response:
        cloudinary_requests.append(request)
        match = re.search(rb'filename="([^"]+)"', request.content)
        filename = match.group(1).decode() if match else "upload"
        public_id = filename.rsplit(".", 1)[0]
        return httpx.Response(
            200,
            json={
                "public_id": public_id,
                "secure_url": f"{CLOUD_URL}/{filename}",
                "url": f"http://res.cloudinary.com/test-cloud/image/upload/{filename}",
            },
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        yield CloudinaryUploader(http, cloud_name="test-cloud", upload_preset="unsigned-test")


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


@pytest.fixture
def draft_store() -> DraftStore:
    return DraftStore()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    media_uploader: CloudinaryUploader,
    draft_store: DraftStore,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB, mock Cloudinary and a fresh draft store."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    async def override_get_media_uploader() -> AsyncGenerator[CloudinaryUploader, None]:
        yield media_uploader

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_media_uploader] = override_get_media_uploader
    app.dependency_overrides[get_draft_store] = lambda: draft_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: owners and their tokens
# ---------------------------------------------------------------------------


async def _make_user(db_session: AsyncSession, prefix: str, name: str) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        email=f"{prefix}-{unique}@test.com",
        hashed_password=hash_password("testpass123"),
        name=name,
        phone_number="+94 77 000 0000",
        is_active=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers(user: User) -> dict[str, str]:
    tokens = create_token_pair(user.id)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create and return an owner directly in the DB."""
    return await _make_user(db_session, "owner", "Test Owner")


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    return _headers(test_user)


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second owner, for checking that rows stay private."""
    return await _make_user(db_session, "other", "Other Owner")


@pytest_asyncio.fixture
async def other_auth_headers(other_user: User) -> dict[str, str]:
    return _headers(other_user)


# ---------------------------------------------------------------------------
# Convenience fixtures: listing payloads
# ---------------------------------------------------------------------------


def listing_payload(**overrides) -> dict:
    """JSON body of a complete listing, as the wizard would submit it."""
    payload = {
        "property_type": "Hotel",
        "name": "Seaside Inn",
        "description": "Steps from the fort.",
        "street_address": "12 Lighthouse Street",
        "city": "Galle",
        "state": "Southern Province",
        "amenities": {"Front Desk & Guest Services": ["24-hour front desk"]},
        "rooms": [
            {
                "room_type": "Deluxe Double",
                "bed_type": "Double",
                "max_guests": 2,
                "units_available": 3,
                "facilities": ["Free WiFi", "Air conditioning"],
                "price_lkr": "15000",
                "photos": [f"{CLOUD_URL}/room-a.jpg", f"{CLOUD_URL}/room-b.jpg"],
            }
        ],
        "checkin_time": "14:00",
        "checkout_time": "11:00",
        "cancellation_policy": "Free",
        "photos": [f"{CLOUD_URL}/front.jpg"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_listing():
    """Builder for listing bodies; keyword arguments replace top-level fields."""
    return listing_payload


@pytest_asyncio.fixture
async def test_property(client: AsyncClient, auth_headers: dict) -> dict:
    """Create and return a published listing via the API."""
    response = await client.post("/api/v1/properties", json=listing_payload(), headers=auth_headers)
    assert response.status_code == 201, f"Failed to create test property: {response.text}"
    return response.json()
