"""Tests for auth dependencies: get_current_user and get_optional_user edge cases."""

import uuid
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from staylist.auth.jwt import create_access_token, create_token_pair
from staylist.auth.passwords import hash_password
from staylist.models.user import User

pytestmark = pytest.mark.asyncio


class TestGetCurrentUser:
    """Test get_current_user via the /me endpoint."""

    async def test_expired_token_rejected(self, client: AsyncClient, test_user: User):
        token = create_access_token(test_user.id, expires_delta=timedelta(seconds=-1))
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_invalid_token_format(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not.a.valid.jwt"})
        assert response.status_code == 401

    async def test_refresh_token_type_rejected(self, client: AsyncClient, test_user: User):
        tokens = create_token_pair(test_user.id)
        headers = {"Authorization": f"Bearer {tokens['refresh_token']}"}
        response = await client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 401

    async def test_nonexistent_user_id_rejected(self, client: AsyncClient):
        token = create_access_token(uuid.uuid4())
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_inactive_user_rejected(self, client: AsyncClient, db_session: AsyncSession):
        unique = uuid.uuid4().hex[:8]
        user = User(
            email=f"inactive-dep-{unique}@test.com",
            hashed_password=hash_password("testpass123"),
            name="Inactive Owner",
            is_active=False,
        )
        db_session.add(user)
        await db_session.commit()

        token = create_access_token(user.id)
        response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    async def test_missing_header_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/properties")
        assert response.status_code in (401, 403)


class TestGetOptionalUser:
    """Public browse works with no token and with a bad token."""

    async def test_no_token_is_anonymous(self, client: AsyncClient):
        response = await client.get("/api/v1/listings")
        assert response.status_code == 200

    async def test_bad_token_is_anonymous(self, client: AsyncClient):
        response = await client.get("/api/v1/listings", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 200
