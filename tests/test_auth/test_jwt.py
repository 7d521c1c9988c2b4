"""Unit tests for JWT token creation, decoding, and validation."""

import uuid
from datetime import timedelta

import pytest
from jose import JWTError

from staylist.auth.jwt import (
    ACCESS,
    REFRESH,
    create_access_token,
    create_refresh_token,
    create_token_pair,
    decode_token,
    user_id_from_token,
)

USER_ID = uuid.UUID("6f1c1c0e-3d43-4d8e-9a59-0f4b8f1b2a11")


class TestCreateAccessToken:
    """Test access token creation."""

    def test_contains_type_access(self):
        payload = decode_token(create_access_token(USER_ID))
        assert payload["type"] == "access"

    def test_sub_is_user_id_string(self):
        payload = decode_token(create_access_token(USER_ID))
        assert payload["sub"] == str(USER_ID)

    def test_contains_iat_and_exp(self):
        payload = decode_token(create_access_token(USER_ID))
        assert "iat" in payload
        assert payload["exp"] > payload["iat"]

    def test_custom_expiry_delta(self):
        payload = decode_token(create_access_token(USER_ID, expires_delta=timedelta(hours=1)))
        assert payload["exp"] - payload["iat"] == 3600


class TestCreateRefreshToken:
    def test_contains_type_refresh(self):
        payload = decode_token(create_refresh_token(USER_ID))
        assert payload["type"] == "refresh"
        assert payload["sub"] == str(USER_ID)


class TestDecodeToken:
    """Test token decoding and validation."""

    def test_decode_expired_token_raises(self):
        token = create_access_token(USER_ID, expires_delta=timedelta(seconds=-1))
        with pytest.raises(JWTError):
            decode_token(token)

    def test_decode_invalid_token_raises(self):
        with pytest.raises(JWTError):
            decode_token("not.a.valid.token")

    def test_decode_empty_string_raises(self):
        with pytest.raises(JWTError):
            decode_token("")


class TestUserIdFromToken:
    def test_access_token_yields_uuid(self):
        assert user_id_from_token(create_access_token(USER_ID), ACCESS) == USER_ID

    def test_refresh_token_yields_uuid(self):
        assert user_id_from_token(create_refresh_token(USER_ID), REFRESH) == USER_ID

    def test_refresh_token_is_not_an_access_token(self):
        with pytest.raises(JWTError):
            user_id_from_token(create_refresh_token(USER_ID), ACCESS)

    def test_access_token_is_not_a_refresh_token(self):
        with pytest.raises(JWTError):
            user_id_from_token(create_access_token(USER_ID), REFRESH)

    def test_non_uuid_subject_rejected(self):
        with pytest.raises(JWTError):
            user_id_from_token(create_access_token("not-a-uuid"), ACCESS)


class TestCreateTokenPair:
    """Test token pair creation."""

    def test_returns_both_tokens(self):
        pair = create_token_pair(USER_ID)
        assert pair["token_type"] == "bearer"
        assert decode_token(pair["access_token"])["type"] == "access"
        assert decode_token(pair["refresh_token"])["type"] == "refresh"

    def test_accepts_string_id(self):
        pair = create_token_pair(str(USER_ID))
        assert user_id_from_token(pair["access_token"], ACCESS) == USER_ID
