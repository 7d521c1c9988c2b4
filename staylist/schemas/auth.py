"""Pydantic v2 schemas for owner sign-up, sign-in and the owner profile.

Every StayList account is a property owner. The profile carries what a
listing needs to show about its owner: a display name and a contact phone
number. Emails are compared and stored lowercased.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Owner sign-up. Name and phone number become the owner profile."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field("", max_length=50)

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("phone_number")
    @classmethod
    def _strip_phone(cls, value: str) -> str:
        return " ".join(value.split())


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class RefreshRequest(BaseModel):
    refresh_token: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TokenResponse(BaseModel):
    """Access/refresh JWT pair."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class OwnerResponse(BaseModel):
    """Owner profile as returned by sign-up, sign-in and ``/me``."""

    id: uuid.UUID
    email: str
    name: str
    phone_number: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    owner: OwnerResponse
    tokens: TokenResponse


class MessageResponse(BaseModel):
    """Plain confirmation, e.g. after a delete."""

    message: str
