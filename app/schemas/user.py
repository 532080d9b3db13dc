# app/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, Field, field_validator

from app.schemas.common import ApiModel

Role = Literal["admin", "partner"]

MIN_PASSWORD_LENGTH = 6


def _normalize_email(v: object) -> object:
    if isinstance(v, str):
        return v.strip().lower()
    return v


class UserRegister(ApiModel):
    """
    Payload for creating an account.

    Validation rules:
      - name cannot be empty or whitespace
      - email must be a valid EmailStr (stored lower-cased)
      - password must be at least 6 characters
      - role must be admin | partner
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    role: Role
    phone: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class UserLogin(ApiModel):
    """Payload for logging in."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        return _normalize_email(v)


class UserPublic(ApiModel):
    """Minimal public view returned after registration."""

    id: uuid.UUID
    name: str
    email: str
    role: Role


class UserSession(UserPublic):
    """Public view returned after login."""

    is_available: bool


class UserRead(UserSession):
    """Full account view (never includes the password hash)."""

    phone: str | None = None
    created_at: datetime
    updated_at: datetime


class RegisterResponse(ApiModel):
    message: str
    token: str
    user: UserPublic


class LoginResponse(ApiModel):
    message: str
    token: str
    user: UserSession


class AvailabilityUpdate(ApiModel):
    """
    Partner payload to toggle their own availability.
    """

    model_config = ConfigDict(extra="forbid")

    is_available: bool = Field(strict=True)


class AvailabilityResponse(ApiModel):
    message: str
    user: UserRead


class PartnerListResponse(ApiModel):
    partners: list[UserRead]
