"""Pydantic schemas for user registration, login and profile responses."""

from uuid import UUID

from pydantic import EmailStr, Field

from ivrflow.schemas.base import BaseSchema, NameField


class UserCreate(BaseSchema):
    """Schema for user registration.

    Attributes:
        name: Display name
        email: User email address (validated)
        password: Plain text password (hashed before storage)
    """

    name: str = NameField
    email: EmailStr = Field(..., max_length=255, description="User email address")
    password: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="User password",
    )


class UserLogin(BaseSchema):
    """Schema for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserResponse(BaseSchema):
    """Public user profile. Never carries the password hash."""

    id: UUID
    name: str
    email: str


class AccessTokenResponse(BaseSchema):
    """Bearer token issued on login."""

    access_token: str = Field(..., description="JWT to send as 'Authorization: Bearer'")
    token_type: str = Field(default="bearer")


__all__ = [
    "AccessTokenResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
]
