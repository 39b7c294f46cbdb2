"""
Authentication schemas.

These schemas define the API contracts for signup, signin and
JWT token refresh.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignUpRequest(BaseModel):
    """User signup request schema.

    Only the shape is checked here; password strength is the
    password policy's job so every rule failure is reported together.
    """

    email: EmailStr = Field(description="Email address, used to sign in")
    password: str = Field(max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@mail.com",
                "password": "Str0ng!Pass",
            }
        }
    )


class SignInRequest(BaseModel):
    """User signin request schema."""

    email: EmailStr = Field(description="Email address")
    password: str = Field(min_length=1, max_length=128, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane@mail.com",
                "password": "Str0ng!Pass",
            }
        }
    )


class UserResponse(BaseModel):
    """Public user fields. The password hash never appears here."""

    id: uuid.UUID = Field(description="User unique identifier")
    email: str = Field(description="Email address")
    username: str = Field(description="Generated username")
    created_at: datetime = Field(description="Account creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "jane@mail.com",
                "username": "jane4821",
                "created_at": "2025-09-13T10:30:00Z",
                "updated_at": "2025-09-13T10:30:00Z",
            }
        },
    )


class SignInResponse(BaseModel):
    """Signin result: the user plus both tokens (also set as cookies)."""

    user: UserResponse = Field(description="User information")
    access_token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Access token lifetime in seconds")


class RefreshTokenRequest(BaseModel):
    """Refresh token in the body, for clients that do not keep cookies."""

    refresh_token: Optional[str] = Field(default=None, description="JWT refresh token")


class AccessTokenResponse(BaseModel):
    """New access token minted from a refresh token."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Access token lifetime in seconds")
