"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import (
    AccessTokenResponse,
    RefreshTokenRequest,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    UserResponse,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse, PaginationResponse
from .notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate

__all__ = [
    # Auth schemas
    "SignUpRequest",
    "SignInRequest",
    "SignInResponse",
    "UserResponse",
    "RefreshTokenRequest",
    "AccessTokenResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteListResponse",
    # Common schemas
    "PaginationResponse",
    "ErrorResponse",
    "MessageResponse",
    "HealthCheckResponse",
]
