"""
Application error taxonomy.

All domain failures are raised as a single ``AppError`` tagged with an
``ErrorKind``. The kind decides the HTTP status and the ``error`` name that
clients see; the exception handlers in ``middleware.errors`` do the mapping.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Closed set of error kinds with their HTTP status."""

    VALIDATION = "ValidationError"
    WEAK_PASSWORD = "WeakPasswordError"
    AUTHENTICATION = "AuthenticationError"
    EXPIRED_TOKEN = "ExpiredToken"
    INVALID_TOKEN = "InvalidToken"
    FORBIDDEN = "Forbidden"
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFoundError"
    CONFLICT = "ConflictError"
    RATE_LIMITED = "RateLimited"
    GENERATION_EXHAUSTED = "GenerationExhaustedError"
    INTERNAL = "InternalError"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.WEAK_PASSWORD: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.EXPIRED_TOKEN: 401,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.GENERATION_EXHAUSTED: 500,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    """Domain error carrying its kind, a client-safe message and optional details."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details
        self.headers = headers

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.name}, message={self.message!r})"

    # constructors for the common kinds

    @classmethod
    def validation(cls, message: str, errors: Optional[list] = None) -> "AppError":
        return cls(ErrorKind.VALIDATION, message, {"errors": errors} if errors else None)

    @classmethod
    def weak_password(cls, errors: list[str]) -> "AppError":
        return cls(ErrorKind.WEAK_PASSWORD, "Password does not meet requirements", {"errors": errors})

    @classmethod
    def authentication(cls, message: str = "Invalid credentials") -> "AppError":
        return cls(ErrorKind.AUTHENTICATION, message)

    @classmethod
    def expired_token(cls, message: str = "Unauthorized: Token has expired") -> "AppError":
        return cls(ErrorKind.EXPIRED_TOKEN, message)

    @classmethod
    def invalid_token(cls, message: str = "Unauthorized: Invalid token") -> "AppError":
        return cls(ErrorKind.INVALID_TOKEN, message)

    @classmethod
    def forbidden(cls, message: str = "Access denied: No token provided") -> "AppError":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def authorization(cls, message: str = "Access denied") -> "AppError":
        return cls(ErrorKind.AUTHORIZATION, message)

    @classmethod
    def not_found(cls, message: str = "Resource not found") -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def conflict(cls, message: str = "Resource already exists") -> "AppError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def rate_limited(cls, message: str, retry_after: int) -> "AppError":
        return cls(
            ErrorKind.RATE_LIMITED,
            message,
            {"retry_after": retry_after},
            headers={"Retry-After": str(retry_after)},
        )

    @classmethod
    def generation_exhausted(cls, attempts: int) -> "AppError":
        return cls(
            ErrorKind.GENERATION_EXHAUSTED,
            f"Failed to generate unique username after {attempts} attempts",
        )

    @classmethod
    def internal(cls, message: str = "Internal server error") -> "AppError":
        return cls(ErrorKind.INTERNAL, message)
