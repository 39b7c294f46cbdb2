"""Security utilities."""

from .jwt import TokenKind, TokenPayload, TokenService
from .password import PasswordHasher, hash_password, needs_update, verify_password
from .password_policy import PasswordPolicy

__all__ = [
    "PasswordHasher",
    "PasswordPolicy",
    "hash_password",
    "verify_password",
    "needs_update",
    "TokenKind",
    "TokenPayload",
    "TokenService",
]
