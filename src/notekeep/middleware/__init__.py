"""Middleware and dependencies for authentication and other cross-cutting concerns."""

from .auth import AccessGuard, access_guard, get_current_user_id
from .errors import register_exception_handlers
from .rate_limit import (
    InMemoryRateLimitStore,
    RateLimit,
    RateLimiter,
    RedisRateLimitStore,
)

__all__ = [
    "AccessGuard",
    "access_guard",
    "get_current_user_id",
    "register_exception_handlers",
    "InMemoryRateLimitStore",
    "RedisRateLimitStore",
    "RateLimit",
    "RateLimiter",
]
