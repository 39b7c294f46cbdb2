"""
Per-client rate limiting for route groups.

Two counter stores:
    - InMemoryRateLimitStore: sliding window per key, single process only
    - RedisRateLimitStore: fixed window via INCR/EXPIRE, shared by all workers

Route groups attach a ``RateLimit`` dependency; exceeding the limit raises
a RATE_LIMITED error (429 with Retry-After), which is never confused with an
authentication failure.
"""

import logging
import math
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Protocol, Tuple

from fastapi import Request

from ..core.errors import AppError
from ..core.redis_client import RedisClient

logger = logging.getLogger(__name__)


class RateLimitStore(Protocol):
    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        """Record one request. Returns (allowed, retry_after_seconds)."""
        ...


class InMemoryRateLimitStore:
    """Sliding window of request timestamps per key."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._clock = clock
        self._calls = 0

    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        now = self._clock()
        window_start = now - window_seconds
        timestamps = self._hits[key]

        # drop hits that fell out of the window
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= limit:
            retry_after = max(1, math.ceil(timestamps[0] + window_seconds - now))
            return False, retry_after

        timestamps.append(now)

        self._calls += 1
        if self._calls % 1000 == 0:
            self._cleanup(window_start)
        return True, 0

    def _cleanup(self, window_start: float) -> None:
        """Forget keys with no hits inside the current window."""
        stale = [k for k, ts in self._hits.items() if not ts or ts[-1] <= window_start]
        for k in stale:
            del self._hits[k]
        if stale:
            logger.debug(f"Cleaned up {len(stale)} idle rate limit keys")

    def reset(self) -> None:
        self._hits.clear()


class RedisRateLimitStore:
    """Fixed window counters kept in Redis."""

    def __init__(self, client: RedisClient, prefix: str = "ratelimit"):
        self.client = client
        self.prefix = prefix

    async def hit(self, key: str, limit: int, window_seconds: int) -> Tuple[bool, int]:
        count, ttl = await self.client.increment_rate_limit(
            f"{self.prefix}:{key}", expire=window_seconds
        )
        if count > limit:
            return False, max(1, ttl)
        return True, 0


class RateLimiter:
    """Checks hits against per-scope limits."""

    def __init__(self, store: RateLimitStore, limits: Dict[str, int], window_seconds: int, enabled: bool = True):
        self.store = store
        self.limits = limits
        self.window_seconds = window_seconds
        self.enabled = enabled

    @classmethod
    def from_settings(cls, settings, store: RateLimitStore) -> "RateLimiter":
        return cls(
            store=store,
            limits={
                "auth": settings.auth_rate_limit_requests,
                "notes": settings.note_rate_limit_requests,
            },
            window_seconds=settings.rate_limit_window_seconds,
            enabled=settings.rate_limit_enabled,
        )

    async def check(self, scope: str, client_id: str) -> None:
        if not self.enabled:
            return

        limit = self.limits[scope]
        allowed, retry_after = await self.store.hit(f"{scope}:{client_id}", limit, self.window_seconds)
        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={"scope": scope, "client_ip": client_id, "limit": limit},
            )
            raise AppError.rate_limited(
                f"Too many {scope} requests, please try again later.", retry_after
            )


def client_identifier(request: Request) -> str:
    """Client address used as the rate limit key."""
    return request.client.host if request.client else "unknown"


class RateLimit:
    """FastAPI dependency applying the limiter for one route group."""

    def __init__(self, scope: str):
        self.scope = scope

    async def __call__(self, request: Request) -> None:
        limiter: RateLimiter = request.app.state.rate_limiter
        await limiter.check(self.scope, client_identifier(request))
