"""Redis client for shared rate limit counters."""

import logging
from typing import Optional, Tuple

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class RedisClient:
    """Thin async Redis wrapper. Built once per app, never a module global."""

    def __init__(self, url: str, max_connections: int = 10):
        self.url = url
        self.max_connections = max_connections
        self.redis: Optional[redis.Redis] = None

    @classmethod
    def from_settings(cls, settings) -> "RedisClient":
        return cls(settings.redis_url, settings.redis_max_connections)

    async def connect(self) -> bool:
        """Connect to Redis.

        An unreachable server is logged and leaves the client disconnected,
        so rate limiting lets requests through until a restart.
        """
        client = redis.from_url(
            self.url,
            max_connections=self.max_connections,
            decode_responses=True,
        )
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await client.aclose()
            self.redis = None
            return False
        self.redis = client
        logger.info("Connected to Redis successfully")
        return True

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def ping(self) -> bool:
        if not self.redis:
            raise ConnectionError("Redis is not connected")
        return await self.redis.ping()

    async def increment_rate_limit(self, key: str, expire: int = 60) -> Tuple[int, int]:
        """Increment a fixed-window counter.

        Returns (count, seconds left in the window). The expiry is only set
        when the key is new so the window does not slide on every hit.
        Returns (0, 0) when Redis is unavailable, which lets the request through.
        """
        if not self.redis:
            return 0, 0
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.ttl(key)
                count, ttl = await pipe.execute()
            if ttl < 0:
                await self.redis.expire(key, expire)
                ttl = expire
            return int(count), int(ttl)
        except Exception as e:
            logger.error(f"Rate limit error for key {key}: {e}")
            return 0, 0

    async def reset_rate_limit(self, key: str) -> None:
        if self.redis:
            await self.redis.delete(key)
