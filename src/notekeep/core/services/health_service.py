"""Health service implementation."""

import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..redis_client import RedisClient
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


async def _timed_check(probe: Callable[[], Awaitable[Any]]) -> Dict[str, Any]:
    """Run one probe, reporting connectivity and latency instead of raising."""
    start = time.perf_counter()
    try:
        await probe()
    except Exception as e:
        return {"connected": False, "status": "unhealthy", "error": str(e), "response_time_ms": None}
    return {
        "connected": True,
        "status": "healthy",
        "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
    }


class HealthService(IHealthService):
    """Reports database (and Redis, when rate limits live there) connectivity."""

    def __init__(self, session: AsyncSession, version: str, redis_client: Optional[RedisClient] = None):
        self.session = session
        self.version = version
        self.redis_client = redis_client

    async def get_health_status(self) -> HealthCheckResponse:
        checks = {"database": await self.check_database_health()}
        if self.redis_client is not None:
            checks["redis"] = await self.check_redis_health()

        healthy = all(check["connected"] for check in checks.values())
        return HealthCheckResponse(
            status="healthy" if healthy else "unhealthy",
            timestamp=datetime.now(timezone.utc),
            version=self.version,
            checks=checks,
        )

    async def check_database_health(self) -> Dict[str, Any]:
        async def probe():
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()

        return await _timed_check(probe)

    async def check_redis_health(self) -> Dict[str, Any]:
        return await _timed_check(self.redis_client.ping)
