"""Unit tests for HealthService."""

import pytest

from notekeep.core.services.health_service import HealthService


class FakeRedis:
    def __init__(self, up=True):
        self.up = up

    async def ping(self):
        if not self.up:
            raise ConnectionError("Redis is not connected")
        return True


@pytest.mark.asyncio
async def test_database_only(db_session):
    status = await HealthService(db_session, version="1.0.0").get_health_status()

    assert status.status == "healthy"
    assert status.version == "1.0.0"
    assert set(status.checks) == {"database"}
    assert status.checks["database"]["connected"] is True


@pytest.mark.asyncio
async def test_with_redis(db_session):
    status = await HealthService(db_session, "1.0.0", redis_client=FakeRedis()).get_health_status()

    assert status.status == "healthy"
    assert status.checks["redis"]["connected"] is True


@pytest.mark.asyncio
async def test_redis_down_is_unhealthy(db_session):
    status = await HealthService(db_session, "1.0.0", redis_client=FakeRedis(up=False)).get_health_status()

    assert status.status == "unhealthy"
    assert status.checks["redis"]["connected"] is False
    assert "not connected" in status.checks["redis"]["error"]
