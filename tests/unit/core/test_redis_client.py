"""Unit tests for the Redis client wrapper (no server needed)."""

import pytest

from helpers import make_settings
from notekeep.core.redis_client import RedisClient


class FakePipeline:
    def __init__(self, redis):
        self.redis = redis
        self.ops = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def incr(self, key):
        self.ops.append(("incr", key))

    def ttl(self, key):
        self.ops.append(("ttl", key))

    async def execute(self):
        results = []
        for op, key in self.ops:
            if op == "incr":
                self.redis.values[key] = self.redis.values.get(key, 0) + 1
                results.append(self.redis.values[key])
            else:
                results.append(self.redis.ttls.get(key, -1))
        return results


class FakeRedis:
    def __init__(self):
        self.values = {}
        self.ttls = {}

    def pipeline(self, transaction=True):
        return FakePipeline(self)

    async def expire(self, key, seconds):
        self.ttls[key] = seconds

    async def delete(self, key):
        self.values.pop(key, None)
        self.ttls.pop(key, None)


@pytest.fixture
def client():
    c = RedisClient("redis://localhost:6379/15")
    c.redis = FakeRedis()
    return c


@pytest.mark.asyncio
async def test_increment_sets_expiry_once(client):
    assert await client.increment_rate_limit("k", expire=900) == (1, 900)

    client.redis.ttls["k"] = 500
    assert await client.increment_rate_limit("k", expire=900) == (2, 500)


@pytest.mark.asyncio
async def test_reset(client):
    await client.increment_rate_limit("k", expire=900)
    await client.reset_rate_limit("k")

    assert await client.increment_rate_limit("k", expire=900) == (1, 900)


@pytest.mark.asyncio
async def test_not_connected_lets_requests_through():
    client = RedisClient("redis://localhost:6379/15")

    assert await client.increment_rate_limit("k") == (0, 0)
    with pytest.raises(ConnectionError):
        await client.ping()


def test_from_settings():
    client = RedisClient.from_settings(make_settings(redis_url="redis://cache:6379/2", redis_max_connections=3))

    assert client.url == "redis://cache:6379/2"
    assert client.max_connections == 3


class UnreachableRedis:
    def __init__(self):
        self.closed = False

    async def ping(self):
        raise ConnectionError("Error 111 connecting to localhost:6379")

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio
async def test_connect_failure_leaves_client_disconnected(monkeypatch):
    unreachable = UnreachableRedis()
    monkeypatch.setattr("notekeep.core.redis_client.redis.from_url", lambda *a, **kw: unreachable)
    client = RedisClient("redis://localhost:6379/15")

    assert await client.connect() is False

    assert client.redis is None
    assert unreachable.closed is True
    assert await client.increment_rate_limit("k") == (0, 0)


@pytest.mark.asyncio
async def test_connect_success_keeps_client(monkeypatch):
    fake = FakeRedis()

    async def ping():
        return True

    fake.ping = ping
    monkeypatch.setattr("notekeep.core.redis_client.redis.from_url", lambda *a, **kw: fake)
    client = RedisClient("redis://localhost:6379/15")

    assert await client.connect() is True
    assert client.redis is fake
