"""Tests for the Redis cache layer, run against an in-process client."""

import json
from datetime import datetime, timedelta, timezone

import pytest
import redis

from shortener.store.cache import RedisCache
from shortener.store.models import Link


class FakeRedis:
    """Minimal async stand-in for redis.asyncio.Redis."""

    def __init__(self, fail=False):
        self.fail = fail
        self.data = {}
        self.setex_calls = []
        self.closed = False

    async def get(self, key):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return self.data.get(key)

    async def setex(self, key, ttl, value):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        self.setex_calls.append((key, ttl, value))
        self.data[key] = value

    async def ping(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return True

    async def aclose(self):
        self.closed = True


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_link(expires_in=timedelta(hours=24)):
    return Link(
        id=1,
        code="aZ3kP9qLm2X",
        target="https://example.com/cached",
        created_at=NOW - timedelta(hours=24) + expires_in,
        expires_at=NOW + expires_in,
    )


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis, logger):
    cache = RedisCache(redis_url="redis://fake", ttl_seconds=3600, logger=logger)
    cache.client = fake_redis
    return cache


@pytest.mark.asyncio
class TestSetLink:
    """Test writing link records."""

    async def test_ttl_is_capped_at_cache_ttl(self, cache, fake_redis):
        link = make_link()

        assert await cache.set_link(link, NOW)

        key, ttl, value = fake_redis.setex_calls[0]
        assert key == "link:shortener:aZ3kP9qLm2X"
        assert ttl == 3600
        assert json.loads(value) == link.to_dict()

    async def test_ttl_is_capped_at_remaining_lifetime(self, cache, fake_redis):
        """A link close to expiry is not served from cache past its expiry."""
        link = make_link(expires_in=timedelta(seconds=600))

        assert await cache.set_link(link, NOW)

        _, ttl, _ = fake_redis.setex_calls[0]
        assert ttl == 600

    async def test_expired_link_is_not_written(self, cache, fake_redis):
        link = make_link(expires_in=timedelta(seconds=-1))

        assert not await cache.set_link(link, NOW)
        assert fake_redis.setex_calls == []

    async def test_link_at_expiry_is_not_written(self, cache, fake_redis):
        link = make_link(expires_in=timedelta(0))

        assert not await cache.set_link(link, NOW)
        assert fake_redis.setex_calls == []

    async def test_redis_error_is_a_failed_write(self, logger):
        cache = RedisCache(redis_url="redis://fake", ttl_seconds=3600, logger=logger)
        cache.client = FakeRedis(fail=True)

        assert not await cache.set_link(make_link(), NOW)


@pytest.mark.asyncio
class TestGetLink:
    """Test reading link records."""

    async def test_round_trip(self, cache):
        link = make_link()
        await cache.set_link(link, NOW)

        assert await cache.get_link(link.code) == link

    async def test_miss(self, cache):
        assert await cache.get_link("missing") is None

    async def test_redis_error_is_a_miss(self, logger):
        cache = RedisCache(redis_url="redis://fake", ttl_seconds=3600, logger=logger)
        cache.client = FakeRedis(fail=True)

        assert await cache.get_link("aZ3kP9qLm2X") is None

    @pytest.mark.parametrize("raw", ["not json", "[]", "{}", '{"id": "x"}', "null"])
    async def test_malformed_entry_is_a_miss(self, cache, fake_redis, raw):
        fake_redis.data[cache.get_cache_key("aZ3kP9qLm2X")] = raw

        assert await cache.get_link("aZ3kP9qLm2X") is None


@pytest.mark.asyncio
class TestLifecycle:
    """Test enablement, ping and close."""

    async def test_disabled_without_url(self, logger):
        cache = RedisCache(redis_url=None, logger=logger)

        assert not cache.enabled
        assert await cache.get_link("aZ3kP9qLm2X") is None
        assert not await cache.set_link(make_link(), NOW)
        assert not await cache.ping()

    async def test_ping(self, cache, logger):
        assert await cache.ping()

        failing = RedisCache(redis_url="redis://fake", logger=logger)
        failing.client = FakeRedis(fail=True)
        assert not await failing.ping()

    async def test_close(self, cache, fake_redis):
        await cache.close()

        assert fake_redis.closed
