"""Tests for optional Redis client construction and the startup ping."""

from unittest.mock import AsyncMock

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from opinion_bot.store.client import build_redis_client, ping_store


def test_build_without_url_returns_none():
    assert build_redis_client("") is None


def test_build_with_url_returns_client():
    client = build_redis_client("redis://localhost:6379/0")
    assert isinstance(client, Redis)


def test_build_with_invalid_url_returns_none():
    assert build_redis_client("not-a-redis-url") is None


async def test_ping_absent_store():
    assert await ping_store(None) is False


async def test_ping_reachable_store(fake_redis):
    assert await ping_store(fake_redis) is True


async def test_ping_unreachable_store_does_not_raise():
    redis = AsyncMock()
    redis.ping.side_effect = RedisConnectionError("refused")
    assert await ping_store(redis) is False
