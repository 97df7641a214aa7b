"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from opinion_bot.app import app


class FakeRedis:
    """In-memory stand-in for the redis.asyncio commands the store layer uses.

    Records TTLs instead of expiring keys; tests move time through the
    components' injectable clocks.
    """

    def __init__(self) -> None:
        self.strings: dict[str, str] = {}
        self.zsets: dict[str, dict[str, float]] = {}
        self.ttls: dict[str, int] = {}

    @staticmethod
    def _bound(raw) -> tuple[float, bool]:
        if isinstance(raw, (int, float)):
            return float(raw), False
        if raw.startswith("("):
            return float(raw[1:]), True
        return float(raw), False

    def _in_range(self, score: float, min_, max_) -> bool:
        lo, lo_excl = self._bound(min_)
        hi, hi_excl = self._bound(max_)
        above = score > lo if lo_excl else score >= lo
        below = score < hi if hi_excl else score <= hi
        return above and below

    async def ping(self) -> bool:
        return True

    async def exists(self, *keys: str) -> int:
        return sum(1 for k in keys if k in self.strings or k in self.zsets)

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        self.strings[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def zremrangebyscore(self, key: str, min_, max_) -> int:
        members = self.zsets.get(key, {})
        doomed = [m for m, s in members.items() if self._in_range(s, min_, max_)]
        for member in doomed:
            del members[member]
        return len(doomed)

    async def zcount(self, key: str, min_, max_) -> int:
        members = self.zsets.get(key, {})
        return sum(1 for s in members.values() if self._in_range(s, min_, max_))

    async def zadd(self, key: str, mapping: dict[str, float]) -> int:
        members = self.zsets.setdefault(key, {})
        added = sum(1 for m in mapping if m not in members)
        members.update(mapping)
        return added

    async def expire(self, key: str, seconds: int) -> bool:
        self.ttls[key] = seconds
        return True

    async def aclose(self) -> None:
        return None


class BrokenRedis:
    """Every command fails as if the Redis server were down."""

    def __getattr__(self, name: str):
        async def _fail(*args, **kwargs):
            raise RedisConnectionError("Connection refused")

        return _fail


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def broken_redis() -> BrokenRedis:
    return BrokenRedis()


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)
