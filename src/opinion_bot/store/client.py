"""Optional Redis client construction.

The store is a capability, not a requirement: with no REDIS_URL the factory
returns None and the idempotency cache and rate limiter fail open.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from redis.asyncio import Redis
from redis.exceptions import RedisError

from opinion_bot.errors import StoreUnavailable

logger = logging.getLogger(__name__)

# Errors that mean "store unreachable" for fail-open purposes
STORE_ERRORS = (RedisError, OSError)


def build_redis_client(redis_url: str) -> Redis | None:
    """Return an asyncio Redis client for ``redis_url``, or None when unset or invalid."""
    if not redis_url:
        logger.warning("REDIS_URL not configured; idempotency and rate limiting are disabled")
        return None
    try:
        return Redis.from_url(redis_url, decode_responses=True)
    except ValueError:
        logger.warning("Invalid REDIS_URL; idempotency and rate limiting are disabled")
        return None


@asynccontextmanager
async def store_operation(name: str) -> AsyncIterator[None]:
    """Translate Redis/socket errors raised inside the block into StoreUnavailable."""
    try:
        yield
    except STORE_ERRORS as exc:
        raise StoreUnavailable(f"{name}: {exc}") from exc


async def ping_store(redis: Redis | None) -> bool:
    """Check store connectivity at startup. A failure is logged, never raised."""
    if redis is None:
        return False
    try:
        async with store_operation("ping"):
            await redis.ping()
    except StoreUnavailable as exc:
        logger.warning("Redis is unreachable at startup, continuing fail-open: %s", exc)
        return False
    return True
