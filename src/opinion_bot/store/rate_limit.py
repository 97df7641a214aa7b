"""Per-user sliding-window rate limiter backed by a Redis sorted set.

Each admitted attempt is a member of ``ratelimit:{user_id}`` scored with its
epoch timestamp. On every check, members older than the window are pruned,
the rest are counted, and a new member is added only if the count is below
the limit. Each step is a single atomic Redis command; there is no
transaction across them, so concurrent requests at the boundary may
over-admit slightly.
"""

import logging
import time
import uuid
from collections.abc import Callable

from redis.asyncio import Redis

from opinion_bot.errors import StoreUnavailable
from opinion_bot.models.message import MessageRef
from opinion_bot.store.client import store_operation

logger = logging.getLogger(__name__)

RATE_LIMIT_MAX_ATTEMPTS = 5
RATE_LIMIT_WINDOW_SECONDS = 48 * 60 * 60


def rate_limit_key(user_id: int) -> str:
    return f"ratelimit:{user_id}"


class RateLimiter:
    """Sliding-window quota per user. Fails open when the store is absent or erroring."""

    def __init__(
        self,
        redis: Redis | None,
        *,
        limit: int = RATE_LIMIT_MAX_ATTEMPTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = redis
        self._limit = limit
        self._window_seconds = window_seconds
        self._clock = clock

    async def admit(self, user_id: int, ref: MessageRef) -> bool:
        """Record an attempt for ``user_id`` and return True, or return False if over quota.

        A denied attempt is not recorded.
        """
        if self._redis is None:
            return True

        key = rate_limit_key(user_id)
        now = self._clock()
        cutoff = now - self._window_seconds

        try:
            async with store_operation("sliding window"):
                await self._redis.zremrangebyscore(key, "-inf", f"({cutoff}")
                active = await self._redis.zcount(key, cutoff, "+inf")
                if active >= self._limit:
                    logger.info(
                        "Rate limit reached for user %s (%d/%d in window)",
                        user_id,
                        active,
                        self._limit,
                    )
                    return False

                attempt = f"{ref.token}:{uuid.uuid4().hex}"
                await self._redis.zadd(key, {attempt: now})
                await self._redis.expire(key, self._window_seconds)
        except StoreUnavailable as exc:
            logger.warning("Rate limit check failed open for user %s: %s", user_id, exc)
        return True
