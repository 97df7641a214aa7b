"""Idempotency cache: remembers which quoted messages were already analyzed.

Records live at ``idempotency:{chat_id}:{message_id}`` with the creation
epoch as value and a 30-day TTL. There is no lock between ``seen`` and
``mark_seen``, so two concurrent requests for the same message may both be
analyzed; the last write wins.
"""

import logging
import time
from collections.abc import Callable

from redis.asyncio import Redis

from opinion_bot.errors import StoreUnavailable
from opinion_bot.models.message import MessageRef
from opinion_bot.store.client import store_operation

logger = logging.getLogger(__name__)

IDEMPOTENCY_TTL_SECONDS = 30 * 24 * 60 * 60


class IdempotencyCache:
    """Redis-backed 'already answered' markers. Fails open when the store is absent."""

    def __init__(
        self,
        redis: Redis | None,
        *,
        ttl_seconds: int = IDEMPOTENCY_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = redis
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    async def seen(self, ref: MessageRef) -> bool:
        """Return True if ``ref`` was already analyzed. False when the store is unavailable."""
        if self._redis is None:
            return False
        try:
            async with store_operation("exists"):
                return bool(await self._redis.exists(ref.idempotency_key))
        except StoreUnavailable as exc:
            logger.warning("Idempotency check failed open for %s: %s", ref.idempotency_key, exc)
            return False

    async def mark_seen(self, ref: MessageRef) -> None:
        """Write the idempotency record for ``ref``. Re-marking is harmless."""
        if self._redis is None:
            return
        try:
            async with store_operation("set"):
                await self._redis.set(
                    ref.idempotency_key,
                    str(int(self._clock())),
                    ex=self._ttl_seconds,
                )
        except StoreUnavailable as exc:
            logger.warning("Failed to write idempotency record %s: %s", ref.idempotency_key, exc)
