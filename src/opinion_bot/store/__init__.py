"""Shared Redis-backed state: idempotency records and rate-limit windows."""

from opinion_bot.store.client import build_redis_client, ping_store
from opinion_bot.store.idempotency import IdempotencyCache
from opinion_bot.store.rate_limit import RateLimiter

__all__ = [
    "IdempotencyCache",
    "RateLimiter",
    "build_redis_client",
    "ping_store",
]
