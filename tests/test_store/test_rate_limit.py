"""Tests for the sliding-window rate limiter."""

from opinion_bot.models.message import MessageRef
from opinion_bot.store.rate_limit import (
    RATE_LIMIT_MAX_ATTEMPTS,
    RATE_LIMIT_WINDOW_SECONDS,
    RateLimiter,
    rate_limit_key,
)

USER = 123456789
HOUR = 3600


class Clock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _ref(message_id: int) -> MessageRef:
    return MessageRef(chat_id=-100, message_id=message_id)


def test_defaults_are_five_per_48_hours():
    assert RATE_LIMIT_MAX_ATTEMPTS == 5
    assert RATE_LIMIT_WINDOW_SECONDS == 48 * HOUR


async def test_admits_up_to_limit_then_denies(fake_redis):
    """Five attempts are admitted; the sixth inside the window is denied."""
    limiter = RateLimiter(fake_redis, clock=Clock())

    for i in range(5):
        assert await limiter.admit(USER, _ref(i)) is True
    assert await limiter.admit(USER, _ref(99)) is False


async def test_denied_attempt_is_not_recorded(fake_redis):
    """A denial leaves the window size unchanged."""
    limiter = RateLimiter(fake_redis, clock=Clock())
    for i in range(5):
        await limiter.admit(USER, _ref(i))

    await limiter.admit(USER, _ref(98))
    await limiter.admit(USER, _ref(99))

    assert len(fake_redis.zsets[rate_limit_key(USER)]) == 5


async def test_old_entries_do_not_count(fake_redis):
    """Attempts older than 48 hours are pruned and free up quota."""
    clock = Clock()
    limiter = RateLimiter(fake_redis, clock=clock)
    for i in range(5):
        await limiter.admit(USER, _ref(i))

    clock.now += 48 * HOUR + 1

    assert await limiter.admit(USER, _ref(10)) is True
    assert len(fake_redis.zsets[rate_limit_key(USER)]) == 1


async def test_window_slides_per_entry(fake_redis):
    """Only the attempts that have aged out are released."""
    clock = Clock()
    limiter = RateLimiter(fake_redis, clock=clock)
    await limiter.admit(USER, _ref(0))
    clock.now += 10 * HOUR
    for i in range(1, 5):
        await limiter.admit(USER, _ref(i))

    # 47h after the 2nd..5th attempts, 57h after the 1st
    clock.now += 47 * HOUR
    assert await limiter.admit(USER, _ref(5)) is True
    assert await limiter.admit(USER, _ref(6)) is False


async def test_same_message_retried_gets_distinct_entries(fake_redis):
    """Concurrent attempts with the same message ref are recorded separately."""
    limiter = RateLimiter(fake_redis, clock=Clock())
    await limiter.admit(USER, _ref(1))
    await limiter.admit(USER, _ref(1))

    members = fake_redis.zsets[rate_limit_key(USER)]
    assert len(members) == 2
    assert all(m.startswith("-100:1:") for m in members)


async def test_window_expiry_is_refreshed(fake_redis):
    """Each admitted attempt sets the key's expiry to the window length."""
    limiter = RateLimiter(fake_redis, clock=Clock())
    await limiter.admit(USER, _ref(1))
    assert fake_redis.ttls[rate_limit_key(USER)] == 48 * HOUR


async def test_users_are_limited_independently(fake_redis):
    """One user's quota does not affect another's."""
    limiter = RateLimiter(fake_redis, clock=Clock())
    for i in range(5):
        await limiter.admit(USER, _ref(i))

    assert await limiter.admit(987654321, _ref(50)) is True


async def test_absent_store_always_admits():
    """Without a store the limiter fails open."""
    limiter = RateLimiter(None)
    for i in range(20):
        assert await limiter.admit(USER, _ref(i)) is True


async def test_unreachable_store_admits(broken_redis, caplog):
    """Store errors are logged and the attempt is admitted."""
    limiter = RateLimiter(broken_redis)

    with caplog.at_level("WARNING"):
        assert await limiter.admit(USER, _ref(1)) is True

    assert any("failed open" in r.getMessage() for r in caplog.records)
