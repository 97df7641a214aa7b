"""FastAPI application with lifespan wiring and health endpoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from redis.asyncio import Redis

from opinion_bot.config import Settings, get_settings
from opinion_bot.llm import AnalysisClient, build_gemini_client
from opinion_bot.logging_config import configure_logging
from opinion_bot.pipeline import AdmissionPipeline
from opinion_bot.store import IdempotencyCache, RateLimiter, build_redis_client, ping_store
from opinion_bot.telegram import BotContext, TelegramClient
from opinion_bot.telegram.router import router as telegram_router

logger = logging.getLogger(__name__)


def build_bot(settings: Settings, redis: Redis | None = None) -> BotContext:
    """Construct every collaborator from explicit settings."""
    if not settings.allowed_chats:
        logger.warning("ALLOWED_CHAT_IDS is empty; all commands will be ignored")
    analyzer = AnalysisClient.from_settings(settings, build_gemini_client(settings.gemini_api_key))
    cache = IdempotencyCache(
        redis,
        ttl_seconds=settings.idempotency_ttl_days * 24 * 60 * 60,
    )
    limiter = RateLimiter(
        redis,
        limit=settings.rate_limit_max_attempts,
        window_seconds=settings.rate_limit_window_hours * 60 * 60,
    )
    pipeline = AdmissionPipeline(
        analyzer,
        cache,
        limiter,
        exempt_user_ids=settings.excluded_users,
    )
    return BotContext(
        pipeline=pipeline,
        telegram=TelegramClient(settings.telegram_bot_token),
        allowed_chat_ids=frozenset(settings.allowed_chats),
        bot_username=settings.telegram_bot_username,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, connect the store, build the bot."""
    settings = get_settings()
    configure_logging(settings.log_level)
    redis = build_redis_client(settings.redis_url)
    await ping_store(redis)

    app.state.settings = settings
    bot = build_bot(settings, redis)
    if not bot.bot_username and settings.telegram_bot_token:
        bot.bot_username = await bot.telegram.get_bot_username()
    logger.info("Authorized as @%s", bot.bot_username or "unknown")
    app.state.bot = bot
    try:
        yield
    finally:
        await app.state.bot.telegram.aclose()
        if redis is not None:
            await redis.aclose()


app = FastAPI(
    title="Opinion Bot",
    lifespan=lifespan,
)
app.include_router(telegram_router)


@app.get("/health")
async def health():
    """Health check endpoint for Cloud Run and local development."""
    return {
        "status": "ok",
        "service": "opinion-bot",
        "version": "0.1.0",
    }
