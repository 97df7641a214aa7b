"""Application configuration via pydantic-settings."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def parse_id_list(raw: str) -> list[int]:
    """Parse a comma-separated list of Telegram IDs.

    Blank entries and entries that are not integers are skipped, so
    ``"-100123, oops,42,"`` yields ``[-100123, 42]``.
    """
    ids: list[int] = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            ids.append(int(token))
        except ValueError:
            logger.warning("Ignoring invalid ID in list: %r", token)
    return ids


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Telegram
    telegram_bot_token: str = ""
    telegram_bot_username: str = ""  # resolved via getMe when unset
    telegram_webhook_secret: str = ""
    allowed_chat_ids: str = ""
    excluded_user_ids: str = ""

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-flash-latest"
    thinking_budget: int = 1024
    analysis_timeout_seconds: float = 120.0

    # Redis (optional -- caching and rate limiting fail open without it)
    redis_url: str = ""
    rate_limit_max_attempts: int = 5
    rate_limit_window_hours: int = 48
    idempotency_ttl_days: int = 30

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080

    @property
    def allowed_chats(self) -> list[int]:
        return parse_id_list(self.allowed_chat_ids)

    @property
    def excluded_users(self) -> list[int]:
        return parse_id_list(self.excluded_user_ids)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
