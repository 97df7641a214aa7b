"""Telegram webhook secret verification as a FastAPI dependency."""

import hmac

from fastapi import HTTPException, Request

from opinion_bot.config import get_settings

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


async def verify_telegram_request(request: Request) -> dict:
    """Verify the webhook secret header and return the parsed JSON update.

    Telegram echoes the secret given to setWebhook in the
    X-Telegram-Bot-Api-Secret-Token header. When no secret is configured,
    every request is accepted.

    Raises HTTPException(403) if the secret is configured and does not match.
    """
    settings = get_settings()
    expected = settings.telegram_webhook_secret
    if expected:
        received = request.headers.get(SECRET_HEADER, "")
        if not hmac.compare_digest(received.encode(), expected.encode()):
            raise HTTPException(status_code=403, detail="Invalid Telegram secret token")

    return await request.json()
