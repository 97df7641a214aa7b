"""Telegram Bot API client for sending replies.

Uses one shared httpx.AsyncClient created at startup. Sends are
fire-and-forget: HTTP failures are logged and never raised, so a failed
reply cannot crash a background task.
"""

import logging

import httpx

from opinion_bot.textutil import truncate

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"

# Bot API hard limit on message text length
MAX_MESSAGE_LENGTH = 4096


class TelegramClient:
    """Minimal async Bot API client: sendMessage only."""

    def __init__(
        self,
        bot_token: str,
        *,
        http: httpx.AsyncClient | None = None,
        api_base: str = TELEGRAM_API_BASE,
    ) -> None:
        self._bot_token = bot_token
        self._http = http or httpx.AsyncClient(timeout=httpx.Timeout(20.0))
        self._api_base = api_base.rstrip("/")

    def _endpoint(self, method: str) -> str:
        return f"{self._api_base}/bot{self._bot_token}/{method}"

    async def send_message(
        self,
        chat_id: int,
        text: str,
        *,
        reply_to_message_id: int | None = None,
        disable_link_preview: bool = False,
    ) -> bool:
        """Send plain text to ``chat_id``, optionally as a reply.

        Returns True on success, False if the Bot API call failed.
        """
        if len(text) > MAX_MESSAGE_LENGTH:
            text = truncate(text, MAX_MESSAGE_LENGTH - 3)
        payload: dict = {"chat_id": chat_id, "text": text}
        if reply_to_message_id is not None:
            payload["reply_parameters"] = {
                "message_id": reply_to_message_id,
                "allow_sending_without_reply": True,
            }
        if disable_link_preview:
            payload["link_preview_options"] = {"is_disabled": True}

        try:
            response = await self._http.post(self._endpoint("sendMessage"), json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Bot API sendMessage to chat %s failed with %d: %s",
                chat_id,
                exc.response.status_code,
                exc.response.text,
            )
            return False
        except httpx.HTTPError:
            logger.warning("Bot API sendMessage to chat %s failed", chat_id, exc_info=True)
            return False
        return True

    async def get_bot_username(self) -> str:
        """Return the bot's own username from getMe, or "" if it cannot be fetched."""
        try:
            response = await self._http.post(self._endpoint("getMe"))
            response.raise_for_status()
        except httpx.HTTPError:
            logger.warning("Bot API getMe failed", exc_info=True)
            return ""
        result = response.json().get("result") or {}
        return result.get("username") or ""

    async def aclose(self) -> None:
        await self._http.aclose()
