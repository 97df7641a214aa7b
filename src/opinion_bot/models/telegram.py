"""Telegram Bot API update models.

Only the fields this service reads are declared; everything else in the
update payload is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
    """Sender of a message."""

    id: int
    is_bot: bool = False
    first_name: str = ""
    username: str | None = None


class TelegramChat(BaseModel):
    """Chat a message was posted in."""

    id: int
    type: str = "private"  # private, group, supergroup, channel
    title: str | None = None
    username: str | None = None
    first_name: str | None = None


class TelegramMessage(BaseModel):
    """A chat message, optionally replying to another message."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: int
    chat: TelegramChat
    sender: TelegramUser | None = Field(default=None, alias="from")
    text: str | None = None
    reply_to_message: TelegramMessage | None = None


class TelegramUpdate(BaseModel):
    """Webhook update envelope. Only plain messages are handled."""

    update_id: int
    message: TelegramMessage | None = None
