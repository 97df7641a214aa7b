"""Telegram ingress: webhook handling, secret verification, command dispatch, and replies."""

from opinion_bot.telegram.client import TelegramClient
from opinion_bot.telegram.handlers import BotContext
from opinion_bot.telegram.router import router

__all__ = [
    "BotContext",
    "TelegramClient",
    "router",
]
