"""Data models for the opinion bot pipeline."""

from opinion_bot.models.analysis import AnalysisRequest, AnalysisResult
from opinion_bot.models.message import MessageRef, OpinionRequest
from opinion_bot.models.telegram import (
    TelegramChat,
    TelegramMessage,
    TelegramUpdate,
    TelegramUser,
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "MessageRef",
    "OpinionRequest",
    "TelegramChat",
    "TelegramMessage",
    "TelegramUpdate",
    "TelegramUser",
]
