"""Telegram update dispatch and command filtering logic."""

import logging
from dataclasses import dataclass, field

from fastapi import BackgroundTasks
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from opinion_bot.models.message import MessageRef, OpinionRequest
from opinion_bot.models.telegram import TelegramMessage, TelegramUpdate
from opinion_bot.opinion.replies import ANALYSIS_FAILED, NOT_A_REPLY, UNKNOWN_COMMAND
from opinion_bot.pipeline import AdmissionPipeline, Outcome, PipelineReply
from opinion_bot.telegram.client import TelegramClient

logger = logging.getLogger(__name__)

OPINION_COMMAND = "/opinion"


@dataclass
class BotContext:
    """Collaborators built once at startup and shared by every update."""

    pipeline: AdmissionPipeline
    telegram: TelegramClient
    allowed_chat_ids: frozenset[int] = field(default_factory=frozenset)
    bot_username: str = ""


def parse_command(text: str, bot_username: str = "") -> str | None:
    """Return the bare command of a message (``/opinion@my_bot arg`` -> ``/opinion``).

    Commands addressed to another bot (``/opinion@other_bot``) yield None.
    The addressee is compared case-insensitively and only when our own
    username is known.
    """
    if not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0]
    command, _, addressee = head.partition("@")
    if addressee and bot_username and addressee.lower() != bot_username.lstrip("@").lower():
        return None
    return command


def user_info(message: TelegramMessage) -> dict:
    """Describe the sender for request logging."""
    sender = message.sender
    if sender is None:
        return {"user_id": 0, "username": "unknown", "first_name": "Unknown"}
    return {
        "user_id": sender.id,
        "username": sender.username or "no_username",
        "first_name": sender.first_name or "Unknown",
    }


def chat_info(message: TelegramMessage) -> dict:
    """Describe the chat for request logging.

    Title falls back to @username, then first name, then "Private Chat".
    """
    chat = message.chat
    if chat.title:
        title = chat.title
    elif chat.username:
        title = f"@{chat.username}"
    elif chat.first_name:
        title = chat.first_name
    else:
        title = "Private Chat"
    return {"chat_id": chat.id, "chat_type": chat.type, "chat_title": title}


def handle_update(payload: dict, background_tasks: BackgroundTasks, bot: BotContext) -> JSONResponse:
    """Parse a webhook update and dispatch it. Always acknowledges with 200."""
    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError:
        logger.warning("Ignoring malformed Telegram update", exc_info=True)
        return JSONResponse({"ok": True})

    if update.message is not None:
        handle_message(update.message, background_tasks, bot)
    return JSONResponse({"ok": True})


def handle_message(message: TelegramMessage, background_tasks: BackgroundTasks, bot: BotContext) -> None:
    """Apply message filters and dispatch commands to background.

    Filters are applied in order:
    1. No text, not a command, or addressed to another bot -> skip
    2. Chat not in the allow list -> skip
    3. Unknown command -> usage reply
    4. /opinion not sent as a reply -> usage reply
    5. /opinion reply -> admission pipeline
    """
    command = parse_command(message.text or "", bot.bot_username)
    if command is None:
        return

    if message.chat.id not in bot.allowed_chat_ids:
        logger.info("Ignoring %s from disallowed chat", command, extra=chat_info(message))
        return

    logger.info(
        "Received %s (message_id=%d)",
        command,
        message.message_id,
        extra={**user_info(message), **chat_info(message)},
    )

    if command != OPINION_COMMAND:
        background_tasks.add_task(
            bot.telegram.send_message,
            message.chat.id,
            UNKNOWN_COMMAND,
            reply_to_message_id=message.message_id,
        )
        return

    if message.reply_to_message is None:
        background_tasks.add_task(
            bot.telegram.send_message,
            message.chat.id,
            NOT_A_REPLY,
            reply_to_message_id=message.message_id,
        )
        return

    background_tasks.add_task(process_opinion, message, bot)


def build_opinion_request(message: TelegramMessage) -> OpinionRequest:
    """Unwrap an /opinion reply into the transport-neutral pipeline request."""
    quoted = message.reply_to_message
    return OpinionRequest(
        command_ref=MessageRef(chat_id=message.chat.id, message_id=message.message_id),
        quoted_ref=MessageRef(chat_id=quoted.chat.id, message_id=quoted.message_id),
        user_id=message.sender.id if message.sender else 0,
        quoted_text=quoted.text or "",
    )


async def process_opinion(message: TelegramMessage, bot: BotContext) -> None:
    """Run the admission pipeline for an /opinion reply and send its single reply."""
    request = build_opinion_request(message)
    try:
        reply = await bot.pipeline.handle(request)
    except Exception:
        logger.error("Pipeline failed for message %s", request.quoted_ref.token, exc_info=True)
        reply = PipelineReply(outcome=Outcome.ANALYSIS_FAILED, text=ANALYSIS_FAILED)

    target = request.quoted_ref if reply.reply_to_quoted else request.command_ref
    logger.info(
        "Opinion request finished with %s (ok=%s)",
        reply.outcome.value,
        reply.ok,
        extra={"chat_id": target.chat_id, "reply_to": target.message_id},
    )

    await bot.telegram.send_message(
        target.chat_id,
        reply.text,
        reply_to_message_id=target.message_id,
        disable_link_preview=reply.disable_link_preview,
    )
