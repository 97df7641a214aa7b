"""Telegram webhook router with secret verification."""

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from opinion_bot.telegram.handlers import handle_update
from opinion_bot.telegram.verification import verify_telegram_request

router = APIRouter(prefix="", tags=["telegram"])


@router.post("/telegram/webhook")
async def telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: dict = Depends(verify_telegram_request),
) -> JSONResponse:
    """Receive Telegram updates.

    Always acknowledges with 200 so Telegram does not redeliver; the actual
    work runs as a background task after the response is sent.
    """
    return handle_update(payload, background_tasks, request.app.state.bot)
