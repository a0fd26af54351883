from __future__ import annotations

import logging

from app.providers import telegram

logger = logging.getLogger(__name__)


def run_telegram_send(
    chat_id: str,
    text: str,
    parse_mode: str | None = None,
    disable_link_preview: bool = False,
) -> int | None:
    """RQ entry point: deliver one message and return its Telegram message id.

    ``UpstreamError`` propagates so RQ marks the job failed and keeps it in
    the failed registry.
    """
    result = telegram.send_message(
        chat_id,
        text,
        parse_mode=parse_mode,
        disable_link_preview=disable_link_preview,
    )
    message_id = result.get("message_id") if isinstance(result, dict) else None
    logger.info("telegram message %s delivered to %s", message_id, chat_id)
    return message_id
