from __future__ import annotations

from typing import Any

from app.config.settings import settings
from app.errors import UpstreamError
from app.providers.http import request_json

_PROVIDER = "telegram"


def _call(method: str, payload: dict[str, Any] | None = None) -> Any:
    token = settings.telegram.bot_token
    if not token:
        raise UpstreamError("Telegram bot token is not configured", provider=_PROVIDER)
    url = f"{settings.telegram.api_url.rstrip('/')}/bot{token}/{method}"
    response = request_json(
        "POST" if payload is not None else "GET",
        url,
        body=payload,
        provider=_PROVIDER,
        timeout=settings.telegram.timeout_seconds,
    )
    if not isinstance(response, dict) or not response.get("ok"):
        description = response.get("description") if isinstance(response, dict) else None
        raise UpstreamError(
            f"Telegram API 错误: {description or '未知错误'}", provider=_PROVIDER
        )
    return response.get("result")


def get_me() -> dict[str, Any]:
    return _call("getMe")


def send_message(
    chat_id: str,
    text: str,
    parse_mode: str | None = None,
    disable_link_preview: bool = False,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
    if parse_mode:
        payload["parse_mode"] = parse_mode
    if disable_link_preview:
        payload["link_preview_options"] = {"is_disabled": True}
    return _call("sendMessage", payload)
