from __future__ import annotations

from typing import Any

from app.config.settings import settings
from app.errors import UpstreamError
from app.providers.http import build_url, request_json

_PROVIDER = "hubble"
_CONFIG_PATH = "/signal/config"


def _request(method: str, path: str, *, params: dict[str, Any] | None = None, body: Any = None) -> Any:
    api_key = settings.hubble.api_key
    if not api_key:
        raise UpstreamError("HUBBLE_API_KEY is not configured", provider=_PROVIDER)
    url = build_url(settings.hubble.base_url, path, params)
    # Writes are not idempotent on Hubble's side.
    retries = None if method == "GET" else 0
    return request_json(
        method,
        url,
        body=body,
        headers={"HUBBLE-API-KEY": api_key},
        provider=_PROVIDER,
        retries=retries,
    )


def create_signal(config: dict[str, Any]) -> Any:
    return _request("POST", _CONFIG_PATH, body=config)


def list_signals(
    name: str | None = None,
    status: str | None = None,
    page: int | None = None,
    size: int | None = None,
) -> Any:
    params = {"name": name or None, "status": status, "page": page, "size": size}
    return _request("GET", _CONFIG_PATH, params=params)


def update_signal(webhook_id: str, config: dict[str, Any]) -> Any:
    return _request("PUT", f"{_CONFIG_PATH}/{webhook_id}", body=config)


def set_signal_status(webhook_id: str, status: str) -> Any:
    return _request("PATCH", f"{_CONFIG_PATH}/{webhook_id}", body={"status": status})


def delete_signal(webhook_id: str) -> Any:
    return _request("DELETE", f"{_CONFIG_PATH}/{webhook_id}")
