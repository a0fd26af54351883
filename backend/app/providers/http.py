from __future__ import annotations

import json
import logging
import random
import socket
import time
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from app.config.settings import settings
from app.errors import UpstreamError

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


def build_url(base_url: str, path: str, params: dict[str, Any] | None = None) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    if params:
        query = {key: str(value) for key, value in params.items() if value is not None}
        if query:
            url = f"{url}?{urlencode(query)}"
    return url


def _is_retriable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _backoff_seconds(attempt: int) -> float:
    backoff = min(
        settings.upstream_backoff_seconds * 2**attempt,
        settings.upstream_max_backoff_seconds,
    )
    return backoff * (0.5 + random.random() * 0.5)


def request_json(
    method: str,
    url: str,
    *,
    body: Any = None,
    headers: dict[str, str] | None = None,
    provider: str | None = None,
    retries: int | None = None,
    timeout: float | None = None,
) -> Any:
    """Call ``url`` and decode the JSON body.

    Network errors, HTTP 429 and 5xx are retried with jittered exponential
    backoff. The final failure is raised as ``UpstreamError``; HTTP failures
    carry the upstream status code and the message ``HTTP 错误: <code>``.
    """
    max_retries = settings.upstream_retries if retries is None else retries
    request_timeout = timeout or settings.upstream_timeout_seconds
    data = json.dumps(body).encode("utf-8") if body is not None else None
    request_headers = {**_JSON_HEADERS, **(headers or {})}

    attempt = 0
    while True:
        request = Request(url, data=data, headers=request_headers, method=method)
        try:
            with urlopen(request, timeout=request_timeout) as response:
                raw = response.read().decode("utf-8")
        except HTTPError as exc:
            if attempt < max_retries and _is_retriable_status(exc.code):
                logger.warning("%s %s returned %s, retrying", method, url, exc.code)
                exc.close()
                time.sleep(_backoff_seconds(attempt))
                attempt += 1
                continue
            raise UpstreamError(
                f"HTTP 错误: {exc.code}", status_code=exc.code, provider=provider
            ) from exc
        except (URLError, TimeoutError, socket.timeout) as exc:
            if attempt < max_retries:
                logger.warning("%s %s failed (%s), retrying", method, url, exc)
                time.sleep(_backoff_seconds(attempt))
                attempt += 1
                continue
            raise UpstreamError(f"请求失败: {exc}", status_code=502, provider=provider) from exc

        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise UpstreamError("响应不是有效的 JSON", status_code=502, provider=provider) from exc


def get_json(url: str, **kwargs: Any) -> Any:
    return request_json("GET", url, **kwargs)
