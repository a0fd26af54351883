from __future__ import annotations

import datetime
from typing import Any, Literal
from zoneinfo import ZoneInfo

from app.config.settings import settings
from app.errors import UpstreamError
from app.providers.http import build_url, get_json

_PROVIDER = "bybit"

Category = Literal["linear", "inverse"]
IntervalTime = Literal["5min", "15min", "30min", "1h", "4h", "1d"]


def fetch_open_interest(
    symbol: str,
    category: Category = "linear",
    interval_time: IntervalTime = "5min",
    limit: int | None = 2,
    start_time: int | None = None,
    end_time: int | None = None,
    cursor: str | None = None,
) -> dict[str, Any]:
    url = build_url(
        settings.bybit_api_url,
        "/v5/market/open-interest",
        {
            "category": category,
            "symbol": symbol,
            "intervalTime": interval_time,
            "startTime": start_time,
            "endTime": end_time,
            "limit": limit,
            "cursor": cursor,
        },
    )
    payload = get_json(url, provider=_PROVIDER)
    if not isinstance(payload, dict):
        raise UpstreamError("Bybit 响应格式错误", provider=_PROVIDER)
    if payload.get("retCode") != 0:
        raise UpstreamError(f"Bybit API 错误: {payload.get('retMsg')}", provider=_PROVIDER)
    return payload


def _format_time(timestamp_ms: int, tz_name: str) -> str:
    moment = datetime.datetime.fromtimestamp(timestamp_ms / 1000, tz=ZoneInfo(tz_name))
    return moment.strftime("%Y/%m/%d %H:%M:%S")


def latest_open_interest(payload: dict[str, Any], tz_name: str) -> dict[str, Any]:
    """Reduce an open-interest page to its newest point plus the change vs the one before."""
    result = payload.get("result") or {}
    items = result.get("list") or []
    if not items:
        raise UpstreamError("没有可用数据", provider=_PROVIDER)

    latest = items[0]
    current = float(latest["openInterest"])
    previous = 0.0
    change_amount = 0.0
    change_rate = 0.0
    if len(items) > 1:
        previous = float(items[1]["openInterest"])
        change_amount = current - previous
        change_rate = (change_amount / previous) * 100 if previous != 0 else 0.0

    timestamp_ms = int(latest["timestamp"])
    sign = "+" if change_rate >= 0 else ""
    return {
        "category": result.get("category"),
        "symbol": result.get("symbol"),
        "latest": {
            **latest,
            "formattedTime": _format_time(timestamp_ms, tz_name),
            "timestampMs": timestamp_ms,
            "openInterestFloat": current,
            "previousOpenInterest": previous,
            "changeAmount": round(change_amount, 8),
            "changeRate": round(change_rate, 4),
            "changeRateFormatted": f"{sign}{change_rate:.2f}%",
        },
        "nextPageCursor": result.get("nextPageCursor"),
    }
