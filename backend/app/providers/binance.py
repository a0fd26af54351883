from __future__ import annotations

import datetime
from typing import Any, Literal
from zoneinfo import ZoneInfo

from app.cache import get_cached, set_cached
from app.config.settings import settings
from app.errors import UpstreamError
from app.providers.http import build_url, get_json

_PROVIDER = "binance"
_EXCHANGE_INFO_CACHE_KEY = "binance:exchangeInfo"

RatioPeriod = Literal["5m", "15m", "30m", "1h", "2h", "4h", "6h", "12h", "1d"]


def _get(path: str, params: dict[str, Any] | None = None) -> Any:
    return get_json(build_url(settings.binance_api_url, path, params), provider=_PROVIDER)


def fetch_open_interest(symbol: str) -> dict[str, Any]:
    payload = _get("/fapi/v1/openInterest", {"symbol": symbol})
    if not isinstance(payload, dict):
        raise UpstreamError("Binance 响应格式错误", provider=_PROVIDER)
    return payload


def fetch_premium_index(symbol: str | None = None) -> list[dict[str, Any]]:
    payload = _get("/fapi/v1/premiumIndex", {"symbol": symbol})
    # A single symbol comes back as one object, the full market as a list.
    if isinstance(payload, dict):
        return [payload]
    return list(payload or [])


def fetch_top_long_short_account_ratio(
    symbol: str,
    period: RatioPeriod,
    limit: int = 30,
    start_time: int | None = None,
    end_time: int | None = None,
) -> list[dict[str, Any]]:
    payload = _get(
        "/futures/data/topLongShortAccountRatio",
        {
            "symbol": symbol,
            "period": period,
            "limit": limit,
            "startTime": start_time,
            "endTime": end_time,
        },
    )
    return list(payload or [])


def fetch_exchange_info() -> dict[str, Any]:
    cached = get_cached(_EXCHANGE_INFO_CACHE_KEY)
    if cached:
        return cached
    payload = _get("/fapi/v1/exchangeInfo")
    if not isinstance(payload, dict):
        raise UpstreamError("Binance 响应格式错误", provider=_PROVIDER)
    set_cached(_EXCHANGE_INFO_CACHE_KEY, payload, settings.exchange_info_cache_ttl_seconds)
    return payload


def format_onboard_date(timestamp_ms: int | None, tz_name: str) -> str | None:
    if timestamp_ms is None:
        return None
    moment = datetime.datetime.fromtimestamp(int(timestamp_ms) / 1000, tz=ZoneInfo(tz_name))
    return moment.strftime("%Y-%m-%d %H:%M")


def trading_symbols(exchange_info: dict[str, Any], tz_name: str) -> list[dict[str, Any]]:
    symbols: list[dict[str, Any]] = []
    for item in exchange_info.get("symbols") or []:
        if item.get("status") != "TRADING":
            continue
        symbols.append(
            {
                "symbol": item.get("symbol"),
                "status": item.get("status"),
                "onboardDate": format_onboard_date(item.get("onboardDate"), tz_name),
            }
        )
    return symbols
