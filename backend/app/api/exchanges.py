import logging
from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.responses import fail, respond
from app.config.settings import settings
from app.errors import UpstreamError
from app.providers import binance, bybit
from app.providers.binance import RatioPeriod
from app.providers.bybit import Category, IntervalTime
from app.schemas.envelope import success
from app.symbols.aliases import Exchange, resolve, resolve_many

router = APIRouter(prefix="/exchanges", tags=["exchanges"])
logger = logging.getLogger(__name__)


def _upstream_failure(exc: UpstreamError) -> JSONResponse:
    logger.warning("%s request failed: %s", exc.provider or "upstream", exc.message)
    return fail(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _split_symbols(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("/binance/openInterest")
def binance_open_interest(symbol: str = Query(...)) -> JSONResponse:
    try:
        payload = binance.fetch_open_interest(resolve(symbol, Exchange.BINANCE))
    except UpstreamError as exc:
        return _upstream_failure(exc)
    data = {
        "openInterest": payload.get("openInterest"),
        "symbol": payload.get("symbol"),
        "time": payload.get("time"),
    }
    return respond(success(data, "获取未平仓合约数量成功"))


@router.get("/binance/premiumIndex")
def binance_premium_index(symbol: Optional[str] = Query(None)) -> JSONResponse:
    exchange_symbol = resolve(symbol, Exchange.BINANCE) if symbol else None
    try:
        indexes = binance.fetch_premium_index(exchange_symbol)
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(
        success({"total": len(indexes), "premiumIndexes": indexes}, "获取标记价格和资金费率成功")
    )


@router.get("/binance/topLongShortAccountRatio")
def binance_top_long_short_account_ratio(
    symbol: str = Query(...),
    period: RatioPeriod = Query(...),
    limit: int = Query(30, ge=1, le=500),
    start_time: Optional[int] = Query(None, alias="startTime"),
    end_time: Optional[int] = Query(None, alias="endTime"),
) -> JSONResponse:
    try:
        ratios = binance.fetch_top_long_short_account_ratio(
            resolve(symbol, Exchange.BINANCE),
            period,
            limit=limit,
            start_time=start_time,
            end_time=end_time,
        )
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success({"total": len(ratios), "ratios": ratios}, "获取大户多空账户比率成功"))


@router.get("/binance/exchangeInfo")
def binance_exchange_info() -> JSONResponse:
    try:
        info = binance.fetch_exchange_info()
    except UpstreamError as exc:
        return _upstream_failure(exc)
    symbols = binance.trading_symbols(info, settings.display_timezone)
    data = {
        "total": len(symbols),
        "rateLimits": info.get("rateLimits") or [],
        "symbols": symbols,
    }
    return respond(success(data, "获取交易所信息成功"))


@router.get("/bybit/openInterest")
def bybit_open_interest(
    symbol: str = Query(...),
    category: Category = Query("linear"),
    interval_time: IntervalTime = Query("5min", alias="intervalTime"),
    limit: int = Query(2),
    start_time: Optional[int] = Query(None, alias="startTime"),
    end_time: Optional[int] = Query(None, alias="endTime"),
    cursor: Optional[str] = Query(None),
) -> JSONResponse:
    symbols = _split_symbols(symbol)
    if not symbols:
        return fail("缺少必要参数 symbol", status.HTTP_400_BAD_REQUEST)
    if len(symbols) > settings.bybit_symbol_limit:
        return fail(
            f"最多支持同时查询{settings.bybit_symbol_limit}个交易对", status.HTTP_400_BAD_REQUEST
        )
    if limit < 1 or limit > 200:
        return fail("limit 必须在 1-200 之间", status.HTTP_400_BAD_REQUEST)

    def fetch_latest(exchange_symbol: str) -> dict:
        payload = bybit.fetch_open_interest(
            exchange_symbol,
            category=category,
            interval_time=interval_time,
            limit=limit,
            start_time=start_time,
            end_time=end_time,
            cursor=cursor,
        )
        return bybit.latest_open_interest(payload, settings.display_timezone)

    exchange_symbols = resolve_many(symbols, Exchange.BYBIT)

    if len(exchange_symbols) == 1:
        try:
            latest = fetch_latest(exchange_symbols[0])
        except UpstreamError as exc:
            return _upstream_failure(exc)
        return respond(success(latest, "获取未平仓合约数量成功"))

    successful: list[dict] = []
    failed: list[dict] = []
    for exchange_symbol in exchange_symbols:
        try:
            successful.append(fetch_latest(exchange_symbol))
        except UpstreamError as exc:
            logger.warning("bybit open interest failed for %s: %s", exchange_symbol, exc.message)
            failed.append({"symbol": exchange_symbol, "error": exc.message})

    if not successful:
        return fail("所有交易对数据获取失败", status.HTTP_500_INTERNAL_SERVER_ERROR)

    data: dict = {
        "list": successful,
        "summary": {
            "total": len(exchange_symbols),
            "successful": len(successful),
            "failed": len(failed),
        },
    }
    if failed:
        data["errors"] = failed
    return respond(
        success(data, f"获取未平仓合约数量完成: {len(successful)}/{len(exchange_symbols)} 成功")
    )
