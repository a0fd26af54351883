import inspect
import json
from typing import get_args
from unittest.mock import patch

from app.api.exchanges import (
    binance_exchange_info,
    binance_open_interest,
    binance_premium_index,
    binance_top_long_short_account_ratio,
    bybit_open_interest,
)
from app.errors import UpstreamError
from app.providers.binance import RatioPeriod
from app.providers.bybit import Category, IntervalTime


def _body(response) -> dict:
    return json.loads(response.body)


def _bybit_page(symbol: str, values: list[str]) -> dict:
    return {
        "retCode": 0,
        "retMsg": "OK",
        "result": {
            "category": "linear",
            "symbol": symbol,
            "list": [
                {"openInterest": value, "timestamp": str(1700000000000 - index * 300000)}
                for index, value in enumerate(values)
            ],
            "nextPageCursor": "cursor-1",
        },
    }


def _bybit_call(symbol: str, **overrides):
    params = {
        "category": "linear",
        "interval_time": "5min",
        "limit": 2,
        "start_time": None,
        "end_time": None,
        "cursor": None,
    }
    params.update(overrides)
    return bybit_open_interest(symbol=symbol, **params)


def test_binance_open_interest_uses_alias() -> None:
    upstream = {"openInterest": "1200.5", "symbol": "PUMPUSDT", "time": 1700000000000}
    with patch("app.providers.binance.fetch_open_interest", return_value=upstream) as fetch_mock:
        response = binance_open_interest(symbol="PUMPFUNUSDT")

    fetch_mock.assert_called_once_with("PUMPUSDT")
    body = _body(response)
    assert response.status_code == 200
    assert body["status"] == "success"
    assert body["data"] == upstream
    assert body["message"] == "获取未平仓合约数量成功"


def test_binance_open_interest_passes_unknown_symbol_through() -> None:
    upstream = {"openInterest": "1", "symbol": "BTCUSDT", "time": 1}
    with patch("app.providers.binance.fetch_open_interest", return_value=upstream) as fetch_mock:
        binance_open_interest(symbol="BTCUSDT")

    fetch_mock.assert_called_once_with("BTCUSDT")


def test_binance_upstream_error_becomes_error_envelope() -> None:
    with patch(
        "app.providers.binance.fetch_open_interest",
        side_effect=UpstreamError("HTTP 错误: 404", status_code=404, provider="binance"),
    ):
        response = binance_open_interest(symbol="BTCUSDT")

    assert response.status_code == 500
    assert _body(response) == {"status": "error", "message": "HTTP 错误: 404", "statusCode": 500}


def test_binance_premium_index_without_symbol() -> None:
    indexes = [{"symbol": "BTCUSDT"}, {"symbol": "ETHUSDT"}]
    with patch("app.providers.binance.fetch_premium_index", return_value=indexes) as fetch_mock:
        response = binance_premium_index(symbol=None)

    fetch_mock.assert_called_once_with(None)
    assert _body(response)["data"] == {"total": 2, "premiumIndexes": indexes}


def test_binance_premium_index_resolves_symbol() -> None:
    with patch("app.providers.binance.fetch_premium_index", return_value=[{}]) as fetch_mock:
        binance_premium_index(symbol="PUMPFUNUSDT")

    fetch_mock.assert_called_once_with("PUMPUSDT")


def test_binance_top_ratio_forwards_params() -> None:
    ratios = [{"symbol": "BTCUSDT", "longShortRatio": "1.2"}]
    with patch(
        "app.providers.binance.fetch_top_long_short_account_ratio", return_value=ratios
    ) as fetch_mock:
        response = binance_top_long_short_account_ratio(
            symbol="BTCUSDT", period="1h", limit=30, start_time=None, end_time=1700000000000
        )

    fetch_mock.assert_called_once_with(
        "BTCUSDT", "1h", limit=30, start_time=None, end_time=1700000000000
    )
    assert _body(response)["data"] == {"total": 1, "ratios": ratios}


def test_binance_exchange_info_keeps_trading_symbols() -> None:
    info = {
        "rateLimits": [{"rateLimitType": "REQUEST_WEIGHT"}],
        "symbols": [
            {"symbol": "BTCUSDT", "status": "TRADING", "onboardDate": 1569398400000},
            {"symbol": "OLDUSDT", "status": "SETTLING", "onboardDate": 1569398400000},
        ],
    }
    with patch("app.providers.binance.fetch_exchange_info", return_value=info):
        response = binance_exchange_info()

    data = _body(response)["data"]
    assert data["total"] == 1
    assert data["rateLimits"] == info["rateLimits"]
    # 2019-09-25 08:00 UTC shown in Asia/Shanghai
    assert data["symbols"] == [
        {"symbol": "BTCUSDT", "status": "TRADING", "onboardDate": "2019-09-25 16:00"}
    ]


def test_bybit_single_symbol_returns_latest_with_change() -> None:
    with patch(
        "app.providers.bybit.fetch_open_interest", return_value=_bybit_page("BTCUSDT", ["110", "100"])
    ) as fetch_mock:
        response = _bybit_call("BTCUSDT")

    assert fetch_mock.call_args.args == ("BTCUSDT",)
    data = _body(response)["data"]
    assert data["symbol"] == "BTCUSDT"
    assert data["nextPageCursor"] == "cursor-1"
    latest = data["latest"]
    assert latest["openInterestFloat"] == 110.0
    assert latest["previousOpenInterest"] == 100.0
    assert latest["changeAmount"] == 10.0
    assert latest["changeRate"] == 10.0
    assert latest["changeRateFormatted"] == "+10.00%"
    assert latest["timestampMs"] == 1700000000000


def test_bybit_resolves_each_symbol_for_bybit() -> None:
    with patch(
        "app.providers.bybit.fetch_open_interest", return_value=_bybit_page("X", ["1"])
    ) as fetch_mock:
        _bybit_call("PUMPFUNUSDT")

    assert fetch_mock.call_args.args == ("PUMPFUNUSDT",)


def test_bybit_multiple_symbols_collects_failures() -> None:
    def fake_fetch(symbol: str, **kwargs):
        if symbol == "ETHUSDT":
            raise UpstreamError("Bybit API 错误: symbol invalid", provider="bybit")
        return _bybit_page(symbol, ["90", "100"])

    with patch("app.providers.bybit.fetch_open_interest", side_effect=fake_fetch):
        response = _bybit_call("BTCUSDT, ETHUSDT")

    body = _body(response)
    assert response.status_code == 200
    assert body["message"] == "获取未平仓合约数量完成: 1/2 成功"
    assert body["data"]["summary"] == {"total": 2, "successful": 1, "failed": 1}
    assert body["data"]["errors"] == [{"symbol": "ETHUSDT", "error": "Bybit API 错误: symbol invalid"}]
    assert body["data"]["list"][0]["latest"]["changeRateFormatted"] == "-10.00%"


def test_bybit_all_symbols_failing_is_an_error() -> None:
    with patch(
        "app.providers.bybit.fetch_open_interest",
        side_effect=UpstreamError("HTTP 错误: 503", status_code=503),
    ):
        response = _bybit_call("BTCUSDT,ETHUSDT")

    assert response.status_code == 500
    assert _body(response)["message"] == "所有交易对数据获取失败"


def test_bybit_empty_page_is_an_error() -> None:
    with patch("app.providers.bybit.fetch_open_interest", return_value=_bybit_page("BTCUSDT", [])):
        response = _bybit_call("BTCUSDT")

    assert _body(response) == {"status": "error", "message": "没有可用数据", "statusCode": 500}


def test_bybit_rejects_too_many_symbols() -> None:
    symbols = ",".join(f"S{index}USDT" for index in range(11))
    with patch("app.providers.bybit.fetch_open_interest") as fetch_mock:
        response = _bybit_call(symbols)

    assert response.status_code == 400
    assert _body(response)["message"] == "最多支持同时查询10个交易对"
    fetch_mock.assert_not_called()


def test_bybit_rejects_limit_out_of_range() -> None:
    response = _bybit_call("BTCUSDT", limit=201)

    assert response.status_code == 400
    assert _body(response)["message"] == "limit 必须在 1-200 之间"


def test_query_choices_come_from_provider_definitions() -> None:
    ratio_params = inspect.signature(binance_top_long_short_account_ratio).parameters
    bybit_params = inspect.signature(bybit_open_interest).parameters

    assert ratio_params["period"].annotation is RatioPeriod
    assert bybit_params["category"].annotation is Category
    assert bybit_params["interval_time"].annotation is IntervalTime
    assert get_args(RatioPeriod) == ("5m", "15m", "30m", "1h", "2h", "4h", "6h", "12h", "1d")
    assert get_args(Category) == ("linear", "inverse")
    assert get_args(IntervalTime) == ("5min", "15min", "30min", "1h", "4h", "1d")
