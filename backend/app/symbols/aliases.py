"""Canonical symbol -> exchange-specific symbol.

Canonical symbols are the tickers we store internally (as they arrive from the
signal feeds). Futures venues occasionally list the same contract under a
different name; add an entry here whenever such a mismatch shows up.

Lookups are exact: no trimming and no case folding. Callers pass symbols in the
same casing as the table keys.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping


class Exchange(str, Enum):
    BINANCE = "binance"
    BYBIT = "bybit"


_RAW_ALIASES: dict[str, dict[str, str]] = {
    # Bybit lists PUMPFUNUSDT, Binance uses PUMPUSDT
    "PUMPFUNUSDT": {"binance": "PUMPUSDT"},
}


def _freeze(raw: Mapping[str, Mapping[str, str]]) -> Mapping[str, Mapping[Exchange, str]]:
    frozen: dict[str, Mapping[Exchange, str]] = {}
    for symbol, overrides in raw.items():
        # Exchange(...) raises ValueError for a venue we do not support.
        frozen[symbol] = MappingProxyType(
            {Exchange(exchange): alias for exchange, alias in overrides.items()}
        )
    return MappingProxyType(frozen)


ALIASES: Mapping[str, Mapping[Exchange, str]] = _freeze(_RAW_ALIASES)


def resolve(symbol: str, exchange: Exchange) -> str:
    """Return the symbol ``exchange`` expects for canonical ``symbol``.

    Falls back to ``symbol`` when the table has no entry for it, or has one
    without an override for ``exchange``.
    """
    return ALIASES.get(symbol, {}).get(exchange, symbol)


def resolve_many(symbols: Iterable[str], exchange: Exchange) -> list[str]:
    return [resolve(symbol, exchange) for symbol in symbols]
