"""Render inbound signal payloads as Telegram messages."""

from __future__ import annotations

import datetime
import json
from dataclasses import dataclass
from typing import Any
from zoneinfo import ZoneInfo

from app.parsing.markdown import (
    escape_attr,
    escape_html,
    escape_markdown,
    format_number,
    shorten,
    truncate,
)

PARSE_MODE_HTML = "HTML"
PARSE_MODE_MARKDOWN_V2 = "MarkdownV2"

# Bot API sendMessage limit, in characters after entity parsing
TELEGRAM_MESSAGE_LIMIT = 4096

_EXPLORERS = {
    "ETH": "https://etherscan.io/tx/",
    "SOL": "https://solscan.io/tx/",
}


@dataclass
class OutboundMessage:
    text: str
    parse_mode: str | None = None
    disable_link_preview: bool = False


def _first_trader(tag: dict[str, Any] | None) -> dict[str, Any] | None:
    if not tag:
        return None
    return next(iter(tag.values()), None)


def _signed_usd(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}${format_number(value)}"


def format_polymarket(payload: dict[str, Any]) -> str:
    data = payload["data"]
    amount = format_number(float(data["CollateralAmount"]))
    price = float(data["PriceStr"])
    potential_return = (1 / price - 1) * 100 if price else 0.0
    direction = "🟢 买入" if data.get("MakerDirection") == "BUY" else "🔴 卖出"

    lines = [
        "🎯 <b>Polymarket 交易信号</b>",
        "",
        f"📊 <b>事件:</b> {escape_html(data.get('EventName'))}",
        f"🏷️ <b>标签:</b> {escape_html(data.get('Tags'))}",
        f"📈 <b>结果:</b> {escape_html(data.get('Outcome'))}",
        "",
        "💰 <b>交易详情:</b>",
        f"├ 方向: {direction}",
        f"├ 金额: ${amount} {escape_html(data.get('CollateralTokenSymbol'))}",
        f"├ 价格: {data['PriceStr']} ({price * 100:.0f}% 概率)",
        f"└ 潜在收益: {potential_return:.1f}%",
    ]

    trader = _first_trader(payload.get("tag"))
    indicator = (trader or {}).get("indicator")
    if indicator:
        lines += [
            "",
            "👤 <b>交易者:</b> Smart Money",
            f"├ 排名: #{indicator['rank']}",
            f"├ 总盈亏: ${format_number(float(indicator['total_pnl']))}",
            f"├ ROI: {float(indicator['roi']) * 100:.1f}%",
            f"└ 胜率: {float(indicator['win_rate']) * 100:.1f}%",
        ]

    lines += [
        "",
        f'🔗 <a href="{escape_attr(data.get("URL"))}">查看详情</a>',
        f"⛓️ {escape_html(payload.get('chain'))} | TX: {escape_html(payload['signature'][:10])}...",
    ]
    return "\n".join(lines)


def format_hyperliquid_fill(payload: dict[str, Any], tz_name: str) -> str:
    data = payload["data"]
    price = float(data["px"])
    size = float(data["sz"])
    notional = float(data["notional_value_usd"])
    closed_pnl = float(data["closed_pnl"])
    fee = float(data["fee"])
    net_pnl = closed_pnl - fee
    trade_time = datetime.datetime.fromtimestamp(
        int(data["time"]) / 1000, tz=ZoneInfo(tz_name)
    ).strftime("%Y/%m/%d %H:%M")

    direction_emoji = "🔴" if data.get("dir") == "Long > Short" else "🟢"
    side = "做空" if data.get("side") == "S" else "做多"
    pnl_emoji = "💰" if net_pnl > 0 else "📉"
    coin = escape_html(data.get("coin"))
    margin = "全仓" if data.get("crossed") else "逐仓"

    lines = [
        f"{direction_emoji} <b>Hyperliquid 永续合约交易</b>",
        "",
        f"💎 <b>币种:</b> {coin}",
        f"📊 <b>操作:</b> {escape_html(data.get('dir'))} ({side})",
        "",
        "💰 <b>交易详情:</b>",
        f"├ 成交价格: ${format_number(price, 2, 4)}",
        f"├ 成交数量: {format_number(size, 1, 1)} {coin}",
        f"├ 名义价值: ${format_number(notional)}",
        f"├ 起始仓位: {format_number(float(data['start_position']), 0, 3)}",
        f"└ 杠杆模式: {margin}",
        "",
        f"{pnl_emoji} <b>盈亏情况:</b>",
        f"├ 平仓盈亏: {_signed_usd(closed_pnl)}",
        f"├ 手续费: ${format_number(fee)}",
        f"└ 净盈亏: {_signed_usd(net_pnl)}",
    ]

    trader = _first_trader(payload.get("tag"))
    metrics = (trader or {}).get("metrics") or []
    if metrics:
        metric = metrics[0]
        tags = ", ".join(trader.get("tag") or [])
        lines += [
            "",
            f"👤 <b>交易者:</b> {escape_html(tags)}",
            f"├ 排名: #{metric['rank']}",
            f"├ 总盈亏(30天): ${format_number(float(metric['total_pnl']))}",
            f"└ ROI(30天): {float(metric['roi']) * 100:.2f}%",
        ]

    lines += [
        "",
        f"🕒 {trade_time}",
        f"⛓️ {escape_html(payload.get('chain'))} | TX: <code>{escape_html(payload['signature'][:16])}...</code>",
    ]
    return "\n".join(lines)


def _escape_within(raw: str, limit: int) -> str:
    """HTML-escape ``raw``, cutting it first so the escaped text fits in ``limit``.

    Escaping grows a character at most fivefold (``&amp;``), so a prefix of
    ``limit // 5`` characters always fits.
    """
    escaped = escape_html(raw)
    if len(escaped) <= limit:
        return escaped
    growth = len(escaped) - len(raw)
    return escape_html(truncate(raw, max(limit - growth, limit // 5)))


def format_hubble_signal(payload: dict[str, Any], tz_name: str) -> OutboundMessage:
    signal_type = payload.get("type")
    if signal_type == "Polymarket":
        return OutboundMessage(format_polymarket(payload), PARSE_MODE_HTML)
    if signal_type == "hyperliquid_fill":
        return OutboundMessage(format_hyperliquid_fill(payload, tz_name), PARSE_MODE_HTML)
    raw = json.dumps(payload, indent=2, ensure_ascii=False)
    body = _escape_within(raw, TELEGRAM_MESSAGE_LIMIT - len("<pre></pre>"))
    return OutboundMessage(f"<pre>{body}</pre>", PARSE_MODE_HTML)


def format_cex_alert(payload: dict[str, Any]) -> OutboundMessage:
    chain = payload.get("chain") or ""
    signal_type = payload.get("type") or ""
    symbol = payload.get("symbol") or ""
    signature = payload.get("signature") or ""

    is_inflow = signal_type.lower() == "inflow"
    emoji = "🟢" if is_inflow else "🔴"
    type_label = "Inflow \\(充值\\)" if is_inflow else "Outflow \\(提现\\)"

    explorer = _EXPLORERS.get(chain)
    if explorer:
        tx_link = f"[{escape_markdown(shorten(signature))}]({explorer}{signature})"
    else:
        tx_link = f"`{signature}`"

    text = "\n".join(
        [
            f"{emoji} *CEX {type_label} Alert*",
            "",
            f"*Amount:* `{payload.get('amount')} {symbol}`",
            f"*Chain:* {escape_markdown(chain)}",
            f"*Exchange/Tag:* {escape_markdown(payload.get('tags') or 'Unknown')}",
            "",
            f"*Sender:* `{shorten(payload.get('sender'))}`",
            f"*Receiver:* `{shorten(payload.get('receiver'))}`",
            f"*Tx:* {tx_link}",
            "",
            f"\\#CEX \\#{escape_markdown(symbol)} \\#{escape_markdown(signal_type)}",
        ]
    )
    return OutboundMessage(text, PARSE_MODE_MARKDOWN_V2, disable_link_preview=True)
