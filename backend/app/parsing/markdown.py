from __future__ import annotations

import html
import re

MARKDOWN_V2_SPECIAL_RE = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")


def escape_markdown(text: str | None) -> str:
    """Escape Telegram MarkdownV2 control characters."""
    if not text:
        return ""
    return MARKDOWN_V2_SPECIAL_RE.sub(r"\\\1", str(text))


def escape_html(text: object) -> str:
    if text is None:
        return ""
    return html.escape(str(text), quote=False)


def escape_attr(text: object) -> str:
    """Escape a value placed inside a double-quoted HTML attribute."""
    if text is None:
        return ""
    return html.escape(str(text), quote=True)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return f"{text[: max_length - 1]}…"


def shorten(value: str | None) -> str:
    """Shorten an address or hash to ``abcdef...wxyz``."""
    if not value:
        return "N/A"
    if len(value) < 10:
        return value
    return f"{value[:6]}...{value[-4:]}"


def format_number(value: float, min_digits: int = 2, max_digits: int = 2) -> str:
    """Group thousands and keep between ``min_digits`` and ``max_digits`` decimals."""
    text = f"{value:,.{max_digits}f}"
    if max_digits <= min_digits or "." not in text:
        return text
    whole, fraction = text.split(".")
    fraction = fraction.rstrip("0")
    if len(fraction) < min_digits:
        fraction = fraction.ljust(min_digits, "0")
    return f"{whole}.{fraction}" if fraction else whole
