from __future__ import annotations

import re
from decimal import Decimal
from html import escape, unescape

from services.quote_types import Quote

_MARKUP_TAG = re.compile(r"</?[bi]>")


def format_fixed(value: Decimal, places: int) -> str:
    # Plain digits, no grouping, regardless of locale.
    return f"{value:.{places}f}"


def render_quote_report(quote: Quote, convert: str) -> str:
    """Render the HTML-markup report sent back for a quote.

    Same quote and currency always give the same text.
    """
    symbol = escape(quote.symbol)
    currency = escape(convert)
    snapshot = quote.snapshot

    lines = [
        f"<b>{symbol} - {currency}</b>",
        "",
        f"<b>Max Supply: </b><i>{format_fixed(quote.max_supply, 0)}</i> {symbol}",
        f"<b>Circulating Supply: </b><i>{format_fixed(quote.circulating_supply, 0)}</i> {symbol}",
        f"<b>Total Supply: </b><i>{format_fixed(quote.total_supply, 0)}</i> {symbol}",
        "",
        f"<b>Price: </b><i>{format_fixed(snapshot.price, 8)}</i> {currency}",
        f"<b>Volume: </b><i>{format_fixed(snapshot.volume_24h, 3)}</i> {currency}",
        f"<b>1 Hour Change Percent: </b><i>{format_fixed(snapshot.percent_change_1h, 2)}%</i>",
        f"<b>Daily Change Percent: </b><i>{format_fixed(snapshot.percent_change_24h, 2)}%</i>",
        f"<b>Market Cap: </b><i>{format_fixed(snapshot.market_cap, 3)}</i> {currency}",
        f"<b>Data Last Updated: </b><i>{snapshot.last_updated:%H:%M:%S}</i>",
    ]
    return "\n".join(lines) + "\n"


def strip_markup(text: str) -> str:
    return unescape(_MARKUP_TAG.sub("", text))


__all__ = ["format_fixed", "render_quote_report", "strip_markup"]
