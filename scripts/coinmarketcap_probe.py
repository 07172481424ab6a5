# flake8: noqa E402
# Run via uv so project deps are loaded, e.g.:
# uv run scripts/coinmarketcap_probe.py --symbol BTC --convert USD
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Ensure the src directory is importable when the script is invoked via uv/python directly.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from config import config
from services.coinmarketcap_client import CoinMarketCapClient
from services.quote_decoder import decode_quote


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a live CoinMarketCap quote and dump it as JSON.")
    parser.add_argument("--symbol", default="BTC", help="Asset symbol, e.g. BTC.")
    parser.add_argument("--convert", default="USD", help="Convert currency, e.g. USD.")
    parser.add_argument("--raw", action="store_true", help="Print the raw provider payload instead of the decoded quote.")
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, handlers=[logging.StreamHandler()])
    args = parse_args()
    symbol = args.symbol.upper()
    convert = args.convert.upper()

    settings = config()
    client = CoinMarketCapClient(
        api_key=settings.coinmarketcap_api_key,
        base_url=settings.coinmarketcap_base_url,
        timeout=settings.request_timeout_seconds,
    )
    raw = client.get_latest_quote_payload(symbol=symbol, convert=convert)
    if args.raw:
        print(json.dumps(json.loads(raw), indent=2))
        return

    quote = decode_quote(raw, symbol, convert)
    snapshot = quote.snapshot
    payload: dict[str, Any] = {
        "name": quote.name,
        "symbol": quote.symbol,
        "max_supply": str(quote.max_supply),
        "circulating_supply": str(quote.circulating_supply),
        "total_supply": str(quote.total_supply),
        "convert": snapshot.currency,
        "price": str(snapshot.price),
        "volume_24h": str(snapshot.volume_24h),
        "percent_change_1h": str(snapshot.percent_change_1h),
        "percent_change_24h": str(snapshot.percent_change_24h),
        "market_cap": str(snapshot.market_cap),
        "last_updated": snapshot.last_updated.isoformat(),
    }
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
