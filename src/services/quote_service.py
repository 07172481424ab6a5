from __future__ import annotations

import logging
from typing import Callable

from config import AppSettings, config
from domain.command import Command, cache_key, parse_command
from domain.errors import MalformedResponseError, QuoteLookupError, UpstreamUnavailableError
from utils.formatting import render_quote_report

from .coinmarketcap_client import CoinMarketCapAPIError, CoinMarketCapClient
from .quote_cache import InMemoryQuoteCache, QuoteCache
from .quote_decoder import QuoteDecodeError, decode_quote
from .quote_types import Quote

logger = logging.getLogger(__name__)

WRONG_COMMAND_MESSAGE = "You have entered wrong command. Please enter command like BTC-USD."

QuoteDecoder = Callable[[bytes | str, str, str], Quote]


class QuoteLookupService:
    def __init__(
        self,
        *,
        client: CoinMarketCapClient,
        cache: QuoteCache,
        decoder: QuoteDecoder = decode_quote,
        ttl: float | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.decoder = decoder
        self.ttl = ttl

    def lookup(self, raw_command: str) -> str:
        """Answer a `SYMBOL-CONVERT` command with a rendered report.

        Raises one of the `QuoteLookupError` subclasses when no report can be
        produced; nothing is cached in that case.
        """
        command = parse_command(raw_command)
        quote = self.get_quote(command)
        return render_quote_report(quote, command.convert)

    def get_quote(self, command: Command) -> Quote:
        key = cache_key(command)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Quote cache hit for %s", key)
            return cached

        try:
            payload = self.client.get_latest_quote_payload(symbol=command.symbol, convert=command.convert)
        except CoinMarketCapAPIError as exc:
            raise UpstreamUnavailableError(
                f"Quote provider unavailable for {command.symbol}-{command.convert}: {exc}",
                status_code=exc.status_code,
            ) from exc

        try:
            quote = self.decoder(payload, command.symbol, command.convert)
        except QuoteDecodeError as exc:
            raise MalformedResponseError(str(exc)) from exc

        self.cache.put(key, quote, self.ttl)
        return quote

    def reply(self, raw_command: str) -> str:
        """Like `lookup`, but every failure becomes the generic help message."""
        try:
            return self.lookup(raw_command)
        except QuoteLookupError as exc:
            logger.info("Lookup for %r failed (%s): %s", raw_command, type(exc).__name__, exc)
            return WRONG_COMMAND_MESSAGE


def build_quote_cache(settings: AppSettings) -> InMemoryQuoteCache:
    return InMemoryQuoteCache(
        default_ttl=settings.quote_cache_ttl_seconds,
        sweep_interval=settings.quote_cache_sweep_seconds,
    )


def build_default_service(
    settings: AppSettings | None = None,
    *,
    cache: QuoteCache | None = None,
) -> QuoteLookupService:
    settings = settings or config()
    client = CoinMarketCapClient(
        api_key=settings.coinmarketcap_api_key,
        base_url=settings.coinmarketcap_base_url,
        timeout=settings.request_timeout_seconds,
    )
    if cache is None:
        default_cache = build_quote_cache(settings)
        default_cache.start()
        cache = default_cache
    return QuoteLookupService(client=client, cache=cache, ttl=settings.quote_cache_ttl_seconds)


__all__ = ["WRONG_COMMAND_MESSAGE", "QuoteLookupService", "build_default_service", "build_quote_cache"]
