from __future__ import annotations

from typing import Generator, cast

import pytest

from services.coinmarketcap_client import CoinMarketCapClient
from services.quote_cache import InMemoryQuoteCache
from services.quote_service import QuoteLookupService
from tests.helpers.quote_payloads import FakeClock, StubQuoteClient


@pytest.fixture(scope="function")
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def quote_cache(fake_clock: FakeClock) -> Generator[InMemoryQuoteCache, None, None]:
    cache = InMemoryQuoteCache(default_ttl=30, sweep_interval=600, clock=fake_clock)
    yield cache
    cache.close()


@pytest.fixture(scope="function")
def stub_client() -> StubQuoteClient:
    return StubQuoteClient()


@pytest.fixture(scope="function")
def lookup_service(stub_client: StubQuoteClient, quote_cache: InMemoryQuoteCache) -> QuoteLookupService:
    return QuoteLookupService(client=cast(CoinMarketCapClient, stub_client), cache=quote_cache)
