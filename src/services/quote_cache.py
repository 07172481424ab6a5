from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from types import TracebackType
from typing import Callable, Protocol

from .quote_types import Quote

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30.0
DEFAULT_SWEEP_INTERVAL_SECONDS = 600.0


class QuoteCache(Protocol):
    def get(self, key: str) -> Quote | None: ...

    def put(self, key: str, quote: Quote, ttl: float | None = None) -> None: ...


@dataclass(frozen=True)
class _CacheEntry:
    quote: Quote
    expires_at: float


class InMemoryQuoteCache(QuoteCache):
    """Thread-safe TTL cache of decoded quotes.

    Expired entries are treated as misses on read. A background sweeper, once
    started, drops them periodically so that idle keys do not pile up.
    """

    def __init__(
        self,
        *,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be > 0")
        if sweep_interval <= 0:
            raise ValueError("sweep_interval must be > 0")

        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None

    def get(self, key: str) -> Quote | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.quote

    def put(self, key: str, quote: Quote, ttl: float | None = None) -> None:
        ttl_seconds = self.default_ttl if ttl is None else ttl
        if ttl_seconds <= 0:
            raise ValueError("ttl must be > 0")
        entry = _CacheEntry(quote=quote, expires_at=self._clock() + ttl_seconds)
        with self._lock:
            self._entries[key] = entry

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def start(self) -> None:
        if self._sweeper is not None:
            return
        self._stop.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, name="quote-cache-sweeper", daemon=True)
        self._sweeper.start()

    def close(self) -> None:
        sweeper = self._sweeper
        if sweeper is None:
            return
        self._stop.set()
        sweeper.join()
        self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self.sweep_interval):
            purged = self.purge_expired()
            if purged:
                logger.debug("Purged %d expired quote(s)", purged)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __enter__(self) -> InMemoryQuoteCache:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["InMemoryQuoteCache", "QuoteCache"]
