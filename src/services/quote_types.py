from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

ZERO = Decimal(0)
UNKNOWN_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class PriceSnapshot:
    """Market data for one asset denominated in a single convert currency."""

    currency: str
    price: Decimal
    volume_24h: Decimal
    percent_change_1h: Decimal
    percent_change_24h: Decimal
    market_cap: Decimal
    last_updated: datetime

    @classmethod
    def empty(cls, currency: str) -> PriceSnapshot:
        return cls(
            currency=currency,
            price=ZERO,
            volume_24h=ZERO,
            percent_change_1h=ZERO,
            percent_change_24h=ZERO,
            market_cap=ZERO,
            last_updated=UNKNOWN_TIMESTAMP,
        )


@dataclass(frozen=True)
class Quote:
    """Asset metadata plus the price snapshot for the requested currency.

    Supply figures of 0 mean the provider does not know them (or the asset is
    uncapped).
    """

    name: str
    symbol: str
    max_supply: Decimal
    circulating_supply: Decimal
    total_supply: Decimal
    snapshot: PriceSnapshot

    @property
    def convert(self) -> str:
        return self.snapshot.currency

    @classmethod
    def empty(cls, currency: str) -> Quote:
        return cls(
            name="",
            symbol="",
            max_supply=ZERO,
            circulating_supply=ZERO,
            total_supply=ZERO,
            snapshot=PriceSnapshot.empty(currency),
        )


__all__ = ["PriceSnapshot", "Quote"]
