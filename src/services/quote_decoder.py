from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .quote_types import UNKNOWN_TIMESTAMP, ZERO, PriceSnapshot, Quote

logger = logging.getLogger(__name__)


class QuoteDecodeError(ValueError):
    pass


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _Status(_WireModel):
    error_code: int = 0
    # Documented as a string by the provider but observed as null on success; never interpreted.
    error_message: int | str | None = None


class _PriceData(_WireModel):
    price: Decimal = ZERO
    volume_24h: Decimal = ZERO
    percent_change_1h: Decimal = ZERO
    percent_change_24h: Decimal = ZERO
    market_cap: Decimal = ZERO
    last_updated: datetime = UNKNOWN_TIMESTAMP

    @field_validator("price", "volume_24h", "percent_change_1h", "percent_change_24h", "market_cap", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return ZERO if value is None else value

    @field_validator("last_updated", mode="before")
    @classmethod
    def _null_as_unknown(cls, value: Any) -> Any:
        return UNKNOWN_TIMESTAMP if value is None else value


class _AssetData(_WireModel):
    name: str = ""
    symbol: str = ""
    max_supply: Decimal = ZERO
    circulating_supply: Decimal = ZERO
    total_supply: Decimal = ZERO
    quote: dict[str, _PriceData] = Field(default_factory=dict)

    @field_validator("name", "symbol", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("max_supply", "circulating_supply", "total_supply", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any) -> Any:
        return ZERO if value is None else value

    @field_validator("quote", mode="before")
    @classmethod
    def _null_as_no_quotes(cls, value: Any) -> Any:
        return {} if value is None else value


class _QuotesResponse(_WireModel):
    status: _Status = Field(default_factory=_Status)
    data: dict[str, _AssetData] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _null_as_no_data(cls, value: Any) -> Any:
        return {} if value is None else value


def decode_quote(raw: bytes | str, symbol: str, convert: str) -> Quote:
    """Decode a quotes/latest payload into the quote for `symbol` in `convert`.

    An asset or currency missing from an otherwise valid payload is not an
    error: the corresponding fields come back zero-valued.
    """
    try:
        response = _QuotesResponse.model_validate_json(raw)
    except ValidationError as exc:
        raise QuoteDecodeError(f"Unexpected quotes payload for {symbol}-{convert}: {exc}") from exc

    asset = response.data.get(symbol)
    if asset is None:
        logger.warning(
            "Quotes payload has no entry for %s (status code %s), returning empty quote",
            symbol,
            response.status.error_code,
        )
        return Quote.empty(convert)

    price = asset.quote.get(convert)
    if price is None:
        logger.warning("Quotes payload for %s has no %s price, returning empty snapshot", symbol, convert)
        snapshot = PriceSnapshot.empty(convert)
    else:
        snapshot = PriceSnapshot(
            currency=convert,
            price=price.price,
            volume_24h=price.volume_24h,
            percent_change_1h=price.percent_change_1h,
            percent_change_24h=price.percent_change_24h,
            market_cap=price.market_cap,
            last_updated=price.last_updated,
        )

    return Quote(
        name=asset.name,
        symbol=asset.symbol,
        max_supply=asset.max_supply,
        circulating_supply=asset.circulating_supply,
        total_supply=asset.total_supply,
        snapshot=snapshot,
    )


__all__ = ["QuoteDecodeError", "decode_quote"]
