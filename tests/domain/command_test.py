from __future__ import annotations

import pytest

from domain.command import Command, cache_key, parse_command
from domain.errors import InvalidCommandError, QuoteLookupError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("BTC-USD", Command(symbol="BTC", convert="USD")),
        ("eth-usd", Command(symbol="ETH", convert="USD")),
        ("Eth-uSd", Command(symbol="ETH", convert="USD")),
        ("  doge-eur\n", Command(symbol="DOGE", convert="EUR")),
    ],
)
def test_parse_command_uppercases_both_tokens(raw: str, expected: Command) -> None:
    assert parse_command(raw) == expected


@pytest.mark.parametrize("raw", ["BTCUSD", "BTC-USD-EUR", "BTC--USD", "-USD", "BTC-", "-", "", "BTC USD", "BTC/USD"])
def test_parse_command_rejects_other_shapes(raw: str) -> None:
    with pytest.raises(InvalidCommandError) as excinfo:
        parse_command(raw)
    assert excinfo.value.raw == raw
    assert isinstance(excinfo.value, QuoteLookupError)


def test_cache_key_is_delimited() -> None:
    assert cache_key(Command(symbol="BTC", convert="USD")) == "BTC|USD"
    assert cache_key(Command(symbol="BT", convert="CUSD")) != cache_key(Command(symbol="BTC", convert="USD"))
