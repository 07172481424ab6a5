from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidCommandError

SEPARATOR = "-"
KEY_SEPARATOR = "|"


@dataclass(frozen=True)
class Command:
    """A `SYMBOL-CONVERT` request, both parts uppercased."""

    symbol: str
    convert: str


def parse_command(raw: str) -> Command:
    tokens = raw.strip().upper().split(SEPARATOR)
    if len(tokens) != 2 or not all(tokens):
        raise InvalidCommandError(raw)
    symbol, convert = tokens
    return Command(symbol=symbol, convert=convert)


def cache_key(command: Command) -> str:
    # Delimited so that e.g. BT-CUSD and BTC-USD never share an entry.
    return f"{command.symbol}{KEY_SEPARATOR}{command.convert}"


__all__ = ["Command", "cache_key", "parse_command"]
