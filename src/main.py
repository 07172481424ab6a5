from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence, TextIO

from config import config
from services.quote_service import QuoteLookupService, build_default_service, build_quote_cache
from utils.formatting import strip_markup


def read_commands(args: Sequence[str], stream: TextIO) -> list[str]:
    if args:
        return list(args)
    return [line.strip() for line in stream if line.strip()]


def answer_commands(service: QuoteLookupService, commands: Iterable[str], *, workers: int = 1) -> list[str]:
    if workers <= 1:
        return [service.reply(command) for command in commands]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(service.reply, commands))


def run(commands: Sequence[str], *, plain: bool, workers: int, out: TextIO) -> None:
    settings = config()
    with build_quote_cache(settings) as cache:
        service = build_default_service(settings, cache=cache)
        for reply in answer_commands(service, commands, workers=workers):
            text = strip_markup(reply) if plain else reply
            out.write(text.rstrip("\n") + "\n\n")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Answer SYMBOL-CONVERT commands with CoinMarketCap quotes.")
    parser.add_argument("commands", nargs="*", help="Commands like BTC-USD. Read from stdin, one per line, if omitted.")
    parser.add_argument("--plain", action="store_true", help="Strip HTML markup from the reports.")
    parser.add_argument("--workers", type=int, default=1, help="Number of lookups to run concurrently.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL setting).")
    args = parser.parse_args(argv)

    level = args.log_level or config().log_level
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s %(message)s")

    commands = read_commands(args.commands, sys.stdin)
    run(commands, plain=args.plain, workers=args.workers, out=sys.stdout)


if __name__ == "__main__":
    main()
