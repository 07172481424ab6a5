from __future__ import annotations


class QuoteLookupError(Exception):
    """Base for every failure that prevents a lookup from producing a report."""


class InvalidCommandError(QuoteLookupError):
    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid command {raw!r}, expected SYMBOL-CONVERT")
        self.raw = raw


class UpstreamUnavailableError(QuoteLookupError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(QuoteLookupError):
    pass


__all__ = [
    "InvalidCommandError",
    "MalformedResponseError",
    "QuoteLookupError",
    "UpstreamUnavailableError",
]
