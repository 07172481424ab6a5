from __future__ import annotations

import logging
from typing import Any

import requests
from requests import Response

logger = logging.getLogger(__name__)

# API docs: https://coinmarketcap.com/api/documentation/v1/#operation/getV1CryptocurrencyQuotesLatest
QUOTES_LATEST_PATH = "/v1/cryptocurrency/quotes/latest"


class CoinMarketCapAPIError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class CoinMarketCapClient:
    """Fetches raw quote payloads from the CoinMarketCap Pro API. No retries."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://pro-api.coinmarketcap.com",
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            msg = "api_key must be provided"
            raise ValueError(msg)

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def get_latest_quote_payload(self, *, symbol: str, convert: str) -> bytes:
        if not symbol:
            raise ValueError("symbol must be provided")
        if not convert:
            raise ValueError("convert must be provided")

        params = {"symbol": symbol, "convert": convert}
        response = self._request("GET", QUOTES_LATEST_PATH, params=params)
        return response.content

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Response:
        url = f"{self.base_url}{path}"
        logger.debug("CoinMarketCap %s %s params=%s", method, url, params)
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                timeout=self.timeout,
                headers={
                    "Accepts": "application/json",
                    "X-CMC_PRO_API_KEY": self.api_key,
                },
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            resp = exc.response
            status_code = getattr(resp, "status_code", None)
            message, payload = self._extract_error(resp)
            logger.warning("CoinMarketCap request failed with status %s: %s", status_code, message)
            raise CoinMarketCapAPIError(message, status_code=status_code, payload=payload) from exc
        except requests.RequestException as exc:
            status_code = getattr(getattr(exc, "response", None), "status_code", None)
            logger.warning("CoinMarketCap request failed: %s", exc)
            raise CoinMarketCapAPIError("CoinMarketCap API request failed", status_code=status_code) from exc

        return response

    @staticmethod
    def _extract_error(response: Response | None) -> tuple[str, Any]:
        message = "CoinMarketCap API request failed"
        if response is None:
            return message, None
        try:
            payload = response.json()
            status = payload.get("status") if isinstance(payload, dict) else None
            if isinstance(status, dict) and status.get("error_message"):
                message = str(status["error_message"])
        except ValueError:
            payload = response.text
        return message, payload


__all__ = ["CoinMarketCapAPIError", "CoinMarketCapClient"]
