from __future__ import annotations

from typing import Any, cast
from unittest.mock import Mock

import pytest
import requests

from services.coinmarketcap_client import CoinMarketCapAPIError, CoinMarketCapClient
from tests.helpers.quote_payloads import quotes_payload


class _StubResponse:
    def __init__(self, content: bytes) -> None:
        self.content = content

    def raise_for_status(self) -> None:  # pragma: no cover - stub never raises
        return None


class _StubSession:
    def __init__(self, content: bytes) -> None:
        self._content = content
        self.last_request: dict[str, Any] | None = None

    def request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> _StubResponse:
        self.last_request = {"method": method, "url": url, "params": params, "timeout": timeout, "headers": headers}
        return _StubResponse(self._content)


def _error_response(payload: Any, status_code: int) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = "payload"
    response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


def test_client_returns_raw_payload_and_sends_credentials() -> None:
    body = quotes_payload()
    stub_session = _StubSession(content=body)
    client = CoinMarketCapClient(
        api_key="cmc-key",
        base_url="https://example.com/",
        session=cast(requests.Session, stub_session),
    )

    raw = client.get_latest_quote_payload(symbol="BTC", convert="USD")

    assert raw == body
    assert stub_session.last_request == {
        "method": "GET",
        "url": "https://example.com/v1/cryptocurrency/quotes/latest",
        "params": {"symbol": "BTC", "convert": "USD"},
        "timeout": 10.0,
        "headers": {"Accepts": "application/json", "X-CMC_PRO_API_KEY": "cmc-key"},
    }


def test_client_requires_api_key() -> None:
    with pytest.raises(ValueError):
        CoinMarketCapClient(api_key="")


def test_client_wraps_http_errors_with_provider_message() -> None:
    session = Mock()
    session.request.return_value = _error_response(
        {"status": {"error_code": 1001, "error_message": "This API Key is invalid."}},
        status_code=401,
    )
    client = CoinMarketCapClient(api_key="bad", session=session)

    with pytest.raises(CoinMarketCapAPIError) as excinfo:
        client.get_latest_quote_payload(symbol="BTC", convert="USD")

    assert str(excinfo.value) == "This API Key is invalid."
    assert excinfo.value.status_code == 401
    session.request.assert_called_once()


def test_client_wraps_http_errors_with_non_json_body() -> None:
    session = Mock()
    response = _error_response({}, status_code=502)
    response.json.side_effect = ValueError("not json")
    session.request.return_value = response
    client = CoinMarketCapClient(api_key="token", session=session)

    with pytest.raises(CoinMarketCapAPIError) as excinfo:
        client.get_latest_quote_payload(symbol="BTC", convert="USD")

    assert excinfo.value.status_code == 502
    assert excinfo.value.payload == "payload"


def test_client_wraps_connection_errors_without_retrying() -> None:
    session = Mock()
    session.request.side_effect = requests.ConnectionError("connection refused")
    client = CoinMarketCapClient(api_key="token", session=session)

    with pytest.raises(CoinMarketCapAPIError) as excinfo:
        client.get_latest_quote_payload(symbol="BTC", convert="USD")

    assert excinfo.value.status_code is None
    assert session.request.call_count == 1
