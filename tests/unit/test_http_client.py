"""HTTPクライアントのテスト"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from gmaps_geocoder.shared.exceptions.errors import HTTPError
from gmaps_geocoder.shared.http.client import HTTPClient


def test_request_returns_non_2xx_response() -> None:
    """非2xxでも例外にせずレスポンスを返す"""
    client = HTTPClient(timeout=5)
    mock_response = MagicMock(status_code=500, content=b"")

    with patch.object(client.session, "request", return_value=mock_response) as mock_request:
        response = client.request("GET", "https://example.com/geocode", params={"address": "x"})

    assert response is mock_response
    mock_request.assert_called_once_with(
        "GET",
        "https://example.com/geocode",
        params={"address": "x"},
        headers=None,
        timeout=5,
    )


def test_request_exception_is_wrapped() -> None:
    """通信失敗はHTTPErrorに変換する"""
    client = HTTPClient()

    with patch.object(client.session, "request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(HTTPError) as exc_info:
            client.request("GET", "https://example.com/geocode")

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_retry_configuration() -> None:
    """リトライ設定がアダプターに反映される"""
    client = HTTPClient(max_retries=5, backoff_factor=1.0, user_agent="test-agent")

    retries = client.session.get_adapter("https://maps.googleapis.com").max_retries

    assert retries.total == 5
    assert retries.backoff_factor == 1.0
    assert retries.raise_on_status is False
    assert 503 in retries.status_forcelist
    assert client.session.headers["User-Agent"] == "test-agent"


def test_context_manager_closes_session() -> None:
    """with文で使うとセッションをクローズする"""
    client = HTTPClient()

    with patch.object(client.session, "close") as mock_close:
        with client as entered:
            assert entered is client

    mock_close.assert_called_once()
