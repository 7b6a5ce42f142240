"""Unit tests for HTTP timeout and retry logic."""

from unittest.mock import Mock, patch

import pytest
from requests.exceptions import ConnectionError, HTTPError, Timeout

from btc_wallet.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
    classify_error,
    create_network_error,
    should_retry,
)


def http_error(status_code):
    response = Mock()
    response.status_code = status_code
    return HTTPError(response=response)


class TestRetryConfig:
    def test_calculate_delay_exponential_growth(self):
        config = RetryConfig(base_delay=1.0, exponential_base=2.0, max_delay=30.0)
        assert config.calculate_delay(0) == 1.0
        assert config.calculate_delay(1) == 2.0
        assert config.calculate_delay(2) == 4.0

    def test_calculate_delay_respects_max_delay(self):
        config = RetryConfig(base_delay=1.0, exponential_base=2.0, max_delay=10.0)
        assert config.calculate_delay(5) == 10.0


class TestTimeoutConfig:
    def test_request_timeout_tuple(self):
        assert TimeoutConfig(connect_timeout=3.0, read_timeout=7.0).request_timeout == (3.0, 7.0)


class TestClassifyError:
    def test_timeout(self):
        assert classify_error(Timeout()) is NetworkErrorType.TIMEOUT

    def test_connection(self):
        assert classify_error(ConnectionError()) is NetworkErrorType.CONNECTION_ERROR

    def test_http(self):
        assert classify_error(http_error(500)) is NetworkErrorType.HTTP_ERROR

    def test_invalid_json(self):
        assert classify_error(ValueError("bad json")) is NetworkErrorType.INVALID_RESPONSE

    def test_unknown(self):
        assert classify_error(RuntimeError()) is NetworkErrorType.UNKNOWN


class TestCreateNetworkError:
    def test_http_error_keeps_status(self):
        error = create_network_error(http_error(503), "https://api.example", "Price")
        assert error.status_code == 503
        assert str(error) == "Price: HTTP error 503"

    def test_timeout_message(self):
        error = create_network_error(Timeout(), "https://api.example")
        assert "timed out" in str(error)


class TestShouldRetry:
    def test_retryable(self):
        config = RetryConfig()
        assert should_retry(Timeout(), config) is True
        assert should_retry(ConnectionError(), config) is True
        assert should_retry(http_error(429), config) is True

    def test_not_retryable(self):
        config = RetryConfig()
        assert should_retry(http_error(404), config) is False
        assert should_retry(ValueError(), config) is False


class TestNetworkClient:
    def test_strips_trailing_slash(self):
        assert NetworkClient("https://api.example/").base_url == "https://api.example"

    @patch("btc_wallet.shared.network.requests.get")
    def test_get_success(self, mock_get):
        response = Mock()
        response.json.return_value = {"ok": True}
        response.raise_for_status.return_value = None
        mock_get.return_value = response

        client = NetworkClient("https://api.example")
        assert client.get("/ping", params={"a": 1}) == {"ok": True}
        mock_get.assert_called_once_with(
            "https://api.example/ping",
            timeout=client.timeout_config.request_timeout,
            params={"a": 1},
        )

    @patch("btc_wallet.shared.network.time.sleep")
    @patch("btc_wallet.shared.network.requests.get")
    def test_retries_then_raises(self, mock_get, mock_sleep):
        mock_get.side_effect = Timeout()
        on_retry = Mock()
        client = NetworkClient(
            "https://api.example",
            retry_config=RetryConfig(max_retries=2, base_delay=0.5),
            on_retry=on_retry,
        )

        with pytest.raises(NetworkError) as exc_info:
            client.get("/ping", context="Ping")

        assert exc_info.value.error_type is NetworkErrorType.TIMEOUT
        assert mock_get.call_count == 3
        assert on_retry.call_count == 2
        mock_sleep.assert_any_call(0.5)

    @patch("btc_wallet.shared.network.time.sleep")
    @patch("btc_wallet.shared.network.requests.get")
    def test_no_retry_on_client_error(self, mock_get, mock_sleep):
        response = Mock()
        response.raise_for_status.side_effect = http_error(404)
        mock_get.return_value = response

        with pytest.raises(NetworkError) as exc_info:
            NetworkClient("https://api.example").get("/missing")

        assert exc_info.value.status_code == 404
        assert mock_get.call_count == 1
        mock_sleep.assert_not_called()
