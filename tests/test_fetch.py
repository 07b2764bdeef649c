from unittest.mock import MagicMock, patch

import pytest
import requests

from doorman.errors import FetchError
from doorman.fetch import DEFAULT_KEYS_URL, fetch_keys, keys_url


def test_keys_url_default_template():
    assert keys_url("alice") == "https://github.com/alice.keys"


def test_keys_url_quotes_identity():
    assert keys_url("a/../b") == "https://github.com/a%2F..%2Fb.keys"


def test_keys_url_custom_template():
    assert keys_url("alice", "https://gitlab.example.com/{identity}.keys") == (
        "https://gitlab.example.com/alice.keys"
    )


@patch("doorman.fetch.requests.get")
def test_fetch_keys_success(mock_get):
    mock_get.return_value = MagicMock(status_code=200, content=b"ssh-ed25519 AAAA1\n")
    assert fetch_keys("alice", timeout=5) == b"ssh-ed25519 AAAA1\n"
    mock_get.assert_called_once()
    assert mock_get.call_args[0][0] == "https://github.com/alice.keys"
    assert mock_get.call_args[1]["timeout"] == 5
    assert mock_get.call_args[1]["headers"]["User-Agent"].startswith("doorman/")


@patch("doorman.fetch.requests.get")
def test_fetch_keys_empty_body_is_not_an_error(mock_get):
    mock_get.return_value = MagicMock(status_code=200, content=b"")
    assert fetch_keys("alice") == b""


@pytest.mark.parametrize("status_code", [404, 429, 500])
@patch("doorman.fetch.requests.get")
def test_fetch_keys_http_error(mock_get, status_code):
    mock_get.return_value = MagicMock(status_code=status_code, content=b"Not Found")
    with pytest.raises(FetchError, match=f"HTTP {status_code}"):
        fetch_keys("alice")


@patch("doorman.fetch.requests.get")
def test_fetch_keys_network_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(FetchError, match="connection refused") as excinfo:
        fetch_keys("alice")
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


@patch("doorman.fetch.requests.get")
def test_fetch_keys_timeout(mock_get):
    mock_get.side_effect = requests.Timeout("read timed out")
    with pytest.raises(FetchError):
        fetch_keys("alice", url_template=DEFAULT_KEYS_URL, timeout=0.1)
    assert mock_get.call_count == 1
