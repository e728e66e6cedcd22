# File: tests/test_errors.py
import asyncio

import pytest
from aiohttp import ClientConnectionError

from crawl_scout.errors import (
    CrawlScoutError,
    InvalidUrlError,
    create_error,
    extract_error_message,
    format_error_for_user,
    is_network_error,
    is_timeout_error,
)


@pytest.mark.parametrize(
    "error,message",
    [
        (ValueError("bad value"), "bad value"),
        ("plain string", "plain string"),
        (42, "An unknown error occurred"),
        (None, "An unknown error occurred"),
        (asyncio.TimeoutError(), "TimeoutError"),
    ],
)
def test_extract_error_message(error, message):
    assert extract_error_message(error) == message


@pytest.mark.parametrize(
    "error",
    [asyncio.TimeoutError(), TimeoutError("x"), RuntimeError("Request timed out"), "Navigation timeout of 30000 ms"],
)
def test_is_timeout_error(error):
    assert is_timeout_error(error) is True


@pytest.mark.parametrize(
    "error",
    [
        ClientConnectionError("boom"),
        ConnectionRefusedError(),
        RuntimeError("getaddrinfo ENOTFOUND example.invalid"),
        "net::ERR_CONNECTION_RESET",
    ],
)
def test_is_network_error(error):
    assert is_network_error(error) is True


def test_plain_error_is_neither():
    error = ValueError("bad value")
    assert not is_timeout_error(error)
    assert not is_network_error(error)


@pytest.mark.parametrize(
    "error,formatted",
    [
        (asyncio.TimeoutError(), "Timeout: TimeoutError"),
        (RuntimeError("connection reset"), "Network error: connection reset"),
        (ValueError("bad value"), "Error: bad value"),
    ],
)
def test_format_error_for_user(error, formatted):
    assert format_error_for_user(error) == formatted


def test_create_error_attaches_context():
    error = create_error("robots failed", url="https://example.com", status=500)
    assert isinstance(error, CrawlScoutError)
    assert str(error) == "robots failed"
    assert error.url == "https://example.com"
    assert error.context == {"url": "https://example.com", "status": 500}


def test_invalid_url_error_is_value_error():
    error = InvalidUrlError("nope", url="javascript:alert(1)")
    assert isinstance(error, ValueError)
    assert error.url == "javascript:alert(1)"
