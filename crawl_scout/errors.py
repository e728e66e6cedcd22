# crawl_scout/errors.py
"""
Error types and helpers for classifying failures into user-facing messages.
"""
from __future__ import annotations

import asyncio
from typing import Any

from aiohttp import ClientConnectionError

__all__ = (
    "CrawlScoutError",
    "InvalidUrlError",
    "create_error",
    "extract_error_message",
    "is_timeout_error",
    "is_network_error",
    "format_error_for_user",
)

_NETWORK_MARKERS = ("net::", "network", "connection", "enotfound", "econnrefused")


class CrawlScoutError(Exception):
    """Base error for the package; keyword context is kept as attributes."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context)
        for key, value in context.items():
            setattr(self, key, value)


class InvalidUrlError(CrawlScoutError, ValueError):
    """Raised by outer surfaces when a URL is rejected by the guard."""


def create_error(message: str, **context: Any) -> CrawlScoutError:
    """Build a :class:`CrawlScoutError` carrying *context* as attributes."""
    return CrawlScoutError(message, **context)


def extract_error_message(error: object) -> str:
    """Return a readable message for an exception, a string or anything else."""
    if isinstance(error, BaseException):
        message = str(error)
        return message or type(error).__name__
    if isinstance(error, str):
        return error
    return "An unknown error occurred"


def is_timeout_error(error: object) -> bool:
    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return True
    message = extract_error_message(error).lower()
    return "timeout" in message or "timed out" in message


def is_network_error(error: object) -> bool:
    if isinstance(error, (ClientConnectionError, ConnectionError)):
        return True
    message = extract_error_message(error).lower()
    return any(marker in message for marker in _NETWORK_MARKERS)


def format_error_for_user(error: object) -> str:
    """Prefix the message with the failure category."""
    message = extract_error_message(error)
    if is_timeout_error(error):
        return f"Timeout: {message}"
    if is_network_error(error):
        return f"Network error: {message}"
    return f"Error: {message}"
