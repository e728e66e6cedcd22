# File: tests/conftest.py
import asyncio
import logging
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple, Union

import pytest

from crawl_scout.config import ScoutConfig
from crawl_scout.crawler.models import FetchResponse, PageSnapshot

FIXED_DAY = date(2024, 3, 9)

_Outcome = Union[FetchResponse, BaseException]


class FakeFetcher:
    """
    In-memory HttpFetcher: answers from *routes*, 404 for unknown URLs.
    With hang=True every request blocks until it is cancelled.
    """

    def __init__(self, routes: Optional[Dict[str, _Outcome]] = None, *, hang: bool = False) -> None:
        self.routes = routes or {}
        self.hang = hang
        self.calls: List[Tuple[str, str, Dict[str, str]]] = []
        self.cancelled = 0

    async def request(
        self, method: str, url: str, *, headers: Optional[Mapping[str, str]] = None
    ) -> FetchResponse:
        self.calls.append((method, url, dict(headers or {})))
        if self.hang:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
        outcome = self.routes.get(url)
        if outcome is None:
            return FetchResponse(url=url, status=404, text="Not Found")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


def ok(url: str, text: str = "", headers: Optional[Dict[str, str]] = None, status: int = 200) -> FetchResponse:
    return FetchResponse(url=url, status=status, headers=headers or {}, text=text)


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests reconfigure the CrawlScout logger; restore the import-time state afterwards."""
    yield
    lg = logging.getLogger("CrawlScout")
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.setLevel(logging.NOTSET)
    lg.propagate = True


@pytest.fixture()
def fixed_today():
    """Clock for to_safe_filename: always FIXED_DAY."""
    return lambda: FIXED_DAY


@pytest.fixture()
def basic_config() -> ScoutConfig:
    """
    Return a basic valid ScoutConfig with short timeouts for tests.
    """
    return ScoutConfig(
        user_agent="TestAgent/1.0",
        timeout=2.0,
        robots_timeout=1.0,
        scan_timeout=5.0,
    )


@pytest.fixture()
def snapshot_factory():
    """Build PageSnapshot instances with sensible defaults."""

    def _make(
        html: str = "<html><body>Hello</body></html>",
        *,
        url: str = "https://example.com/",
        status: Optional[int] = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> PageSnapshot:
        return PageSnapshot(url=url, status=status, headers=headers or {}, html=html)

    return _make
