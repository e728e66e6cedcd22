# crawl_scout/crawler/fetcher.py
"""
Fetcher module: the default aiohttp-backed implementation of :class:`HttpFetcher`.
"""
from __future__ import annotations

from types import TracebackType
from typing import Mapping, Optional, Type

from aiohttp import ClientSession, ClientTimeout

from crawl_scout.crawler.models import FetchResponse
from crawl_scout.logger import get_logger

log = get_logger("fetcher")


class AiohttpFetcher:
    """Performs single HTTP requests through a shared ClientSession.

    The session is created lazily on first use unless one is passed in; an
    injected session is never closed by the fetcher.
    """

    def __init__(
        self,
        session: Optional[ClientSession] = None,
        *,
        timeout: Optional[float] = None,
        follow_redirects: bool = True,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = timeout
        self._follow_redirects = follow_redirects

    async def __aenter__(self) -> AiohttpFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    def _get_session(self) -> ClientSession:
        if self._session is None or self._session.closed:
            timeout = ClientTimeout(total=self._timeout) if self._timeout else None
            self._session = ClientSession(timeout=timeout) if timeout else ClientSession()
            self._owns_session = True
        return self._session

    async def request(
        self, method: str, url: str, *, headers: Optional[Mapping[str, str]] = None
    ) -> FetchResponse:
        """Issue *method* to *url* and return the decoded response; transport errors propagate."""
        session = self._get_session()
        async with session.request(
            method,
            url,
            headers=dict(headers or {}),
            allow_redirects=self._follow_redirects,
            raise_for_status=False,
        ) as resp:
            text = await resp.text(errors="replace")
            log.debug("%s %s -> %s", method, url, resp.status)
            return FetchResponse(
                url=str(resp.url),
                status=resp.status,
                headers=dict(resp.headers),
                text=text,
            )
