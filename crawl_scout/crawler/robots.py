# crawl_scout/crawler/robots.py
"""
Retrieval, parsing and evaluation of robots.txt crawl policy.

Only ``User-agent: *`` groups are honoured and disallow rules are matched by
plain prefix (no ``*`` / ``$`` patterns, no ``Allow`` precedence). Every
failure path resolves to a fail-open :class:`RobotsTxtInfo`.
"""
from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from crawl_scout.config import DEFAULT_USER_AGENT
from crawl_scout.crawler.fetcher import AiohttpFetcher
from crawl_scout.crawler.models import FetchResponse, HttpFetcher
from crawl_scout.errors import format_error_for_user
from crawl_scout.logger import get_logger
from crawl_scout.url_guard import origin_of, path_of

__all__ = (
    "ROBOTS_TIMEOUT",
    "AgentState",
    "RobotsTxtInfo",
    "RobotsTxtChecker",
    "default_robots_info",
    "is_path_disallowed",
    "parse_robots",
    "fetch_robots",
)

ROBOTS_TIMEOUT = 5.0

log = get_logger("robots")

_LEADING_INT_RE = re.compile(r"^\+?(\d+)")


class AgentState(Enum):
    """Which ``User-agent:`` line the parser saw last."""

    NO_AGENT_SEEN = "no-agent-seen"
    WILDCARD = "wildcard"
    OTHER = "other"

    @classmethod
    def for_agent(cls, value: str) -> AgentState:
        return cls.WILDCARD if value == "*" else cls.OTHER


@dataclass(frozen=True, slots=True)
class RobotsTxtInfo:
    """Crawl policy for one page, derived from its site's robots.txt."""

    exists: bool
    allows_crawling: bool = True
    crawl_delay: Optional[int] = None
    disallowed_paths: Tuple[str, ...] = ()
    sitemap: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exists": self.exists,
            "allows_crawling": self.allows_crawling,
            "crawl_delay": self.crawl_delay,
            "disallowed_paths": list(self.disallowed_paths),
            "sitemap": self.sitemap,
        }


def default_robots_info(exists: bool) -> RobotsTxtInfo:
    """Fail-open policy: crawling is allowed when the rules are unknown."""
    return RobotsTxtInfo(exists=exists)


def is_path_disallowed(pathname: str, disallowed_paths: Iterable[str]) -> bool:
    """Prefix match of *pathname* against every disallow rule."""
    return any(pathname.startswith(rule) for rule in disallowed_paths)


def _parse_crawl_delay(value: str) -> Optional[int]:
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None


def parse_robots(content: str, pathname: str) -> RobotsTxtInfo:
    """Parse robots.txt *content* and evaluate it for *pathname*.

    Directives that appear before the first ``User-agent:`` line are ignored.
    ``Sitemap:`` is read regardless of the current group and the last one wins.
    """
    try:
        state = AgentState.NO_AGENT_SEEN
        disallowed: List[str] = []
        crawl_delay: Optional[int] = None
        sitemap: Optional[str] = None

        for raw in content.split("\n"):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            directive, sep, value = line.partition(":")
            if not sep:
                continue
            directive = directive.strip().lower()
            value = value.strip()

            if directive == "user-agent":
                state = AgentState.for_agent(value)
            elif directive == "disallow":
                if state is AgentState.WILDCARD and value:
                    disallowed.append(value)
            elif directive == "crawl-delay":
                if state is AgentState.WILDCARD:
                    delay = _parse_crawl_delay(value)
                    if delay is not None:
                        crawl_delay = delay
            elif directive == "sitemap":
                sitemap = value

        return RobotsTxtInfo(
            exists=True,
            allows_crawling=not is_path_disallowed(pathname, disallowed),
            crawl_delay=crawl_delay,
            disallowed_paths=tuple(disallowed),
            sitemap=sitemap,
        )
    except Exception as exc:
        log.error("Error parsing robots.txt: %s", format_error_for_user(exc))
        return default_robots_info(exists=True)


async def _download(
    fetcher: Optional[HttpFetcher], robots_url: str, user_agent: str, timeout: float
) -> FetchResponse:
    if fetcher is None:
        async with AiohttpFetcher() as own:
            return await _download(own, robots_url, user_agent, timeout)
    return await asyncio.wait_for(
        fetcher.request("GET", robots_url, headers={"User-Agent": user_agent}),
        timeout=timeout,
    )


async def fetch_robots(
    url: str,
    *,
    fetcher: Optional[HttpFetcher] = None,
    timeout: float = ROBOTS_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> RobotsTxtInfo:
    """Fetch ``{origin}/robots.txt`` for *url* and evaluate it for the path of *url*.

    Never raises: unparseable URLs, non-2xx responses, transport errors and
    the *timeout* all yield ``RobotsTxtInfo(exists=False)``.
    """
    try:
        origin = origin_of(url)
        if origin is None:
            log.warning("Cannot derive origin from %r, assuming crawling is allowed", url)
            return default_robots_info(exists=False)
        robots_url = f"{origin}/robots.txt"

        response = await _download(fetcher, robots_url, user_agent, timeout)
        if not response.ok:
            log.info("robots.txt unavailable at %s (HTTP %s)", robots_url, response.status)
            return default_robots_info(exists=False)

        return parse_robots(response.text, path_of(url))
    except asyncio.TimeoutError:
        log.warning("robots.txt request for %s timed out after %.1fs", url, timeout)
        return default_robots_info(exists=False)
    except Exception as exc:
        log.warning("Error fetching robots.txt for %s: %s", url, format_error_for_user(exc))
        return default_robots_info(exists=False)


class RobotsTxtChecker:
    """Bundles a fetcher, timeout and user agent for repeated robots lookups."""

    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        *,
        timeout: float = ROBOTS_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.fetcher = fetcher
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch(self, url: str) -> RobotsTxtInfo:
        return await fetch_robots(
            url, fetcher=self.fetcher, timeout=self.timeout, user_agent=self.user_agent
        )

    @staticmethod
    def parse(content: str, pathname: str) -> RobotsTxtInfo:
        return parse_robots(content, pathname)
