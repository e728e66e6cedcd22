# crawl_scout/detectors/ratelimit.py
"""
Rate-limit detection from status code and rate-limit response headers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from crawl_scout.crawler.models import PageSnapshot
from crawl_scout.errors import format_error_for_user
from crawl_scout.logger import get_logger

__all__ = ("RateLimitDetection", "detect_rate_limit")

log = get_logger("detectors.ratelimit")

# Legacy X- prefixed names first, then the IETF draft names.
_LIMIT_HEADERS = ("x-ratelimit-limit", "x-rate-limit-limit", "ratelimit-limit")
_REMAINING_HEADERS = ("x-ratelimit-remaining", "x-rate-limit-remaining", "ratelimit-remaining")
_RESET_HEADERS = ("x-ratelimit-reset", "x-rate-limit-reset", "ratelimit-reset")
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True, slots=True)
class RateLimitDetection:
    detected: bool = False
    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None
    retry_after: Optional[int] = None
    indicators: Tuple[str, ...] = ()

    @property
    def throttled(self) -> bool:
        """True when the server is refusing requests right now, not just advertising a quota."""
        return self.remaining == 0 or any(
            indicator.startswith(("HTTP 429", "retry-after")) for indicator in self.indicators
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detected": self.detected,
            "throttled": self.throttled,
            "limit": self.limit,
            "remaining": self.remaining,
            "reset": self.reset,
            "retry_after": self.retry_after,
            "indicators": list(self.indicators),
        }


def _int_header(page: PageSnapshot, names: Tuple[str, ...], indicators: List[str]) -> Optional[int]:
    for name in names:
        raw = page.header(name)
        if raw is None:
            continue
        indicators.append(f"{name}: {raw}")
        match = _LEADING_INT_RE.match(raw)
        return int(match.group(1)) if match else None
    return None


def detect_rate_limit(page: PageSnapshot) -> RateLimitDetection:
    """Report rate limiting advertised by headers or enforced with HTTP 429."""
    try:
        indicators: List[str] = []
        if page.status == 429:
            indicators.append("HTTP 429 Too Many Requests")

        limit = _int_header(page, _LIMIT_HEADERS, indicators)
        remaining = _int_header(page, _REMAINING_HEADERS, indicators)
        reset = _int_header(page, _RESET_HEADERS, indicators)

        retry_after: Optional[int] = None
        raw_retry = page.header("retry-after")
        if raw_retry is not None:
            indicators.append(f"retry-after: {raw_retry}")
            # HTTP-date values are kept as an indicator only.
            if raw_retry.strip().isdigit():
                retry_after = int(raw_retry.strip())

        return RateLimitDetection(
            detected=bool(indicators),
            limit=limit,
            remaining=remaining,
            reset=reset,
            retry_after=retry_after,
            indicators=tuple(indicators),
        )
    except Exception as exc:
        log.error("Error detecting rate limits: %s", format_error_for_user(exc))
        return RateLimitDetection()
