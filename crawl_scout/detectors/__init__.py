"""crawl_scout.detectors: Anti-bot, authentication and rate-limit detection over a page snapshot."""

from __future__ import annotations

from crawl_scout.detectors.antibot import AntiBotDetection, detect_anti_bot
from crawl_scout.detectors.auth import AuthDetection, detect_auth
from crawl_scout.detectors.ratelimit import RateLimitDetection, detect_rate_limit

__all__ = [
    "AntiBotDetection",
    "AuthDetection",
    "RateLimitDetection",
    "detect_anti_bot",
    "detect_auth",
    "detect_rate_limit",
]
