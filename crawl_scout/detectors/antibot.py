# crawl_scout/detectors/antibot.py
"""
Anti-bot protection detection from response headers and page markup.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from crawl_scout.crawler.models import PageSnapshot
from crawl_scout.errors import format_error_for_user
from crawl_scout.logger import get_logger
from crawl_scout.parser.html_parser import ParsedPage, parse_html

__all__ = ("AntiBotDetection", "detect_anti_bot")

log = get_logger("detectors.antibot")


@dataclass(frozen=True, slots=True)
class AntiBotDetection:
    cloudflare: bool = False
    recaptcha: bool = False
    hcaptcha: bool = False
    datadome: bool = False
    perimeter81: bool = False
    details: Tuple[str, ...] = ()

    @property
    def detected(self) -> bool:
        return any((self.cloudflare, self.recaptcha, self.hcaptcha, self.datadome, self.perimeter81))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cloudflare": self.cloudflare,
            "recaptcha": self.recaptcha,
            "hcaptcha": self.hcaptcha,
            "datadome": self.datadome,
            "perimeter81": self.perimeter81,
            "details": list(self.details),
        }


def _has_script(parsed: ParsedPage, *needles: str) -> bool:
    return any(needle in src.lower() for src in parsed.scripts for needle in needles)


def _server(page: PageSnapshot) -> str:
    return (page.header("server") or "").lower()


def _detect_cloudflare(page: PageSnapshot, details: List[str]) -> bool:
    if page.header("cf-ray"):
        details.append("Cloudflare (cf-ray header detected)")
        return True
    if page.header("cf-cache-status"):
        details.append("Cloudflare (cf-cache-status header detected)")
        return True
    if "cloudflare" in _server(page):
        details.append("Cloudflare (server header)")
        return True
    return False


def _detect_recaptcha(parsed: ParsedPage, details: List[str]) -> bool:
    if (
        _has_script(parsed, "recaptcha", "gstatic.com")
        or parsed.select_one(".g-recaptcha") is not None
        or parsed.select_one("[data-sitekey]") is not None
    ):
        details.append("reCAPTCHA detected")
        return True
    return False


def _detect_hcaptcha(parsed: ParsedPage, details: List[str]) -> bool:
    if (
        _has_script(parsed, "hcaptcha.com")
        or parsed.select_one(".h-captcha") is not None
        or parsed.select_one("[data-hcaptcha-response]") is not None
    ):
        details.append("hCaptcha detected")
        return True
    return False


def _detect_datadome(page: PageSnapshot, parsed: ParsedPage, details: List[str]) -> bool:
    if page.header("x-datadome-cid") or page.header("x-dd-b") or "datadome" in _server(page):
        details.append("DataDome (headers detected)")
        return True
    if _has_script(parsed, "datadome.co"):
        details.append("DataDome (script detected)")
        return True
    return False


def _detect_perimeter81(page: PageSnapshot, parsed: ParsedPage, details: List[str]) -> bool:
    if page.header("x-per-request-id") or page.header("x-per-session-id"):
        details.append("Perimeter81 (headers detected)")
        return True
    if _has_script(parsed, "perimeter81"):
        details.append("Perimeter81 (script detected)")
        return True
    return False


def detect_anti_bot(page: PageSnapshot) -> AntiBotDetection:
    """Detect known anti-bot vendors; an empty detection is returned on any error."""
    try:
        parsed = parse_html(page)
        details: List[str] = []
        return AntiBotDetection(
            cloudflare=_detect_cloudflare(page, details),
            recaptcha=_detect_recaptcha(parsed, details),
            hcaptcha=_detect_hcaptcha(parsed, details),
            datadome=_detect_datadome(page, parsed, details),
            perimeter81=_detect_perimeter81(page, parsed, details),
            details=tuple(details),
        )
    except Exception as exc:
        log.error("Error detecting anti-bot measures: %s", format_error_for_user(exc))
        return AntiBotDetection()
