# crawl_scout/detectors/auth.py
"""
Authentication wall detection.

Strong evidence (401/403, ``WWW-Authenticate``, a password field, landing on
an OAuth/SSO endpoint) marks the page as requiring authentication; login
links and keywords are only recorded as indicators.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from bs4.element import Tag

from crawl_scout.crawler.models import PageSnapshot
from crawl_scout.errors import format_error_for_user
from crawl_scout.logger import get_logger
from crawl_scout.parser.html_parser import ParsedPage, parse_html

__all__ = ("AUTH_TYPES", "AuthDetection", "detect_auth")

log = get_logger("detectors.auth")

AUTH_TYPES = ("basic", "bearer", "oauth", "sso", "form", "api-key")

_STATUS_REASONS = {401: "Unauthorized", 403: "Forbidden"}
_CHALLENGE_TYPES = {"basic": "basic", "bearer": "bearer", "apikey": "api-key", "api-key": "api-key"}
_API_KEY_HEADERS = ("x-api-key", "api-key")
_LOGIN_KEYWORDS = (
    "login",
    "log in",
    "signin",
    "sign in",
    "authenticate",
    "authentication required",
)
_API_KEY_TEXT_RE = re.compile(r"\bapi[\s_-]?key\b", re.IGNORECASE)
_OAUTH_RE = re.compile(r"oauth|/authorize\b", re.IGNORECASE)
_SSO_RE = re.compile(r"(?:^|[./])sso(?:[./]|$)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class AuthDetection:
    required: bool = False
    type: Optional[str] = None
    login_url: Optional[str] = None
    indicators: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type is not None and self.type not in AUTH_TYPES:
            raise ValueError(f"Unknown auth type {self.type!r}; expected one of {AUTH_TYPES}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required": self.required,
            "type": self.type,
            "login_url": self.login_url,
            "indicators": list(self.indicators),
        }


def _identity_provider(url: str) -> Optional[str]:
    """Return ``"oauth"``/``"sso"`` when *url* points at an identity provider."""
    parts = urlsplit(url)
    target = f"{parts.netloc}{parts.path}"
    if _OAUTH_RE.search(target):
        return "oauth"
    if _SSO_RE.search(parts.netloc) or _SSO_RE.search(parts.path):
        return "sso"
    return None


def _password_form(parsed: ParsedPage) -> Tuple[Optional[Tag], Optional[Tag]]:
    for field in parsed.soup.find_all("input"):
        if isinstance(field, Tag) and str(field.get("type", "")).lower() == "password":
            form = field.find_parent("form")
            return field, form if isinstance(form, Tag) else None
    return None, None


class _Evidence:
    """Collects indicators; the first strong signal decides type and login URL."""

    def __init__(self) -> None:
        self.required = False
        self.type: Optional[str] = None
        self.login_url: Optional[str] = None
        self.indicators: List[str] = []

    def strong(self, indicator: str, auth_type: Optional[str] = None, login_url: Optional[str] = None) -> None:
        self.required = True
        self.weak(indicator, auth_type, login_url)

    def weak(self, indicator: str, auth_type: Optional[str] = None, login_url: Optional[str] = None) -> None:
        self.indicators.append(indicator)
        if self.type is None and auth_type is not None and self.required:
            self.type = auth_type
        if self.login_url is None and login_url is not None:
            self.login_url = login_url

    def result(self) -> AuthDetection:
        return AuthDetection(
            required=self.required,
            type=self.type if self.required else None,
            login_url=self.login_url,
            indicators=tuple(self.indicators),
        )


def detect_auth(page: PageSnapshot) -> AuthDetection:
    """Classify whether *page* sits behind an authentication wall."""
    try:
        parsed = parse_html(page)
        evidence = _Evidence()

        challenge = page.header("www-authenticate")
        if challenge:
            scheme = challenge.split(None, 1)[0].lower() if challenge.strip() else ""
            evidence.strong(f"WWW-Authenticate challenge ({challenge.strip()})", _CHALLENGE_TYPES.get(scheme))

        if page.status in _STATUS_REASONS:
            evidence.strong(f"HTTP {page.status} {_STATUS_REASONS[page.status]}")

        for name in _API_KEY_HEADERS:
            if page.header(name) is not None:
                evidence.strong(f"API key header ({name})", "api-key")
                break
        if page.status in _STATUS_REASONS and _API_KEY_TEXT_RE.search(parsed.text):
            evidence.strong("API key requested in response body", "api-key")

        field, form = _password_form(parsed)
        if field is not None:
            action = form.get("action") if form is not None else None
            login_url = urljoin(page.url, action) if isinstance(action, str) and action.strip() else page.url
            evidence.strong("Login form detected (password field)", "form", login_url)

        provider = _identity_provider(page.url)
        if provider is not None:
            evidence.strong(f"Page is served by an {provider.upper()} endpoint", provider, page.url)

        for link in parsed.links:
            link_provider = _identity_provider(link)
            if link_provider is not None:
                evidence.weak(f"{link_provider.upper()} login link ({link})", link_provider, link)
                break

        haystack = f"{parsed.title} {parsed.text}".lower()
        for keyword in _LOGIN_KEYWORDS:
            if keyword in haystack:
                evidence.weak(f"Authentication keyword '{keyword}' in page text")
                break

        return evidence.result()
    except Exception as exc:
        log.error("Error detecting authentication: %s", format_error_for_user(exc))
        return AuthDetection()
