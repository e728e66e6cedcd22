# === FILE: crawl_scout/parser/html_parser.py ===
"""HTML parsing utilities for CrawlScout.

:func:`parse_html` turns a page snapshot (or raw markup) into a
:class:`ParsedPage` exposing what the detectors look at:

* title: document <title> text or ``""`` if absent.
* links: absolute URLs found in <a href="…"> tags.
* scripts: absolute ``src`` URLs of <script> tags.
* text: visible text (usable for quick keyword checks).
* soup: the parsed tree itself, for CSS-selector checks.

The tree is never mutated, so selectors still see <noscript>/<template>
content that the visible text skips.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Comment, Tag

__all__: Sequence[str] = ("ParsedPage", "parse_html")

_INVISIBLE_TAGS = frozenset({"script", "style", "noscript", "template", "head"})


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    url: str
    title: str
    links: list[str]
    scripts: list[str]
    text: str
    soup: BeautifulSoup

    def select_one(self, selector: str) -> Tag | None:
        found = self.soup.select_one(selector)
        return found if isinstance(found, Tag) else None


def _absolute_attrs(soup: BeautifulSoup, tag: str, attr: str, base_url: str) -> list[str]:
    """Absolute, deduplicated values of *attr* on every *tag*, in document order."""
    seen: set[str] = set()
    values: list[str] = []
    for element in soup.find_all(tag):
        if not isinstance(element, Tag):
            continue
        raw = element.get(attr)
        if not isinstance(raw, str) or not raw.strip():
            continue
        raw = raw.strip()
        if raw.lower().startswith(("mailto:", "javascript:")):
            continue
        absolute = urljoin(base_url, raw)
        if absolute not in seen:
            seen.add(absolute)
            values.append(absolute)
    return values


def _visible_text(soup: BeautifulSoup) -> str:
    parts: list[str] = []
    for node in soup.find_all(string=True):
        if isinstance(node, Comment):
            continue
        if node.parent is not None and node.parent.name in _INVISIBLE_TAGS:
            continue
        stripped = node.strip()
        if stripped:
            parts.append(stripped)
    return " ".join(parts)


def parse_html(page: Any) -> ParsedPage:
    """Parse raw HTML (string) or any object with ``url`` and ``html`` attributes."""
    if hasattr(page, "html") and hasattr(page, "url"):
        html = page.html or ""
        base_url = str(page.url)
    else:
        html = str(page)
        base_url = ""

    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    return ParsedPage(
        url=base_url,
        title=title,
        links=_absolute_attrs(soup, "a", "href", base_url),
        scripts=_absolute_attrs(soup, "script", "src", base_url),
        text=_visible_text(soup),
        soup=soup,
    )
