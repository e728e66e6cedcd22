# File: crawl_scout/aggregator.py
"""crawl_scout.aggregator: Сборка результатов детекторов в единый отчёт о препятствиях."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from crawl_scout.crawler.models import PageSnapshot
from crawl_scout.crawler.robots import RobotsTxtInfo
from crawl_scout.detectors import AntiBotDetection, AuthDetection, RateLimitDetection


@dataclass(frozen=True, slots=True)
class ObstacleReport:
    """Препятствия для краулера на одной странице: защита от ботов, авторизация, лимиты, robots.txt."""

    url: str
    status: Optional[int]
    anti_bot: AntiBotDetection
    auth: AuthDetection
    rate_limit: RateLimitDetection
    robots: RobotsTxtInfo
    filename: str

    @property
    def blocked(self) -> bool:
        """True, если хотя бы одно препятствие мешает обходу страницы."""
        return (
            self.anti_bot.detected
            or self.auth.required
            or self.rate_limit.throttled
            or not self.robots.allows_crawling
        )

    def summary(self) -> List[str]:
        """Короткий список найденных препятствий для вывода в CLI."""
        lines: List[str] = list(self.anti_bot.details)
        if self.auth.required:
            lines.append(f"Authentication required ({self.auth.type or 'unknown'})")
        if self.rate_limit.detected:
            lines.append("Rate limiting " + ("enforced" if self.rate_limit.throttled else "advertised"))
        if not self.robots.allows_crawling:
            lines.append("Disallowed by robots.txt")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status,
            "blocked": self.blocked,
            "anti_bot": self.anti_bot.to_dict(),
            "auth": self.auth.to_dict(),
            "rate_limit": self.rate_limit.to_dict(),
            "robots": self.robots.to_dict(),
            "filename": self.filename,
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    snapshot: PageSnapshot,
    *,
    anti_bot: AntiBotDetection,
    auth: AuthDetection,
    rate_limit: RateLimitDetection,
    robots: RobotsTxtInfo,
    filename: str,
) -> ObstacleReport:
    """Собирает все части отчёта в ObstacleReport."""
    return ObstacleReport(
        url=snapshot.url,
        status=snapshot.status,
        anti_bot=anti_bot,
        auth=auth,
        rate_limit=rate_limit,
        robots=robots,
        filename=filename,
    )


__all__ = ["ObstacleReport", "aggregate_results"]
