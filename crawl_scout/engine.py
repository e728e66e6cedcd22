# File: crawl_scout/engine.py
"""crawl_scout.engine: Оркестрация инспекции страницы: загрузка, детекторы, robots.txt, отчёт."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Callable, Optional

from crawl_scout.aggregator import ObstacleReport, aggregate_results
from crawl_scout.config import ScoutConfig, load_config
from crawl_scout.crawler.fetcher import AiohttpFetcher
from crawl_scout.crawler.models import HttpFetcher, PageSnapshot
from crawl_scout.crawler.robots import fetch_robots
from crawl_scout.detectors import detect_anti_bot, detect_auth, detect_rate_limit
from crawl_scout.errors import InvalidUrlError, format_error_for_user
from crawl_scout.logger import logger
from crawl_scout.url_guard import prepare_url, to_safe_filename

__all__ = ["Engine", "start_inspection"]


async def _fetch_page(fetcher: HttpFetcher, url: str, cfg: ScoutConfig) -> PageSnapshot:
    """Загружает страницу; при ошибке транспорта возвращает пустой снимок со status=None."""
    try:
        response = await asyncio.wait_for(
            fetcher.request("GET", url, headers={"User-Agent": cfg.user_agent}),
            timeout=cfg.timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("Page %s did not respond within %s seconds", url, cfg.timeout)
        return PageSnapshot(url=url)
    except Exception as exc:
        logger.warning("Page %s could not be fetched: %s", url, format_error_for_user(exc))
        return PageSnapshot(url=url)
    return PageSnapshot.from_response(response)


async def start_inspection(
    cfg: ScoutConfig,
    url: str,
    *,
    fetcher: Optional[HttpFetcher] = None,
    today: Optional[Callable[[], date]] = None,
) -> ObstacleReport:
    """
    Проверяет одну страницу и возвращает ObstacleReport.

    Parameters
    ----------
    cfg : ScoutConfig
        Конфигурация инспекции.
    url : str
        URL страницы; без схемы подставляется https://.
    fetcher : HttpFetcher, optional
        HTTP-транспорт; по умолчанию открывается AiohttpFetcher на время вызова.
    today : callable, optional
        Источник даты для имени файла отчёта.

    Raises
    ------
    InvalidUrlError
        Если URL некорректен или использует схему, отличную от http(s).
    """
    target = prepare_url(url)
    if target is None:
        raise InvalidUrlError(f"Unsupported or malformed URL: {url!r}", url=url)

    if fetcher is None:
        async with AiohttpFetcher(follow_redirects=cfg.follow_redirects) as own:
            return await start_inspection(cfg, target, fetcher=own, today=today)

    logger.info("Inspecting %s", target)
    snapshot, robots = await asyncio.gather(
        _fetch_page(fetcher, target, cfg),
        fetch_robots(target, fetcher=fetcher, timeout=cfg.robots_timeout, user_agent=cfg.user_agent),
    )
    report = aggregate_results(
        snapshot,
        anti_bot=detect_anti_bot(snapshot),
        auth=detect_auth(snapshot),
        rate_limit=detect_rate_limit(snapshot),
        robots=robots,
        filename=to_safe_filename(target, today, max_length=cfg.filename_max_length),
    )
    logger.info("Inspection of %s finished, blocked=%s", target, report.blocked)
    return report


class Engine:
    """Фасад для CLI и тестов: загрузка конфига и синхронный запуск инспекции."""

    @staticmethod
    def load_config(path: Optional[str]) -> ScoutConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: ScoutConfig, fetcher: Optional[HttpFetcher] = None) -> None:
        self.config = config
        self.fetcher = fetcher

    def inspect(self, url: str) -> ObstacleReport:
        """Запускает инспекцию с общим таймаутом scan_timeout и возвращает отчёт."""
        try:
            return asyncio.run(
                asyncio.wait_for(
                    start_inspection(self.config, url, fetcher=self.fetcher),
                    timeout=self.config.scan_timeout,
                )
            )
        except asyncio.TimeoutError:
            logger.error("Inspection did not finish within %s seconds", self.config.scan_timeout)
            raise
        except InvalidUrlError as exc:
            logger.error("Rejected URL: %s", exc)
            raise
