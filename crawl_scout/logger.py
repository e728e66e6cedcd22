"""Логирование CrawlScout.

Все модули пишут в дерево логгеров ``CrawlScout``: общий :data:`logger`
или дочерний ``CrawlScout.<area>`` из :func:`get_logger`. Обработчики
ставит только :func:`configure` (его вызывает CLI), поэтому импорт пакета
ничего не пишет и не создаёт файлов.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

LOGGER_NAME: Final[str] = "CrawlScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure(
    level: Union[int, str] = "INFO",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Заменяет обработчики логгера CrawlScout.

    Консоль всегда stderr: stdout занят JSON-выводом команд.
    С *log_file* добавляется ротация по 5 МиБ, три архива.
    """
    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
            )
        )

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(area: str) -> logging.Logger:
    """``CrawlScout.<area>``, например ``get_logger("robots")``."""
    return logger.getChild(area)


__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "configure", "get_logger", "logger"]
