# File: crawl_scout/url_guard.py
"""crawl_scout.url_guard: Проверка, нормализация и извлечение URL, безопасные имена файлов."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Callable, Optional, Sequence

from pydantic import AnyUrl, TypeAdapter, ValidationError

from crawl_scout.logger import logger

__all__: Sequence[str] = (
    "ALLOWED_SCHEMES",
    "MAX_FILENAME_LENGTH",
    "validate_url",
    "normalize_url",
    "prepare_url",
    "extract_url",
    "to_safe_filename",
    "origin_of",
    "path_of",
)

ALLOWED_SCHEMES = frozenset({"http", "https"})
MAX_FILENAME_LENGTH = 100

_DEFAULT_PORTS = {"http": 80, "https": 443}
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

_SCHEME_PREFIX_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
# Схема без "//" (mailto:, tel:, data:, javascript:). "host:8080" сюда не попадает.
_OPAQUE_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:(?!\d)")
# Явный http(s):// токен или «голый» домен, не приклеенный к другой схеме, e-mail или пути.
_URL_CANDIDATE_RE = re.compile(
    r"https?://\S+"
    r"|(?<![\w.@/:-])(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}(?:[/?#]\S*)?",
    re.IGNORECASE,
)
_TRAILING_PUNCTUATION = ".,;:!?"
_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9-]+")


def _parse_http_url(candidate: object) -> Optional[AnyUrl]:
    """Разбирает строку WHATWG-парсером pydantic-core; None для не-http(s) и мусора."""
    if not isinstance(candidate, str) or not candidate.strip():
        return None
    try:
        parsed = _URL_ADAPTER.validate_python(candidate)
    except ValidationError:
        return None
    if parsed.scheme not in ALLOWED_SCHEMES:
        return None
    return parsed


def validate_url(candidate: object) -> bool:
    """Проверяет, что candidate является синтаксически корректный URL со схемой http или https."""
    valid = _parse_http_url(candidate) is not None
    logger.debug("URL valid: %r -> %s", candidate, valid)
    return valid


def normalize_url(raw: str) -> str:
    """Обрезает пробелы и добавляет https://, если схема не указана. Не валидирует."""
    trimmed = raw.strip()
    if _SCHEME_PREFIX_RE.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def prepare_url(raw: str) -> Optional[str]:
    """
    Нормализует пользовательский ввод и возвращает http(s) URL или None.

    Ввод со схемой без ``//`` (``mailto:user@host``) отклоняется до нормализации,
    иначе ``https://`` превратил бы схему в userinfo.
    """
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if not _SCHEME_PREFIX_RE.match(trimmed) and _OPAQUE_SCHEME_RE.match(trimmed):
        logger.debug("URL rejected, opaque scheme: %r", raw)
        return None
    target = normalize_url(trimmed)
    return target if validate_url(target) else None


def extract_url(text: str) -> Optional[str]:
    """Возвращает первый (по позиции в тексте) допустимый http(s) URL или None."""
    if not isinstance(text, str) or not text:
        return None
    for match in _URL_CANDIDATE_RE.finditer(text):
        candidate = normalize_url(match.group(0).rstrip(_TRAILING_PUNCTUATION))
        if validate_url(candidate):
            return candidate
    return None


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def to_safe_filename(
    url: str,
    today: Optional[Callable[[], date]] = None,
    *,
    max_length: int = MAX_FILENAME_LENGTH,
) -> str:
    """Строит имя файла вида ``<host>-YYYY-MM-DD`` только из символов ``[a-z0-9-]``.

    Для строк, не являющихся http(s) URL, основой служит сама строка (без даты).
    Результат не длиннее *max_length* символов; при обрезке укорачивается хост,
    а дата сохраняется. Имя никогда не начинается с ``-``.
    """
    parsed = _parse_http_url(url)
    if parsed is not None and parsed.host:
        suffix = "-" + (today or _utc_today)().strftime("%Y-%m-%d")
        host = _UNSAFE_FILENAME_RE.sub("-", parsed.host.lower().replace(".", "-")).strip("-")
        host = host[: max(max_length - len(suffix), 0)].rstrip("-")
        name = f"{host}{suffix}" if host else suffix
    else:
        name = _UNSAFE_FILENAME_RE.sub("-", (url if isinstance(url, str) else "").lower())
    return name.lstrip("-")[:max_length]


def origin_of(url: str) -> Optional[str]:
    """Возвращает ``scheme://host[:port]`` (порт по умолчанию опускается) или None."""
    parsed = _parse_http_url(url)
    if parsed is None or not parsed.host:
        return None
    origin = f"{parsed.scheme}://{parsed.host}"
    if parsed.port is not None and parsed.port != _DEFAULT_PORTS[parsed.scheme]:
        origin += f":{parsed.port}"
    return origin


def path_of(url: str) -> str:
    """Возвращает путь URL; ``/`` для пустого пути и некорректных URL."""
    parsed = _parse_http_url(url)
    if parsed is None:
        return "/"
    return parsed.path or "/"
