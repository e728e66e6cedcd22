"""crawl_scout.report: Генерация отчётов (JSON и HTML), используемых CLI и тестами."""

from __future__ import annotations

from crawl_scout.report.html_report import render_html
from crawl_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
