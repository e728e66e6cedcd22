# File: crawl_scout/report/html_report.py
"""crawl_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import DictLoader, Environment, FileSystemLoader, select_autoescape

from crawl_scout.aggregator import ObstacleReport

TEMPLATE_NAME = "report.html.j2"

_BUILTIN_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>CrawlScout: {{ url }}</title></head>
<body>
<h1>{{ url }}</h1>
<p>HTTP status: {{ status if status is not none else "no response" }}.
{% if blocked %}<strong>Crawling is obstructed.</strong>{% else %}No obstacles found.{% endif %}</p>
<ul>
{% for line in summary %}  <li>{{ line }}</li>
{% endfor %}</ul>
<h2>robots.txt</h2>
<ul>
  <li>exists: {{ robots.exists }}</li>
  <li>allows crawling: {{ robots.allows_crawling }}</li>
  <li>crawl delay: {{ robots.crawl_delay if robots.crawl_delay is not none else "-" }}</li>
  <li>sitemap: {{ robots.sitemap or "-" }}</li>
</ul>
{% if robots.disallowed_paths %}<h3>Disallowed paths</h3>
<ul>
{% for path in robots.disallowed_paths %}  <li><code>{{ path }}</code></li>
{% endfor %}</ul>{% endif %}
<h2>Indicators</h2>
<ul>
{% for line in auth.indicators + rate_limit.indicators %}  <li>{{ line }}</li>
{% endfor %}</ul>
</body>
</html>
"""


def _environment(template_dir: Optional[Union[Path, str]]) -> Environment:
    if template_dir is None:
        loader: Any = DictLoader({TEMPLATE_NAME: _BUILTIN_TEMPLATE})
    else:
        loader = FileSystemLoader(str(template_dir))
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))


def render_html(
    report: ObstacleReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект ObstacleReport.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном ``report.html.j2``; без неё используется встроенный шаблон.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    context = report.to_dict()
    context["summary"] = report.summary()

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
