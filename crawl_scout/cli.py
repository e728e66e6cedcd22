# === FILE: crawl_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска инспектора CrawlScout через командную строку.

Команды:
  inspect URL   Проверить страницу и вывести/сохранить отчёт о препятствиях
  robots URL    Показать политику robots.txt для URL
  extract TEXT  Извлечь первый http(s) URL из текста
  filename URL  Показать безопасное имя файла для URL
  config        Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда inspect опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всей инспекции (секунд)

Пример:
  crawl-scout inspect example.com --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from crawl_scout import __version__
from crawl_scout.config import load_config
from crawl_scout.crawler.robots import fetch_robots
from crawl_scout.engine import start_inspection
from crawl_scout.errors import InvalidUrlError, format_error_for_user
from crawl_scout.logger import DEFAULT_FORMAT, configure
from crawl_scout.report import render_html, render_json
from crawl_scout.url_guard import extract_url, prepare_url, to_safe_filename

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="CrawlScout, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="WARNING", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stderr, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд CrawlScout CLI."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("inspect", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-отчёт в файл",
)
@click.option(
    "--html", "-h", "html_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить HTML-отчёт в файл",
)
@click.option(
    "--template", "-t", "template_dir",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Папка с шаблоном report.html.j2",
)
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
@click.option(
    "--scan-timeout", "scan_timeout",
    type=float,
    default=None,
    help="Таймаут всей инспекции (секунд)",
)
@click.pass_context
def inspect_page(ctx, url, json_output, html_output, template_dir, pretty, scan_timeout):
    """Проверить страницу на анти-бот защиту, авторизацию, лимиты и robots.txt."""
    cfg = ctx.obj["config"]
    timeout = scan_timeout or cfg.scan_timeout
    try:
        report = asyncio.run(asyncio.wait_for(start_inspection(cfg, url), timeout=timeout))
    except InvalidUrlError as e:
        print_error(f"Некорректный URL: {e}")
    except asyncio.TimeoutError:
        print_error(f"Инспекция не завершена за {timeout} секунд")
    except Exception as e:
        print_error(f"Ошибка при инспекции: {format_error_for_user(e)}")

    # Если не сохраняем в файл, печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f"JSON report: {saved_json}")
        except Exception as e:
            print_error(f"Ошибка при сохранении JSON: {e}")

    if html_output:
        try:
            saved_html = render_html(report, html_output, template_dir)
            click.echo(f"HTML report: {saved_html}")
        except Exception as e:
            print_error(f"Ошибка при сохранении HTML: {e}")


@cli.command("robots", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.pass_context
def show_robots(ctx, url):
    """Показать политику robots.txt для страницы URL."""
    cfg = ctx.obj["config"]
    target = prepare_url(url)
    if target is None:
        print_error(f"Некорректный URL: {url!r}")
    info = asyncio.run(
        fetch_robots(target, timeout=cfg.robots_timeout, user_agent=cfg.user_agent)
    )
    click.echo(json.dumps(info.to_dict(), ensure_ascii=False, indent=2))


@cli.command("extract", context_settings=CONTEXT_SETTINGS)
@click.argument("text", nargs=-1, required=True)
def extract(text):
    """Извлечь первый http(s) URL из текста."""
    found = extract_url(" ".join(text))
    if found is None:
        print_error("URL не найден")
    click.echo(found)


@cli.command("filename", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.pass_context
def filename(ctx, url):
    """Показать безопасное имя файла для URL."""
    cfg = ctx.obj["config"]
    click.echo(to_safe_filename(url, max_length=cfg.filename_max_length))


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
