# crawl_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта CrawlScout.

Сериализация объекта ObstacleReport в файл.
"""
import json
from pathlib import Path

from crawl_scout.aggregator import ObstacleReport


def render_json(report: ObstacleReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект ObstacleReport с результатами инспекции
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from crawl_scout.report.json_report import render_json
    report_path = render_json(report, f"reports/{report.filename}.json")
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
