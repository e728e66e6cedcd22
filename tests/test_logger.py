# File: tests/test_logger.py
import logging
import sys

from crawl_scout.logger import LOGGER_NAME, configure, get_logger, logger


def test_configure_console_and_file(tmp_path):
    log_file = tmp_path / "scout.log"
    lg = configure(level="DEBUG", log_file=log_file)
    assert lg is logger
    assert lg.name == LOGGER_NAME == "CrawlScout"
    assert lg.level == logging.DEBUG
    assert lg.propagate is False
    assert len(lg.handlers) == 2

    get_logger("robots").debug("robots.txt fetched")
    for handler in lg.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "CrawlScout.robots" in text
    assert "robots.txt fetched" in text


def test_console_goes_to_stderr():
    lg = configure(level="INFO")
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stderr


def test_configure_replaces_handlers(tmp_path):
    configure(level="INFO", log_file=tmp_path / "first.log")
    lg = configure(level="WARNING")
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING


def test_import_installs_no_handlers():
    assert get_logger("detectors.auth").name == "CrawlScout.detectors.auth"
    assert get_logger("detectors.auth").handlers == []
