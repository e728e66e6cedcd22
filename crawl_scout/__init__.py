"""
CrawlScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; the name ``cli`` stays bound to the crawl_scout.cli module
from crawl_scout.cli import cli as main_cli  # noqa: E402
