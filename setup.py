# setup.py
from setuptools import setup, find_packages

setup(
    name="crawl_scout",
    version="0.1.0",
    description="CrawlScout: crawl obstacle inspector (robots.txt, anti-bot, auth, rate limits)",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "beautifulsoup4>=4.12",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "crawl-scout=crawl_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
