# keyword_crawler/__init__.py
"""
KeywordCrawler package initializer.
Defines package version and exposes the crawler API and the CLI.
"""
__version__ = "0.1.0"

from keyword_crawler.aggregator import CrawlReport
from keyword_crawler.config import CrawlerConfig, CrawlRequest
from keyword_crawler.crawler.crawler import KeywordCrawler
from keyword_crawler.scanner import start_crawl

# Expose CLI entry point
from keyword_crawler.cli import cli

__all__ = [
    "__version__",
    "CrawlReport",
    "CrawlRequest",
    "CrawlerConfig",
    "KeywordCrawler",
    "start_crawl",
    "cli",
]
