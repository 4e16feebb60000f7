# keyword_crawler/crawler/errors.py
"""
Exceptions that abort a crawl run.
"""
from __future__ import annotations


class CrawlError(Exception):
    """Base crawl exception."""


class FetchError(CrawlError):
    """Raised when a page cannot be retrieved (connection, DNS, timeout)."""

    def __init__(self, url: str, attempts: int, reason: BaseException | str) -> None:
        self.url = url
        self.attempts = attempts
        self.reason = reason
        super().__init__(f"Failed to fetch {url} after {attempts} attempt(s): {reason}")


class PageParseError(CrawlError):
    """Raised when a fetched body cannot be turned into a document."""

    def __init__(self, url: str, reason: BaseException | str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to parse {url}: {reason}")
