# keyword_crawler/crawler/fetcher.py
"""
Fetcher module: one GET per page, with optional retry/backoff on transport failures.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from keyword_crawler.config import CrawlerConfig
from keyword_crawler.crawler.errors import FetchError
from keyword_crawler.crawler.models import PageData
from keyword_crawler.logger import logger

#: upper bound of a single backoff pause (seconds)
MAX_BACKOFF = 60.0


class Fetcher:
    """Handles HTTP fetching over a shared session."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its body and status.

        A non-2xx status only produces a warning; the body is returned anyway.
        Connection errors and timeouts raise FetchError once the configured
        retries are used up.
        """
        attempts = 0
        while True:
            attempts += 1
            try:
                async with self.session.get(url) as resp:
                    page = PageData(url=url, content=await resp.read(), status=resp.status)
                    if not page.ok:
                        logger.warning("Got status code %d for %s", page.status, url)
                    return page
            except (ClientError, asyncio.TimeoutError) as exc:
                if attempts > self.config.retry_times:
                    raise FetchError(url, attempts, exc) from exc
                backoff = min(self.config.retry_backoff * 2 ** (attempts - 1), MAX_BACKOFF)
                logger.debug(
                    "Retry %d/%d for %s after %.2f s: %s",
                    attempts, self.config.retry_times, url, backoff, exc,
                )
                await asyncio.sleep(backoff)
