# === FILE: keyword_crawler/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Tuple

from aiohttp import ClientSession, ClientTimeout

from keyword_crawler.aggregator import CrawlReport, aggregate_results
from keyword_crawler.config import CrawlerConfig, CrawlRequest
from keyword_crawler.crawler.fetcher import Fetcher
from keyword_crawler.crawler.models import CrawlState, PageResult
from keyword_crawler.logger import logger
from keyword_crawler.parser.html_parser import ParsedPage, process_page
from keyword_crawler.utils import is_same_host, remove_duplicates

__all__ = ("KeywordCrawler",)


class KeywordCrawler:
    """Breadth-first, same-host keyword crawler bounded by depth levels.

    Every level is fetched concurrently (at most ``config.concurrency`` requests
    in flight) and fully finished before the next one starts. The first fetch or
    parse failure cancels the rest of the level and aborts the run.
    """

    def __init__(self, request: CrawlRequest, config: Optional[CrawlerConfig] = None) -> None:
        self.request = request
        self.config = config or CrawlerConfig()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self._semaphore = asyncio.Semaphore(self.config.concurrency)

    async def __aenter__(self) -> KeywordCrawler:
        headers = {"User-Agent": self.config.user_agent} if self.config.user_agent else None
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers=headers,
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlReport:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        logger.info(
            "Starting crawl: url=%s keyword=%r depth=%d",
            self.request.start_url, self.request.keyword, self.request.max_depth,
        )
        start = time.monotonic()
        state = CrawlState(frontier=[self.request.start_url])

        for level in range(self.request.max_depth):
            frontier = [u for u in remove_duplicates(state.frontier) if u not in state.visited]
            if not frontier:
                logger.debug("Frontier exhausted before level %d", level)
                break
            logger.info("Level %d: %d page(s) to visit", level, len(frontier))

            outcomes = await self._crawl_level(frontier)

            for url, parsed in outcomes:
                state.visited[url] = PageResult(
                    url=url, is_match=parsed.is_match, match_context=parsed.match_context,
                )
            state.frontier = self._next_frontier(state, outcomes)

        report = aggregate_results(state.visited)
        duration = time.monotonic() - start
        logger.info(
            "Finished: %d page(s), %d match(es) in %.2f s",
            report.total_visited, report.match_count, duration,
        )
        return report

    async def _crawl_level(self, frontier: List[str]) -> List[Tuple[str, ParsedPage]]:
        tasks = [asyncio.create_task(self._visit(url)) for url in frontier]
        try:
            pages = await asyncio.gather(*tasks)
        except BaseException:
            for t in tasks:
                t.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(zip(frontier, pages))

    async def _visit(self, url: str) -> ParsedPage:
        async with self._semaphore:
            page = await self.fetcher.fetch(url)
        parsed = process_page(page, self.request.keyword)
        logger.debug(
            "Visited %s (status %d, %d link(s), match=%s)",
            url, page.status, len(parsed.links), parsed.is_match,
        )
        return parsed

    @staticmethod
    def _next_frontier(state: CrawlState, outcomes: List[Tuple[str, ParsedPage]]) -> List[str]:
        queued: List[str] = []
        for source_url, parsed in outcomes:
            for link in parsed.links:
                if link in state.visited:
                    continue
                if not is_same_host(link, source_url):
                    logger.debug("Skipping off-host link %s (found on %s)", link, source_url)
                    continue
                queued.append(link)
        return remove_duplicates(queued)
