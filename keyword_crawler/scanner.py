# === FILE: keyword_crawler/scanner.py ===
"""
Wrapper around the crawler used by the CLI.
"""
from typing import Optional

from keyword_crawler.aggregator import CrawlReport
from keyword_crawler.config import CrawlerConfig, CrawlRequest
from keyword_crawler.crawler.crawler import KeywordCrawler


async def start_crawl(request: CrawlRequest, config: Optional[CrawlerConfig] = None) -> CrawlReport:
    """
    Open a KeywordCrawler, run one crawl and return its report.

    Parameters
    ----------
    request : CrawlRequest
        Start URL, keyword and depth of the run.
    config : CrawlerConfig, optional
        Transport settings; defaults are used when omitted.

    Returns
    -------
    CrawlReport
        Number of visited pages and the matching ones.
    """
    async with KeywordCrawler(request, config) as crawler:
        report = await crawler.crawl()
    return report

__all__ = ["start_crawl"]
