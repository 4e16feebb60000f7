# keyword_crawler/crawler/link_extractor.py
"""
Link extraction and href resolution for KeywordCrawler.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from keyword_crawler.logger import logger
from keyword_crawler.utils import remove_duplicates


def resolve_href(href: str, page_url: str) -> Optional[str]:
    """
    Turn an anchor's href into an absolute URL.

    Same-page fragments (``#...``) are dropped, root-relative paths are joined
    with the scheme and host of *page_url*; anything else is taken as already
    absolute. Returns None for links that are skipped.
    """
    raw = href.strip()
    if not raw or raw.startswith("#"):
        return None
    if not raw.startswith("/"):
        return raw
    try:
        return urljoin(page_url, raw)
    except ValueError as exc:
        logger.debug("Skipping malformed link %r on %s: %s", raw, page_url, exc)
        return None


def extract_links(soup: BeautifulSoup, page_url: str) -> List[str]:
    """
    Collect the distinct absolute URLs of every <a href> in *soup*.
    """
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        absolute = resolve_href(href_val, page_url)
        if absolute is not None:
            links.append(absolute)
    return remove_duplicates(links)
