# === FILE: keyword_crawler/parser/html_parser.py ===
"""HTML processing for KeywordCrawler.

A fetched body is turned into a :class:`ParsedPage`:

* text: the visible text, every text node left after ``<script>`` and
  ``<style>`` are removed, concatenated in document order.
* links: distinct absolute URLs found in ``<a href="…">`` tags
  (see :func:`keyword_crawler.crawler.link_extractor.extract_links`).
* is_match / match_context: result of the keyword search over *text*.

Nothing here touches the network; the crawler hands in a
:class:`~keyword_crawler.crawler.models.PageData` it already fetched.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from keyword_crawler.crawler.errors import PageParseError
from keyword_crawler.crawler.link_extractor import extract_links
from keyword_crawler.crawler.models import PageData
from keyword_crawler.matcher import find_keyword

__all__: Sequence[str] = ("ParsedPage", "parse_html", "process_page")

#: elements whose content is never rendered as page text
INVISIBLE_TAGS: tuple[str, ...] = ("script", "style")


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of a processed HTML page."""

    url: str
    text: str
    links: list[str] = field(default_factory=list)
    is_match: bool = False
    match_context: str = ""


def _build_soup(page: PageData) -> BeautifulSoup:
    try:
        return BeautifulSoup(page.content, "html.parser")
    except Exception as exc:
        raise PageParseError(page.url, exc) from exc


def parse_html(page: PageData) -> ParsedPage:
    """Build the document model of *page* and extract its visible text and links."""
    soup = _build_soup(page)

    for element in soup(list(INVISIBLE_TAGS)):
        element.decompose()
    text = soup.get_text()

    links = extract_links(soup, page.url)
    return ParsedPage(url=page.url, text=text, links=links)


def process_page(page: PageData, keyword: str) -> ParsedPage:
    """Parse *page* and run the keyword search over its visible text."""
    parsed = parse_html(page)
    parsed.is_match, parsed.match_context = find_keyword(parsed.text, keyword)
    return parsed
