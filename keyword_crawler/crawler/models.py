# keyword_crawler/crawler/models.py
"""
Data models for the KeywordCrawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(slots=True)
class PageData:
    """Raw response of a single GET: requested URL, body bytes and HTTP status."""

    url: str
    content: bytes
    status: int = 200

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True, slots=True)
class PageResult:
    """Outcome of visiting one URL. Created once, never mutated."""

    url: str
    is_match: bool
    match_context: str = ""


@dataclass(slots=True)
class CrawlState:
    """Per-run bookkeeping owned by the orchestrator."""

    visited: Dict[str, PageResult] = field(default_factory=dict)
    frontier: List[str] = field(default_factory=list)
