# File: keyword_crawler/aggregator.py
"""keyword_crawler.aggregator: projection of the visited pages into the final crawl report."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping

from keyword_crawler.crawler.models import PageResult


@dataclass(slots=True)
class CrawlReport:
    """Result of a crawl run: how many pages were visited and which of them matched."""

    total_visited: int = 0
    matches: List[PageResult] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_visited": self.total_visited,
            "match_count": self.match_count,
            "matches": [asdict(m) for m in self.matches],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Return the JSON representation of the report."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(visited: Mapping[str, PageResult]) -> CrawlReport:
    """Count every visited page and keep the matching ones in visit order."""
    return CrawlReport(
        total_visited=len(visited),
        matches=[result for result in visited.values() if result.is_match],
    )
