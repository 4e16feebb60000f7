# File: keyword_crawler/utils.py
"""keyword_crawler.utils: URL helpers shared by the link extractor and the crawler."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from keyword_crawler.logger import logger

__all__: Sequence[str] = (
    "extract_hostname",
    "is_same_host",
    "remove_duplicates",
)


def extract_hostname(url: str) -> Optional[str]:
    """Return the lower-cased hostname of *url*, or None if it has none or cannot be parsed.

    A malformed port (``http://host:abc/``) counts as unparsable.
    """
    try:
        parsed = urlparse(url)
        _ = parsed.port  # raises ValueError on a malformed port
        return parsed.hostname
    except ValueError as exc:
        logger.debug("Unparsable URL %r: %s", url, exc)
        return None


def is_same_host(url: str, other: str) -> bool:
    """True when both URLs name the same host; scheme and port are ignored."""
    host = extract_hostname(url)
    return host is not None and host == extract_hostname(other)


def remove_duplicates(urls: Iterable[str]) -> List[str]:
    """Remove duplicate URLs, keeping the first occurrence order."""
    items = list(urls)
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
