# File: keyword_crawler/matcher.py
"""keyword_crawler.matcher: case-insensitive keyword search with a short text excerpt."""

from __future__ import annotations

import re
from typing import Final, Tuple

__all__ = ["CONTEXT_MARGIN", "find_keyword"]

#: characters kept on each side of the match
CONTEXT_MARGIN: Final[int] = 6


def find_keyword(text: str, keyword: str, margin: int = CONTEXT_MARGIN) -> Tuple[bool, str]:
    """Look for the first case-insensitive occurrence of *keyword* in *text*.

    Returns ``(matched, context)`` where *context* is the match plus up to
    *margin* characters on each side, clamped to the text, with newlines
    removed and surrounding spaces trimmed. Without a match the context is "".
    """
    if not text:
        return False, ""

    # indices refer to *text* itself, not to a lower-cased copy
    found = re.search(re.escape(keyword), text, flags=re.IGNORECASE)
    if found is None:
        return False, ""

    start = max(found.start() - margin, 0)
    end = min(found.end() + margin, len(text))
    context = text[start:end].replace("\n", "").strip(" ")
    return True, context
