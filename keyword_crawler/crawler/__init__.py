"""keyword_crawler.crawler: fetching, link resolution and the breadth-first orchestrator."""
