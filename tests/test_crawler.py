# File: tests/test_crawler.py
# Test-suite for the breadth-first keyword crawler against local aiohttp apps
from __future__ import annotations

import asyncio
import time
from collections import Counter
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from aiohttp import web

from keyword_crawler.config import CrawlerConfig, CrawlRequest
from keyword_crawler.crawler.crawler import KeywordCrawler
from keyword_crawler.crawler.errors import FetchError
from keyword_crawler.scanner import start_crawl

#: number of seconds a “slow” handler sleeps in the concurrency tests
SLOW_SLEEP: float = 0.5


# --------------------------------------------------------------------------- #
#                               Helper utilities                              #
# --------------------------------------------------------------------------- #


@dataclass
class Site:
    """Running test site: base URL plus a hit counter per path."""

    base: str
    hits: Counter = field(default_factory=Counter)

    def url(self, path: str = "/") -> str:
        return f"{self.base}{path}"


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def html_handler(hits: Counter, body: str, status: int = 200):
    async def handle(request: web.Request) -> web.Response:
        hits[request.path] += 1
        return web.Response(text=body, status=status, content_type="text/html")

    return handle


async def run_crawler(start_url: str, keyword: str, depth: int, config: CrawlerConfig):
    request = CrawlRequest(start_url=start_url, keyword=keyword, max_depth=depth)
    return await asyncio.wait_for(start_crawl(request, config), timeout=15.0)


# --------------------------------------------------------------------------- #
#                            Test-server fixtures                             #
# --------------------------------------------------------------------------- #


@pytest_asyncio.fixture
async def test_site(unused_tcp_port: int) -> AsyncIterator[Site]:
    """
    /        -> Hello World, links to /page1, /page2, an anchor and 127.0.0.1/page3
    /page1   -> the WORLD, links to /page2, /deep and back to /
    /page2   -> no match
    /deep    -> world, reachable only from /page1
    /page3   -> world, only linked through another host name
    """
    app = web.Application()
    hits: Counter = Counter()

    root = (
        "<html><body><p>Hello World</p>"
        '<a href="/page1">1</a><a href="/page2">2</a><a href="#top">top</a>'
        f'<a href="http://127.0.0.1:{unused_tcp_port}/page3">ext</a>'
        "</body></html>"
    )
    page1 = (
        "<html><body><p>the WORLD is big</p>"
        '<a href="/page2">2</a><a href="/deep">deep</a><a href="/">home</a>'
        "</body></html>"
    )
    page2 = "<html><body><p>nothing here</p><a href='/page1'>1</a></body></html>"
    deep = "<html><body><p>world deep down</p></body></html>"
    page3 = "<html><body><p>other world</p></body></html>"

    app.router.add_get("/", html_handler(hits, root))
    app.router.add_get("/page1", html_handler(hits, page1))
    app.router.add_get("/page2", html_handler(hits, page2))
    app.router.add_get("/deep", html_handler(hits, deep))
    app.router.add_get("/page3", html_handler(hits, page3))

    async for base in _serve_app(app, unused_tcp_port):
        yield Site(base=base, hits=hits)


# --------------------------------------------------------------------------- #
#                                   Tests                                     #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_depth_zero_visits_nothing(test_site: Site, fast_config):
    report = await run_crawler(test_site.url(), "world", 0, fast_config)

    assert report.total_visited == 0
    assert report.matches == []
    assert sum(test_site.hits.values()) == 0


@pytest.mark.asyncio()
async def test_depth_one_fetches_only_start(test_site: Site, fast_config):
    report = await run_crawler(test_site.url(), "world", 1, fast_config)

    assert report.total_visited == 1
    assert [m.url for m in report.matches] == [test_site.url()]
    assert "Hello World" in report.matches[0].match_context
    assert test_site.hits == Counter({"/": 1})


@pytest.mark.asyncio()
async def test_depth_two_follows_same_host_links(test_site: Site, fast_config):
    report = await run_crawler(test_site.url(), "world", 2, fast_config)

    assert report.total_visited == 3
    assert [m.url for m in report.matches] == [test_site.url(), test_site.url("/page1")]
    assert report.matches[1].match_context == "the WORLD is bi"
    assert test_site.hits == Counter({"/": 1, "/page1": 1, "/page2": 1})


@pytest.mark.asyncio()
async def test_visited_pages_are_never_refetched(test_site: Site, fast_config):
    report = await run_crawler(test_site.url(), "world", 5, fast_config)

    assert report.total_visited == 4
    assert {m.url for m in report.matches} == {
        test_site.url(),
        test_site.url("/page1"),
        test_site.url("/deep"),
    }
    assert all(count == 1 for count in test_site.hits.values())


@pytest.mark.asyncio()
async def test_other_host_is_never_queued(test_site: Site, fast_config):
    await run_crawler(test_site.url(), "world", 5, fast_config)
    assert test_site.hits["/page3"] == 0


@pytest.mark.asyncio()
async def test_no_match_reports_empty_context(test_site: Site, fast_config):
    report = await run_crawler(test_site.url("/page2"), "world", 1, fast_config)

    assert report.total_visited == 1
    assert report.matches == []


@pytest.mark.asyncio()
async def test_non_success_status_is_processed(unused_tcp_port: int, fast_config, crawler_logs):
    app = web.Application()
    hits: Counter = Counter()
    app.router.add_get(
        "/missing",
        html_handler(hits, "<p>Page not found, keyword lost</p><a href='/'>home</a>", status=404),
    )
    app.router.add_get("/", html_handler(hits, "<p>home keyword</p>"))

    async for base in _serve_app(app, unused_tcp_port):
        report = await run_crawler(f"{base}/missing", "keyword", 2, fast_config)

    assert report.total_visited == 2
    assert len(report.matches) == 2
    assert any(
        r.levelname == "WARNING" and "404" in r.getMessage() for r in crawler_logs.records
    )


@pytest.mark.asyncio()
async def test_transport_failure_aborts_run(unused_tcp_port_factory, fast_config):
    dead = f"http://localhost:{unused_tcp_port_factory()}/"
    with pytest.raises(FetchError) as info:
        await run_crawler(dead, "world", 2, fast_config)
    assert info.value.url == dead
    assert info.value.attempts == 1


@pytest.mark.asyncio()
async def test_transport_failure_is_retried(unused_tcp_port_factory):
    dead = f"http://localhost:{unused_tcp_port_factory()}/"
    config = CrawlerConfig(timeout=2.0, retry_times=2, retry_backoff=0.0)
    with pytest.raises(FetchError) as info:
        await run_crawler(dead, "world", 1, config)
    assert info.value.attempts == 3


@pytest.mark.asyncio()
async def test_failure_in_later_level_aborts_run(unused_tcp_port_factory, fast_config):
    port = unused_tcp_port_factory()
    dead_port = unused_tcp_port_factory()
    app = web.Application()
    hits: Counter = Counter()
    # same host name, different port: queued, then fails
    app.router.add_get(
        "/",
        html_handler(hits, f'<p>world</p><a href="http://localhost:{dead_port}/">dead</a>'),
    )

    async for base in _serve_app(app, port):
        with pytest.raises(FetchError):
            await run_crawler(f"{base}/", "world", 2, fast_config)

    assert hits["/"] == 1


@pytest.mark.asyncio()
async def test_malformed_link_is_skipped(unused_tcp_port: int, fast_config):
    app = web.Application()
    hits: Counter = Counter()
    app.router.add_get(
        "/",
        html_handler(
            hits,
            '<p>world</p><a href="http://localhost:abc/">bad port</a><a href="/ok">ok</a>',
        ),
    )
    app.router.add_get("/ok", html_handler(hits, "<p>world again</p>"))

    async for base in _serve_app(app, unused_tcp_port):
        report = await run_crawler(f"{base}/", "world", 2, fast_config)

    assert report.total_visited == 2
    assert report.match_count == 2
    assert hits == Counter({"/": 1, "/ok": 1})


async def _slow_site(port: int, pages: int, tracker: dict) -> AsyncIterator[str]:
    app = web.Application()

    async def slow(_):
        tracker["inflight"] += 1
        tracker["peak"] = max(tracker["peak"], tracker["inflight"])
        await asyncio.sleep(SLOW_SLEEP)
        tracker["inflight"] -= 1
        return web.Response(text="<h1>Slow keyword</h1>", content_type="text/html")

    async def root(_):
        links = "".join(f'<a href="/slow{i}">S{i}</a>' for i in range(pages))
        return web.Response(text=links, content_type="text/html")

    app.router.add_get("/", root)
    for i in range(pages):
        app.router.add_get(f"/slow{i}", slow)

    async for base in _serve_app(app, port):
        yield base


@pytest.mark.asyncio()
async def test_level_is_fetched_concurrently(unused_tcp_port: int):
    tracker = {"inflight": 0, "peak": 0}
    config = CrawlerConfig(timeout=5.0, concurrency=4)

    async for base in _slow_site(unused_tcp_port, 2, tracker):
        start = time.perf_counter()
        report = await run_crawler(f"{base}/", "keyword", 2, config)
        elapsed = time.perf_counter() - start

    assert report.total_visited == 3
    assert tracker["peak"] == 2
    assert elapsed < SLOW_SLEEP * 1.9


@pytest.mark.asyncio()
async def test_concurrency_is_bounded(unused_tcp_port: int):
    tracker = {"inflight": 0, "peak": 0}
    config = CrawlerConfig(timeout=5.0, concurrency=2)

    async for base in _slow_site(unused_tcp_port, 5, tracker):
        report = await run_crawler(f"{base}/", "keyword", 2, config)

    assert report.total_visited == 6
    assert report.match_count == 5
    assert tracker["peak"] == 2


@pytest.mark.asyncio()
async def test_whole_run_timeout_cancels_fetches(unused_tcp_port: int):
    tracker = {"inflight": 0, "peak": 0}
    config = CrawlerConfig(timeout=5.0, concurrency=2)

    async for base in _slow_site(unused_tcp_port, 2, tracker):
        request = CrawlRequest(start_url=f"{base}/", keyword="keyword", max_depth=2)
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(start_crawl(request, config), timeout=SLOW_SLEEP / 2)


@pytest.mark.asyncio()
async def test_user_agent_header(unused_tcp_port: int):
    seen = {}
    app = web.Application()

    async def root(request):
        seen["ua"] = request.headers.get("User-Agent")
        return web.Response(text="<p>keyword</p>", content_type="text/html")

    app.router.add_get("/", root)
    config = CrawlerConfig(timeout=2.0, user_agent="TestAgent/1.0")

    async for base in _serve_app(app, unused_tcp_port):
        await run_crawler(f"{base}/", "keyword", 1, config)

    assert seen["ua"] == "TestAgent/1.0"


@pytest.mark.asyncio()
async def test_crawl_requires_context_manager():
    crawler = KeywordCrawler(CrawlRequest(start_url="http://example.com/", keyword="x"))
    with pytest.raises(RuntimeError):
        await crawler.crawl()
