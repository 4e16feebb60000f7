import logging
from typing import Iterator

import pytest

from keyword_crawler.config import CrawlerConfig
from keyword_crawler.crawler.models import PageData
from keyword_crawler.logger import configure

EXAMPLE_HTML = (
    '<html><body><p>Hello World</p><a href="/page2">x</a>'
    '<a href="http://other.com/">y</a></body></html>'
)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """
    Re-create the project logger after each test so that handlers bound to
    CliRunner streams do not outlive the test.
    """
    yield
    configure(level="INFO")


@pytest.fixture()
def crawler_logs(caplog) -> Iterator[pytest.LogCaptureFixture]:
    """
    Capture records of the non-propagating project logger.
    """
    lg = logging.getLogger("KeywordCrawler")
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="KeywordCrawler")
    yield caplog
    lg.removeHandler(caplog.handler)


@pytest.fixture()
def fast_config() -> CrawlerConfig:
    """
    Return a CrawlerConfig with short timeouts for tests against local servers.
    """
    return CrawlerConfig(timeout=2.0, concurrency=4, retry_times=0, retry_backoff=0.0)


@pytest.fixture()
def example_page() -> PageData:
    """
    Provide the sample page from the crawler documentation.
    """
    return PageData(url="http://example.com/", content=EXAMPLE_HTML.encode("utf-8"))
