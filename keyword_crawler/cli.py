#!/usr/bin/env python3
"""
Command-line entry point of KeywordCrawler.

Usage:
  keyword-crawler [OPTIONS] START_URL KEYWORD [DEPTH]

  START_URL           Page the crawl starts from (http/https)
  KEYWORD             Case-insensitive term searched in the visible page text
  DEPTH               Number of breadth-first levels (default: 2, 0 visits nothing)

Options:
  --config PATH       YAML/JSON file with crawler settings
  --concurrency INT   Max simultaneous requests within one level
  --crawl-timeout SEC Timeout of the whole crawl (seconds)
  --json PATH         Save the JSON report to a file
  --html PATH         Save the HTML report to a file
  --template DIR      Directory with the Jinja2 template
  --format FORMAT     Console output: text (default) or json
  --pretty            Indent JSON output (2 spaces)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format string
  --version, -v       Show the KeywordCrawler version

Example:
  keyword-crawler https://example.com world 3 --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from jinja2 import TemplateError
from pydantic import ValidationError

from keyword_crawler import __version__
from keyword_crawler.config import DEFAULT_DEPTH, CrawlRequest, load_config
from keyword_crawler.crawler.errors import CrawlError
from keyword_crawler.logger import DEFAULT_FORMAT, init_logging, logger
from keyword_crawler.report.html_report import render_html
from keyword_crawler.report.json_report import render_json
from keyword_crawler.scanner import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def print_summary(report, keyword: str) -> None:
    click.echo(
        f"Crawled {report.total_visited} pages. "
        f"Found {report.match_count} pages with the term '{keyword}'"
    )
    for match in report.matches:
        click.echo(f"{match.url} => '{match.match_context}'")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='KeywordCrawler, version %(version)s')
@click.argument('start_url')
@click.argument('keyword')
@click.argument('depth', required=False, default=DEFAULT_DEPTH, type=click.IntRange(min=0))
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON file with crawler settings.'
)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Max simultaneous requests within one level (override config)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Timeout of the whole crawl (seconds)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with the Jinja2 template (bundled one by default)'
)
@click.option(
    '--format', '-f', 'output_format',
    default='text', show_default=True,
    type=click.Choice(['text', 'json']),
    help='Console output format'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output (2 spaces)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
def cli(start_url, keyword, depth, config_path, concurrency, crawl_timeout,
        json_output, html_output, template_dir, output_format, pretty,
        log_level, log_file, log_format):
    """Crawl START_URL breadth-first on its host and report pages containing KEYWORD."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )

    try:
        request = CrawlRequest(start_url=start_url, keyword=keyword, max_depth=depth)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    try:
        cfg = load_config(config_path, concurrency=concurrency, crawl_timeout=crawl_timeout)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')

    logger.info('Starting crawler with URL:%s, Keyword:%s, Depth:%d',
                request.start_url, request.keyword, request.max_depth)
    try:
        if cfg.crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_crawl(request, cfg), timeout=cfg.crawl_timeout)
            )
        else:
            report = asyncio.run(start_crawl(request, cfg))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {cfg.crawl_timeout} seconds')
    except CrawlError as e:
        print_error(f'Crawl failed: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            logger.info('JSON report: %s', saved_json)
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output, keyword=request.keyword)
            logger.info('HTML report: %s', saved_html)
        except (OSError, TemplateError) as e:
            print_error(f'Failed to save HTML report: {e}')

    if output_format == 'json':
        click.echo(report.json(pretty=pretty))
    else:
        print_summary(report, request.keyword)


if __name__ == "__main__":
    cli()
