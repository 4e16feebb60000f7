"""keyword_crawler.report: JSON and HTML report writers used by the CLI."""

from keyword_crawler.report.html_report import render_html
from keyword_crawler.report.json_report import render_json

__all__ = ["render_json", "render_html"]
