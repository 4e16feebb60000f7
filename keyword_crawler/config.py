# === FILE: keyword_crawler/config.py ===
"""
Loading and validation of KeywordCrawler settings.
Pydantic describes the schema of both the run-time tuning (CrawlerConfig)
and the immutable crawl input (CrawlRequest).
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_DEPTH = 2


class CrawlRequest(BaseModel):
    """Immutable input of one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(..., min_length=1, description="Page the crawl starts from.")
    keyword: str = Field(..., min_length=1, description="Case-insensitive search term.")
    max_depth: int = Field(DEFAULT_DEPTH, ge=0, description="Number of depth levels to expand.")

    @field_validator("start_url")
    def _check_absolute_http(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"start_url must be an absolute http(s) URL, got {v!r}")
        return v


class CrawlerConfig(BaseModel):
    """Transport and scheduling settings shared by every crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Timeout of a single request (seconds).")
    concurrency: int = Field(5, ge=1, description="Max simultaneous fetches within one level.")
    retry_times: int = Field(0, ge=0, description="Extra attempts after a transport failure.")
    retry_backoff: float = Field(1.0, ge=0, description="Base delay of the exponential backoff.")
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent header, if any.")
    crawl_timeout: Optional[float] = Field(None, gt=0, description="Timeout of the whole run (seconds).")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    Without *path* the built-in defaults are used. Keyword *overrides* whose
    value is not None win over the file (CLI options).
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)


__all__ = ["CrawlRequest", "CrawlerConfig", "load_config", "DEFAULT_DEPTH"]
