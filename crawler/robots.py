"""
Fetches and parses robots.txt for the audited origin.
"""
from __future__ import annotations

from urllib.parse import urlparse

import requests
from loguru import logger

from config import ROBOTS_MAX_BYTES, ROBOTS_TIMEOUT
from crawler.fetcher import fetch_resource
from errors import FetchFailure, InvalidInput
from models import RobotsTxtInfo


def build_origin_url(page_url: str, path: str) -> str:
    """Return scheme://host[:port]<path> for the origin of *page_url*."""
    parsed = urlparse(page_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInput(f"Invalid URL: {page_url}")
    return f"{parsed.scheme}://{parsed.netloc}{path}"


def fetch_and_parse_robots(robots_url: str, session: requests.Session, timeout: float = ROBOTS_TIMEOUT) -> RobotsTxtInfo:
    """
    Fetch robots.txt and return a populated RobotsTxtInfo.
    Any non-200 answer or fetch failure yields the "not found" default.
    """
    try:
        resp = fetch_resource(
            robots_url, session,
            timeout=timeout,
            max_bytes=ROBOTS_MAX_BYTES,
            validate_status=False,
        )
    except FetchFailure as exc:
        logger.debug("robots.txt fetch failed for {}: {}", robots_url, exc)
        return RobotsTxtInfo()

    if resp.status_code != 200:
        logger.debug("robots.txt at {} returned HTTP {}", robots_url, resp.status_code)
        return RobotsTxtInfo()

    return RobotsTxtInfo(
        found=True,
        accessible=True,
        size=len(resp.body),
        sitemaps=parse_sitemap_directives(resp.body),
    )


def parse_sitemap_directives(raw_text: str) -> list[str]:
    """Collect every `Sitemap:` directive value, in file order."""
    sitemaps: list[str] = []

    for raw_line in raw_text.split("\n"):
        line = raw_line.split("#", 1)[0].strip()
        if not line:
            continue

        if line.lower().startswith("sitemap:"):
            sitemaps.append(line[len("sitemap:"):].strip())

    return sitemaps
