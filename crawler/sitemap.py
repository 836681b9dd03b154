"""
Fetches /sitemap.xml and estimates how many URLs it lists.

Counting is a tag-count heuristic rather than a full XML parse so that
malformed sitemaps still produce a usable number.
"""
from __future__ import annotations

import re

import requests
from loguru import logger

from config import SITEMAP_ACCEPT, SITEMAP_MAX_BYTES, SITEMAP_TIMEOUT
from crawler.fetcher import fetch_resource
from errors import FetchFailure
from models import SitemapInfo

_URL_TAG = re.compile(r"<url>")
_LOC_TAG = re.compile(r"<loc>")


def fetch_sitemap(sitemap_url: str, session: requests.Session, timeout: float = SITEMAP_TIMEOUT) -> SitemapInfo:
    """Fetch the sitemap; any non-200 answer or fetch failure yields the "not found" default."""
    try:
        resp = fetch_resource(
            sitemap_url, session,
            timeout=timeout,
            max_bytes=SITEMAP_MAX_BYTES,
            validate_status=False,
            headers={"Accept": SITEMAP_ACCEPT},
        )
    except FetchFailure as exc:
        logger.debug("Sitemap fetch failed for {}: {}", sitemap_url, exc)
        return SitemapInfo()

    if resp.status_code != 200:
        logger.debug("Sitemap at {} returned HTTP {}", sitemap_url, resp.status_code)
        return SitemapInfo()

    fmt = detect_format(resp.content_type, resp.body)
    return SitemapInfo(
        found=True,
        accessible=True,
        url_count=count_urls(resp.body, fmt),
        format=fmt,
    )


def detect_format(content_type: str, body: str) -> str:
    if "xml" in content_type.lower() or "<?xml" in body:
        return "xml"
    return "text"


def count_urls(body: str, fmt: str) -> int:
    """
    XML: the larger of the <url> and <loc> tag counts.
    Text: the number of lines that start with an http(s) URL.
    """
    if fmt == "xml":
        return max(len(_URL_TAG.findall(body)), len(_LOC_TAG.findall(body)))
    return sum(1 for line in body.split("\n") if line.strip().startswith("http"))
