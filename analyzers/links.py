"""
Link analyzer: classifies anchors as internal/external and probes a sample of
each bucket for broken links.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin, urlparse

from loguru import logger

from analyzers.base import BaseAnalyzer
from config import (
    HTML_ACCEPT,
    LINK_CHECK_TIMEOUT,
    LINK_SAMPLE_SIZE,
    MAX_REDIRECTS,
    NON_NAVIGABLE_PREFIXES,
    PAGE_TIMEOUT,
)
from crawler.fetcher import fetch_resource
from crawler.parser import extract_anchors, parse_html
from crawler.prober import check_links
from models import LinkBucket, LinkRecord, LinksResult, LinkStatus, LinkType, Status


class LinkAnalyzer(BaseAnalyzer):
    name = "Links"

    def __init__(self, session_factory=None, sample_size: int = LINK_SAMPLE_SIZE, probe_timeout: float = LINK_CHECK_TIMEOUT):
        super().__init__(session_factory)
        self.sample_size = sample_size
        self.probe_timeout = probe_timeout

    def analyze(self, url: str) -> LinksResult:
        with self.session_factory() as session:
            resp = fetch_resource(
                url, session,
                timeout=PAGE_TIMEOUT,
                max_redirects=MAX_REDIRECTS,
                headers={"Accept": HTML_ACCEPT},
            )

        anchors = extract_anchors(parse_html(resp.body))
        internal, external = classify_links(anchors, url)
        logger.debug("{}: {} internal / {} external links", url, len(internal), len(external))

        checked_internal = self._check(internal)
        checked_external = self._check(external)

        return LinksResult(
            internal=_bucket(checked_internal),
            external=_bucket(checked_external, total=len(external)),
        )

    def _check(self, links: list[LinkRecord]) -> list[LinkRecord]:
        return check_links(
            links,
            session_factory=self.session_factory,
            cap=self.sample_size,
            timeout=self.probe_timeout,
        )


def classify_links(anchors: list[tuple[str, str]], page_url: str) -> tuple[list[LinkRecord], list[LinkRecord]]:
    """
    Split anchors into (internal, external) by exact hostname match against
    *page_url*. Non-navigable and unresolvable hrefs are dropped.
    """
    base = urlparse(page_url)
    internal: list[LinkRecord] = []
    external: list[LinkRecord] = []

    for raw_href, text in anchors:
        href = raw_href.strip()
        if not href or href == "#" or href.startswith(NON_NAVIGABLE_PREFIXES):
            continue

        full_url = resolve_href(href, page_url, base.scheme)
        if full_url is None:
            continue

        hostname = urlparse(full_url).hostname
        if hostname == base.hostname:
            internal.append(LinkRecord(href=raw_href, text=text, full_url=full_url, type=LinkType.INTERNAL))
        else:
            external.append(LinkRecord(href=raw_href, text=text, full_url=full_url, type=LinkType.EXTERNAL))

    return internal, external


def resolve_href(href: str, page_url: str, scheme: str) -> Optional[str]:
    """Absolute URL for *href*, or None when it cannot be resolved to a URL with a host."""
    try:
        if href.startswith("//"):
            full_url = f"{scheme}:{href}"
        elif href.startswith("/") or "://" not in href:
            full_url = urljoin(page_url, href)
        else:
            full_url = href

        parsed = urlparse(full_url)
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return None

    # data:, sms: and similar hrefs have no host; they are dropped, not counted as external
    if not parsed.scheme or not parsed.hostname:
        return None
    return full_url


def _bucket(checked: list[LinkRecord], total: Optional[int] = None) -> LinkBucket:
    broken = sum(1 for link in checked if link.status == LinkStatus.BROKEN)
    return LinkBucket(
        links=checked,
        working=sum(1 for link in checked if link.status == LinkStatus.WORKING),
        broken=broken,
        status=Status.WARNING if broken else Status.GOOD,
        total=total,
    )
