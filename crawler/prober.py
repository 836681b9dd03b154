"""
Bounded-sample liveness probing.
Probes up to `cap` items concurrently and never lets one failed probe affect
the others.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence, TypeVar

import requests

from config import LINK_CHECK_TIMEOUT, LINK_SAMPLE_SIZE, MAX_REDIRECTS
from crawler.fetcher import check_url_status, make_session
from models import LinkRecord, LinkStatus

T = TypeVar("T")
R = TypeVar("R")


def probe_sample(
    items: Sequence[T],
    probe: Callable[[T], R],
    on_error: Callable[[T, Exception], R],
    cap: int = LINK_SAMPLE_SIZE,
) -> list[R]:
    """
    Run *probe* over the first *cap* items concurrently.
    Results come back in input order; a probe that raises is mapped through
    *on_error* instead of propagating.
    """
    sample = list(items[:cap])
    if not sample:
        return []

    with ThreadPoolExecutor(max_workers=len(sample)) as executor:
        futures = [executor.submit(probe, item) for item in sample]
        results: list[R] = []
        for item, future in zip(sample, futures):
            try:
                results.append(future.result())
            except Exception as exc:
                results.append(on_error(item, exc))
    return results


def check_links(
    links: Sequence[LinkRecord],
    session_factory: Callable[[], requests.Session] = make_session,
    cap: int = LINK_SAMPLE_SIZE,
    timeout: float = LINK_CHECK_TIMEOUT,
    max_redirects: int = MAX_REDIRECTS,
) -> list[LinkRecord]:
    """HEAD-probe the first *cap* links; status >= 400 or a network error marks a link broken."""

    def probe(link: LinkRecord) -> LinkRecord:
        with session_factory() as session:
            status_code, error = check_url_status(
                link.full_url or link.href, session, timeout=timeout, max_redirects=max_redirects,
            )
        return _with_status(link, status_code, error)

    def on_error(link: LinkRecord, exc: Exception) -> LinkRecord:
        return _with_status(link, None, str(exc))

    return probe_sample(links, probe, on_error, cap=cap)


def _with_status(link: LinkRecord, status_code: Optional[int], error: Optional[str]) -> LinkRecord:
    broken = status_code is None or status_code >= 400
    return LinkRecord(
        href=link.href,
        text=link.text,
        full_url=link.full_url,
        type=link.type,
        status=LinkStatus.BROKEN if broken else LinkStatus.WORKING,
        status_code=status_code,
        error=error,
    )
