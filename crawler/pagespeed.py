"""
Google PageSpeed Insights client.

The speed analyzer only depends on the narrow `SpeedSource` protocol, so tests
(and alternative providers) can stand in for the live API.
"""
from __future__ import annotations

import math
from typing import Any, Callable, Protocol

import requests
from loguru import logger

from config import (
    CORE_WEB_VITAL_AUDITS,
    PAGESPEED_CATEGORIES,
    PAGESPEED_ENDPOINT,
    PAGESPEED_TIMEOUT,
)
from crawler.fetcher import make_session
from errors import FetchFailure, ParseFailure
from models import SpeedSample


class SpeedSource(Protocol):
    def fetch_speed_score(self, url: str, strategy: str) -> SpeedSample:
        ...


class PageSpeedClient:
    """Calls the PageSpeed Insights v5 `runPagespeed` endpoint once per strategy."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = PAGESPEED_ENDPOINT,
        timeout: float = PAGESPEED_TIMEOUT,
        session_factory: Callable[[], requests.Session] = make_session,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.timeout = timeout
        self.session_factory = session_factory

    def fetch_speed_score(self, url: str, strategy: str) -> SpeedSample:
        params = {
            "url": url,
            "key": self.api_key,
            "strategy": strategy,
            "category": list(PAGESPEED_CATEGORIES),
        }
        logger.debug("PageSpeed {} request for {}", strategy, url)

        with self.session_factory() as session:
            try:
                resp = session.get(self.endpoint, params=params, timeout=self.timeout)
            except requests.exceptions.Timeout as exc:
                raise FetchFailure(f"timeout of {int(self.timeout * 1000)}ms exceeded") from exc
            except requests.RequestException as exc:
                raise FetchFailure(str(exc)) from exc

            if resp.status_code >= 400:
                raise FetchFailure(_api_error_message(resp))

            try:
                payload = resp.json()
            except ValueError as exc:
                raise ParseFailure(f"PageSpeed returned invalid JSON: {exc}") from exc

        return parse_lighthouse(payload)


def parse_lighthouse(payload: dict[str, Any]) -> SpeedSample:
    """Extract the rounded performance score and Core Web Vitals display values."""
    lighthouse = payload.get("lighthouseResult")
    if not isinstance(lighthouse, dict):
        raise ParseFailure("PageSpeed response has no lighthouseResult")

    performance = (lighthouse.get("categories") or {}).get("performance") or {}
    raw_score = performance.get("score") or 0
    # half-up rounding, matching the Lighthouse UI
    score = int(math.floor(float(raw_score) * 100 + 0.5))

    audits = lighthouse.get("audits")
    if not isinstance(audits, dict):
        return SpeedSample(score=score)

    vitals: dict[str, str] = {}
    for key, audit_id in CORE_WEB_VITAL_AUDITS.items():
        display = (audits.get(audit_id) or {}).get("displayValue")
        if display:
            vitals[key] = display

    return SpeedSample(score=score, vitals=vitals)


def _api_error_message(resp: requests.Response) -> str:
    """Prefer the API's own error message over the bare status code."""
    try:
        message = resp.json().get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or f"Request failed with status code {resp.status_code}"
