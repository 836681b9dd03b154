"""
HTTP headers analyzer: security response headers and caching.
"""
from __future__ import annotations

from loguru import logger
from requests.structures import CaseInsensitiveDict

from analyzers.base import BaseAnalyzer
from config import (
    CACHE_CONTROL_HEADER,
    HEADERS_FALLBACK_MAX_BYTES,
    HEADERS_TIMEOUT,
    MAX_REDIRECTS,
    SECURITY_HEADERS,
    SecurityHeaderRule,
)
from crawler.fetcher import FetchedResource, fetch_resource
from errors import FetchFailure
from models import HeaderFinding, HeadersResult, Status


class HeadersAnalyzer(BaseAnalyzer):
    name = "Headers"

    def __init__(self, session_factory=None, rules: tuple[SecurityHeaderRule, ...] = SECURITY_HEADERS):
        super().__init__(session_factory)
        self.rules = rules

    def analyze(self, url: str) -> HeadersResult:
        resp = self._fetch_headers(url)
        return HeadersResult(
            security=analyze_security_headers(resp.headers, self.rules),
            caching=analyze_caching_headers(resp.headers),
        )

    def _fetch_headers(self, url: str) -> FetchedResource:
        """HEAD first; some servers reject HEAD, so fall back to a tiny GET."""
        with self.session_factory() as session:
            try:
                return fetch_resource(
                    url, session,
                    method="HEAD",
                    timeout=HEADERS_TIMEOUT,
                    max_redirects=MAX_REDIRECTS,
                    validate_status=False,
                )
            except FetchFailure as exc:
                logger.debug("HEAD {} failed ({}), retrying as GET", url, exc)

            return fetch_resource(
                url, session,
                timeout=HEADERS_TIMEOUT,
                max_redirects=MAX_REDIRECTS,
                max_bytes=HEADERS_FALLBACK_MAX_BYTES,
                truncate=True,
                validate_status=False,
            )


def analyze_security_headers(
    headers: CaseInsensitiveDict,
    rules: tuple[SecurityHeaderRule, ...] = SECURITY_HEADERS,
) -> list[HeaderFinding]:
    """One finding per reference rule, in reference order."""
    findings: list[HeaderFinding] = []

    for rule in rules:
        value = headers.get(rule.header)

        if not value:
            status = Status.ERROR if rule.required else Status.WARNING
            findings.append(HeaderFinding(rule.name, status, f"Missing {rule.name} header"))
            continue

        if rule.expected and not any(exp.lower() in value.lower() for exp in rule.expected):
            findings.append(HeaderFinding(
                rule.name, Status.WARNING,
                f"{rule.name}: {value} (consider: {' or '.join(rule.expected)})",
                value,
            ))
            continue

        findings.append(HeaderFinding(rule.name, Status.GOOD, f"{rule.name}: {value}", value))

    return findings


def analyze_caching_headers(headers: CaseInsensitiveDict) -> list[HeaderFinding]:
    cache_control = headers.get(CACHE_CONTROL_HEADER)
    if cache_control:
        return [HeaderFinding(CACHE_CONTROL_HEADER, Status.GOOD, f"Cache-Control: {cache_control}", cache_control)]
    return [HeaderFinding(CACHE_CONTROL_HEADER, Status.WARNING, "Missing Cache-Control header")]
