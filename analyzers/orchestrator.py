"""
Runs all five analyzers against one URL and assembles the AuditResult.

The analyzers run concurrently and the orchestrator waits for every one of
them to settle; a failing analyzer only costs its own report section.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from loguru import logger

from analyzers.base import BaseAnalyzer
from analyzers.headers import HeadersAnalyzer
from analyzers.links import LinkAnalyzer
from analyzers.meta import MetaAnalyzer
from analyzers.robots_analyzer import RobotsSitemapAnalyzer
from analyzers.speed import SpeedAnalyzer
from models import AuditResult, validate_url
from scoring.recommendations import generate_recommendations
from scoring.scorer import compute_scores

# Report field each analyzer fills, by analyzer name
_REPORT_FIELDS = {
    SpeedAnalyzer.name: "speed",
    MetaAnalyzer.name: "meta",
    LinkAnalyzer.name: "links",
    RobotsSitemapAnalyzer.name: "robots",
    HeadersAnalyzer.name: "headers",
}


@dataclass(frozen=True)
class AnalyzerOutcome:
    """Tagged result of one analyzer: exactly one of value/error is meaningful."""
    name: str
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def default_analyzers() -> list[BaseAnalyzer]:
    return [
        SpeedAnalyzer(),
        MetaAnalyzer(),
        LinkAnalyzer(),
        RobotsSitemapAnalyzer(),
        HeadersAnalyzer(),
    ]


def run_audit(url: str, analyzers: Optional[Sequence[BaseAnalyzer]] = None) -> AuditResult:
    """
    Validate *url*, run every analyzer concurrently and return the merged report.
    Raises InvalidInput before any network I/O if the URL is malformed.
    """
    url = validate_url(url)
    analyzers = list(analyzers) if analyzers is not None else default_analyzers()

    logger.info("Starting comprehensive audit for: {}", url)
    outcomes = settle_all(analyzers, url)

    result = AuditResult(url=url)
    for outcome in outcomes:
        if outcome.ok:
            setattr(result, _REPORT_FIELDS[outcome.name], outcome.value)
        else:
            logger.warning("{} analysis failed for {}: {}", outcome.name, url, outcome.error)
            result.errors.append(f"{outcome.name} analysis failed: {outcome.error}")

    result.scores = compute_scores(result)
    result.recommendations = generate_recommendations(result)

    logger.info(
        "Audit complete for {}: overall={} errors={} recommendations={}",
        url, result.scores.overall, len(result.errors), len(result.recommendations),
    )
    return result


def settle_all(analyzers: Sequence[BaseAnalyzer], url: str) -> list[AnalyzerOutcome]:
    """Run every analyzer concurrently; wait for all, never short-circuit."""
    if not analyzers:
        return []

    with ThreadPoolExecutor(max_workers=len(analyzers)) as executor:
        futures = [(analyzer, executor.submit(analyzer.analyze, url)) for analyzer in analyzers]
        outcomes: list[AnalyzerOutcome] = []
        for analyzer, future in futures:
            try:
                outcomes.append(AnalyzerOutcome(name=analyzer.name, value=future.result()))
            except Exception as exc:
                outcomes.append(AnalyzerOutcome(name=analyzer.name, error=str(exc) or exc.__class__.__name__))
    return outcomes
