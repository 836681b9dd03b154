"""
Speed analyzer: desktop and mobile PageSpeed scores plus Core Web Vitals.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from loguru import logger

from analyzers.base import BaseAnalyzer
from config import CORE_WEB_VITAL_AUDITS, MISSING_VITAL, PAGESPEED_STRATEGIES, settings
from crawler.pagespeed import PageSpeedClient, SpeedSource
from errors import ConfigurationMissing, FetchFailure
from models import CoreWebVitals, SpeedResult, SpeedSample, StrategyScore


class SpeedAnalyzer(BaseAnalyzer):
    name = "Speed"

    def __init__(self, source: Optional[SpeedSource] = None, api_key: Optional[str] = None, session_factory=None):
        super().__init__(session_factory)
        self.source = source
        self.api_key = api_key

    def _resolve_source(self) -> SpeedSource:
        if self.source is not None:
            return self.source
        api_key = self.api_key if self.api_key is not None else settings.pagespeed_api_key
        if not api_key:
            raise ConfigurationMissing("PageSpeed API key not configured")
        return PageSpeedClient(api_key, session_factory=self.session_factory)

    def analyze(self, url: str) -> SpeedResult:
        source = self._resolve_source()

        with ThreadPoolExecutor(max_workers=2) as executor:
            futures = {
                strategy: executor.submit(source.fetch_speed_score, url, strategy)
                for strategy in PAGESPEED_STRATEGIES
            }
            samples: dict[str, SpeedSample] = {}
            failures: dict[str, Exception] = {}
            for strategy, future in futures.items():
                try:
                    samples[strategy] = future.result()
                except Exception as exc:
                    logger.warning("PageSpeed {} check failed for {}: {}", strategy, url, exc)
                    failures[strategy] = exc

        if not samples:
            reason = failures.get("desktop") or failures.get("mobile")
            raise FetchFailure(f"PageSpeed analysis failed: {reason}")

        result = SpeedResult()
        desktop = samples.get("desktop")
        if desktop is not None:
            result.performance = StrategyScore(score=desktop.score, strategy="desktop")

        mobile = samples.get("mobile")
        if mobile is not None:
            result.mobile = StrategyScore(score=mobile.score, strategy="mobile")
            if mobile.vitals is not None:
                result.core_web_vitals = build_core_web_vitals(mobile.vitals)

        return result


def build_core_web_vitals(vitals: dict[str, str]) -> CoreWebVitals:
    """Every metric the mobile run did not report becomes "N/A"."""
    values = {key: vitals.get(key) or MISSING_VITAL for key in CORE_WEB_VITAL_AUDITS}
    return CoreWebVitals(**values)
