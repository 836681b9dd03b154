"""Tests for the speed analyzer and the PageSpeed Insights client.

The analyzer is driven through a stub ``SpeedSource``; the client is driven
through the fake session so no request ever leaves the process.
"""

from __future__ import annotations

import json

import pytest

from analyzers.speed import SpeedAnalyzer, build_core_web_vitals
from config import PAGESPEED_ENDPOINT
from conftest import Route
from crawler.pagespeed import PageSpeedClient, parse_lighthouse
from errors import ConfigurationMissing, FetchFailure, ParseFailure
from models import SpeedSample

URL = "https://example.com/"


class StubSource:
    def __init__(self, answers):
        self.answers = answers
        self.calls = []

    def fetch_speed_score(self, url, strategy):
        self.calls.append((url, strategy))
        answer = self.answers[strategy]
        if isinstance(answer, Exception):
            raise answer
        return answer


def _lighthouse(score=0.873, audits=None):
    payload = {"lighthouseResult": {"categories": {"performance": {"score": score}}}}
    if audits is not None:
        payload["lighthouseResult"]["audits"] = audits
    return payload


# ---------------------------------------------------------------------------
# SpeedAnalyzer
# ---------------------------------------------------------------------------

class TestSpeedAnalyzer:
    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("PAGESPEED_API_KEY", raising=False)
        with pytest.raises(ConfigurationMissing, match="PageSpeed API key not configured"):
            SpeedAnalyzer(api_key="").analyze(URL)

    def test_both_strategies(self):
        source = StubSource({
            "desktop": SpeedSample(score=92, vitals={"lcp": "1.0 s"}),
            "mobile": SpeedSample(score=61, vitals={"lcp": "3.2 s", "cls": "0.1", "fid": "120 ms"}),
        })
        result = SpeedAnalyzer(source=source).analyze(URL)

        assert result.performance.score == 92
        assert result.performance.strategy == "desktop"
        assert result.mobile.score == 61
        # vitals come from the mobile run
        assert result.core_web_vitals.lcp == "3.2 s"
        assert result.core_web_vitals.fcp == "N/A"
        assert sorted(source.calls) == [(URL, "desktop"), (URL, "mobile")]

    def test_mobile_failure_keeps_desktop(self):
        source = StubSource({"desktop": SpeedSample(score=80), "mobile": FetchFailure("quota")})
        result = SpeedAnalyzer(source=source).analyze(URL)

        assert result.performance.score == 80
        assert result.mobile is None
        assert result.core_web_vitals is None
        assert result.to_dict() == {"performance": {"score": 80, "strategy": "desktop"}}

    def test_both_fail(self):
        source = StubSource({"desktop": FetchFailure("quota exceeded"), "mobile": FetchFailure("quota exceeded")})
        with pytest.raises(FetchFailure, match="PageSpeed analysis failed: quota exceeded"):
            SpeedAnalyzer(source=source).analyze(URL)

    def test_all_vitals_missing(self):
        vitals = build_core_web_vitals({})
        assert vitals.to_dict() == {"lcp": "N/A", "fid": "N/A", "cls": "N/A", "fcp": "N/A", "si": "N/A"}


# ---------------------------------------------------------------------------
# PageSpeed client
# ---------------------------------------------------------------------------

class TestParseLighthouse:
    def test_rounds_half_up(self):
        assert parse_lighthouse(_lighthouse(score=0.875)).score == 88
        assert parse_lighthouse(_lighthouse(score=0.5)).score == 50

    def test_extracts_display_values(self):
        sample = parse_lighthouse(_lighthouse(audits={
            "largest-contentful-paint": {"displayValue": "2.5 s"},
            "cumulative-layout-shift": {"displayValue": "0.02"},
            "speed-index": {},
        }))
        assert sample.vitals == {"lcp": "2.5 s", "cls": "0.02"}

    def test_no_audits_means_no_vitals(self):
        assert parse_lighthouse(_lighthouse()).vitals is None

    def test_missing_lighthouse_result(self):
        with pytest.raises(ParseFailure):
            parse_lighthouse({"kind": "pagespeedonline#result"})


class TestPageSpeedClient:
    def test_fetches_and_parses(self, fake_session, session_factory):
        fake_session.routes[PAGESPEED_ENDPOINT] = Route(
            200, json.dumps(_lighthouse(score=0.42)), {"Content-Type": "application/json"},
        )
        client = PageSpeedClient("secret", session_factory=session_factory)

        sample = client.fetch_speed_score(URL, "mobile")

        assert sample.score == 42
        params = fake_session.params[0]
        assert params["url"] == URL
        assert params["key"] == "secret"
        assert params["strategy"] == "mobile"
        assert "PERFORMANCE" in params["category"]

    def test_api_error_message_is_surfaced(self, fake_session, session_factory):
        fake_session.routes[PAGESPEED_ENDPOINT] = Route(
            429, json.dumps({"error": {"message": "Quota exceeded"}}), {"Content-Type": "application/json"},
        )
        with pytest.raises(FetchFailure, match="Quota exceeded"):
            PageSpeedClient("secret", session_factory=session_factory).fetch_speed_score(URL, "desktop")

    def test_invalid_json(self, fake_session, session_factory):
        fake_session.routes[PAGESPEED_ENDPOINT] = Route(200, "<html>", {"Content-Type": "text/html"})
        with pytest.raises(ParseFailure):
            PageSpeedClient("secret", session_factory=session_factory).fetch_speed_score(URL, "desktop")
