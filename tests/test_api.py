"""Tests for the HTTP API.

Analyzers are swapped for stubs via monkeypatch, so no network calls are made.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from analyzers.base import BaseAnalyzer
from api import routes
from api.app import create_app
from errors import FetchFailure
from models import MetaTagItem, RobotsResult, RobotsTxtInfo, SitemapInfo, Status

URL = "https://example.com/"


class StubAnalyzer(BaseAnalyzer):
    def __init__(self, name, value=None, error=None):
        super().__init__()
        self.name = name
        self.value = value
        self.error_ = error

    def analyze(self, url):
        if self.error_ is not None:
            raise self.error_
        return self.value


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture()
def stub_analyzers(monkeypatch):
    analyzers = [
        StubAnalyzer("Speed", error=FetchFailure("PageSpeed API key not configured")),
        StubAnalyzer("Meta", value=[MetaTagItem("Title Tag", Status.ERROR, "Missing title tag", "", 0)]),
        StubAnalyzer("Links", error=FetchFailure("timeout")),
        StubAnalyzer("Robots", value=RobotsResult(RobotsTxtInfo(), SitemapInfo())),
        StubAnalyzer("Headers", error=FetchFailure("timeout")),
    ]
    monkeypatch.setattr(routes, "default_analyzers", lambda: analyzers)
    return analyzers


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "OK"
        assert data["timestamp"].endswith("Z")
        assert "POST /api/audit" in data["endpoints"]


class TestAudit:
    def test_missing_url(self, client):
        resp = client.post("/api/audit", json={})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_empty_url(self, client):
        resp = client.post("/api/audit", json={"url": ""})
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL is required"}

    def test_malformed_url(self, client):
        resp = client.post("/api/audit", json={"url": "not a url"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid URL format"}

    def test_partial_report_is_200(self, client, stub_analyzers):
        resp = client.post("/api/audit", json={"url": URL})
        assert resp.status_code == 200
        data = resp.json()

        assert data["url"] == URL
        assert data["meta"]["items"][0]["name"] == "Title Tag"
        assert data["robots"]["robotsTxt"]["found"] is False
        assert "speed" not in data
        assert len(data["errors"]) == 3
        assert data["errors"][0] == "Speed analysis failed: PageSpeed API key not configured"
        assert [r["title"] for r in data["recommendations"]] == [
            "Improve Title Tag", "Add robots.txt file", "Add XML sitemap",
        ]
        assert data["scores"]["overall"] == 0


    def test_url_with_padding_is_trimmed(self, client, stub_analyzers):
        resp = client.post("/api/audit", json={"url": f" {URL} "})
        assert resp.status_code == 200
        assert resp.json()["url"] == URL

    def test_space_inside_host_is_rejected(self, client, stub_analyzers):
        resp = client.post("/api/audit", json={"url": "https://example.com /page"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid URL format"}


class TestSingleAnalyzerEndpoints:
    def test_missing_url_parameter(self, client):
        resp = client.get("/api/meta")
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL parameter is required"}

    def test_invalid_url_parameter(self, client):
        resp = client.get("/api/headers", params={"url": "ftp://example.com"})
        assert resp.status_code == 400

    def test_list_result_wrapped_in_items(self, client, monkeypatch):
        monkeypatch.setitem(
            routes.ANALYZER_FACTORIES, "meta",
            lambda: StubAnalyzer("Meta", value=[MetaTagItem("H1 Tags", Status.GOOD, "ok")]),
        )
        resp = client.get("/api/meta", params={"url": URL})
        assert resp.status_code == 200
        assert resp.json() == {"items": [{"name": "H1 Tags", "status": "good", "description": "ok"}]}

    def test_analyzer_failure_is_500(self, client, monkeypatch):
        monkeypatch.setitem(
            routes.ANALYZER_FACTORIES, "speed",
            lambda: StubAnalyzer("Speed", error=FetchFailure("PageSpeed API key not configured")),
        )
        resp = client.get("/api/speed", params={"url": URL})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Speed analysis failed: PageSpeed API key not configured"}

    def test_single_endpoint_receives_trimmed_url(self, client, monkeypatch):
        seen = []

        class Recorder(StubAnalyzer):
            def analyze(self, url):
                seen.append(url)
                return []

        monkeypatch.setitem(routes.ANALYZER_FACTORIES, "meta", lambda: Recorder("Meta"))
        resp = client.get("/api/meta", params={"url": f"  {URL}"})
        assert resp.status_code == 200
        assert seen == [URL]

    def test_object_result(self, client, monkeypatch):
        monkeypatch.setitem(
            routes.ANALYZER_FACTORIES, "robots",
            lambda: StubAnalyzer("Robots", value=RobotsResult(RobotsTxtInfo(found=True, accessible=True, size=10),
                                                              SitemapInfo())),
        )
        resp = client.get("/api/robots", params={"url": URL})
        assert resp.status_code == 200
        assert resp.json()["robotsTxt"]["size"] == 10


class TestCrawlHints:
    def test_robots_txt(self, client):
        resp = client.get("/robots.txt")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert "Sitemap: http://testserver/sitemap.xml" in resp.text

    def test_sitemap_xml(self, client):
        resp = client.get("/sitemap.xml")
        assert resp.status_code == 200
        assert "<loc>http://testserver/</loc>" in resp.text
