"""Tests for the meta tag analyzer."""

from __future__ import annotations

import pytest

from analyzers.meta import MetaAnalyzer
from conftest import Route, html_page
from errors import FetchFailure
from models import Status

URL = "https://example.com/page"

GOOD_DESCRIPTION = "d" * 150
FULL_HEAD = """
<meta name="viewport" content="width=device-width, initial-scale=1">
<link rel="canonical" href="/page">
<meta property="og:title" content="T">
<meta property="og:description" content="D">
<meta property="og:image" content="https://example.com/i.png">
<meta property="og:url" content="https://example.com/page">
<meta name="twitter:card" content="summary">
<meta name="twitter:title" content="T">
<meta name="twitter:description" content="D">
"""


@pytest.fixture()
def analyzer(session_factory):
    return MetaAnalyzer(session_factory=session_factory)


def _by_name(items):
    return {item.name: item for item in items}


class TestAnalyze:
    def test_fixed_order_and_all_good(self, analyzer, fake_session):
        fake_session.routes[URL] = Route(200, html_page(description=GOOD_DESCRIPTION, extra_head=FULL_HEAD))

        items = analyzer.analyze(URL)

        assert [i.name for i in items] == [
            "Title Tag", "Meta Description", "Canonical URL", "Open Graph Tags",
            "Twitter Cards", "Viewport Meta Tag", "Language Declaration", "H1 Tags",
        ]
        assert all(i.status == Status.GOOD for i in items)
        assert _by_name(items)["Canonical URL"].description == "Canonical URL: https://example.com/page"

    def test_empty_document(self, analyzer, fake_session):
        fake_session.routes[URL] = Route(200, "<html><head></head><body></body></html>")

        items = _by_name(analyzer.analyze(URL))

        assert items["Title Tag"].status == Status.ERROR
        assert items["Meta Description"].status == Status.ERROR
        assert items["Canonical URL"].status == Status.WARNING
        assert items["Open Graph Tags"].status == Status.ERROR
        assert items["Twitter Cards"].status == Status.WARNING
        assert items["Viewport Meta Tag"].status == Status.ERROR
        assert items["Language Declaration"].status == Status.WARNING
        assert items["H1 Tags"].status == Status.ERROR

    def test_fetch_failure_propagates(self, analyzer, fake_session):
        fake_session.routes[URL] = Route(500, "oops")
        with pytest.raises(FetchFailure):
            analyzer.analyze(URL)


class TestTitle:
    def test_good_title(self):
        title = "t" * 45
        item = MetaAnalyzer().check_title(title)
        assert item.status == Status.GOOD
        assert item.length == 45
        assert item.description == f'Title: "{title}" (45 characters)'

    def test_short_title(self):
        item = MetaAnalyzer().check_title("t" * 29)
        assert item.status == Status.WARNING
        assert "Title too short" in item.description
        assert "Recommended: 50-60 characters" in item.description

    def test_long_title(self):
        item = MetaAnalyzer().check_title("t" * 61)
        assert item.status == Status.WARNING
        assert "Title too long" in item.description

    @pytest.mark.parametrize("length", [30, 60])
    def test_bounds_are_inclusive(self, length):
        assert MetaAnalyzer().check_title("t" * length).status == Status.GOOD

    def test_missing_title(self):
        item = MetaAnalyzer().check_title("")
        assert item.status == Status.ERROR
        assert item.description == "Missing title tag"


class TestDescription:
    def test_short(self):
        item = MetaAnalyzer().check_description("d" * 100)
        assert item.status == Status.WARNING
        assert item.description == "Meta description too short: 100 characters. Recommended: 150-160 characters"

    def test_long(self):
        item = MetaAnalyzer().check_description("d" * 161)
        assert item.status == Status.WARNING
        assert "too long: 161 characters" in item.description

    def test_good(self):
        item = MetaAnalyzer().check_description("d" * 120)
        assert item.status == Status.GOOD
        assert item.length == 120


class TestCanonical:
    def test_relative_canonical_resolves(self):
        item = MetaAnalyzer().check_canonical("/other", URL)
        assert item.status == Status.GOOD
        assert item.description == "Canonical URL: https://example.com/other"

    def test_invalid_canonical(self):
        item = MetaAnalyzer().check_canonical("http://[bad", URL)
        assert item.status == Status.ERROR
        assert item.description == "Invalid canonical URL format"


class TestOpenGraph:
    def test_two_missing_is_warning(self):
        item = MetaAnalyzer().check_open_graph({"og:title": "T", "og:description": "D"})
        assert item.status == Status.WARNING
        assert item.description == "Missing Open Graph tags: og:image, og:url"

    def test_three_missing_is_error(self):
        item = MetaAnalyzer().check_open_graph({"og:title": "T"})
        assert item.status == Status.ERROR
        assert item.value == '{"og:title":"T"}'


class TestTwitterCard:
    def test_incomplete(self):
        item = MetaAnalyzer().check_twitter_card({"twitter:card": "summary"})
        assert item.status == Status.WARNING
        assert item.description == "Twitter Card incomplete - missing title or description"

    def test_missing(self):
        assert MetaAnalyzer().check_twitter_card({}).description == "Missing Twitter Card meta tags"


class TestViewportLanguageH1:
    def test_viewport_without_device_width(self):
        item = MetaAnalyzer().check_viewport("initial-scale=1")
        assert item.status == Status.WARNING

    def test_language(self):
        item = MetaAnalyzer().check_language("fr")
        assert item.status == Status.GOOD
        assert item.description == "Language declared as: fr"

    def test_multiple_h1(self):
        item = MetaAnalyzer().check_h1(["One", "Two"])
        assert item.status == Status.WARNING
        assert item.description == "Multiple H1 tags found (2). Single H1 recommended"
        assert item.value == "One, Two"

    def test_long_h1(self):
        item = MetaAnalyzer().check_h1(["h" * 71])
        assert item.status == Status.WARNING
        assert item.description.endswith("Consider shorter H1 for better readability")
