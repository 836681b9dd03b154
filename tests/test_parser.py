"""Tests for HTML signal extraction."""

from __future__ import annotations

from crawler.parser import extract_anchors, extract_page_signals, parse_html

HTML = """<!DOCTYPE html>
<html lang="de">
<head>
  <title>  Spaced Title  </title>
  <meta name="description" content="first">
  <meta name="description" content="second">
  <meta name="viewport" content="width=device-width">
  <meta property="og:title" content="OG">
  <meta property="og:image" content="">
  <meta name="twitter:card" content="summary">
  <link rel="alternate stylesheet" href="/alt.css">
  <link rel="Canonical" href="https://example.com/c">
</head>
<body>
  <h1> One </h1><h1>Two</h1>
  <a href="/a"> Link A </a>
  <a name="anchor-only">no href</a>
  <a href="">empty</a>
</body>
</html>
"""


def test_extract_page_signals():
    signals = extract_page_signals(parse_html(HTML))

    assert signals.title == "Spaced Title"
    assert signals.meta_description == "first"
    assert signals.viewport == "width=device-width"
    assert signals.og_tags == {"og:title": "OG"}
    assert signals.twitter_tags == {"twitter:card": "summary"}
    assert signals.canonical == "https://example.com/c"
    assert signals.lang == "de"
    assert signals.h1_tags == ["One", "Two"]


def test_extract_anchors_skips_missing_href():
    assert extract_anchors(parse_html(HTML)) == [("/a", "Link A")]


def test_garbage_input_still_parses():
    signals = extract_page_signals(parse_html("<<not html>>"))
    assert signals.title == ""
    assert signals.h1_tags == []


def test_first_description_tag_wins_even_without_content():
    html = """<html><head>
      <meta name="description">
      <meta name="description" content="later">
      <meta name="viewport" content="">
      <meta name="viewport" content="width=device-width">
    </head><body></body></html>"""
    signals = extract_page_signals(parse_html(html))
    assert signals.meta_description == ""
    assert signals.viewport == ""
