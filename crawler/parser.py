"""
HTML parser adapter: turns a fetched HTML body into a BeautifulSoup tree and
pulls out the page signals the analyzers classify.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound

from errors import ParseFailure


@dataclass
class PageSignals:
    title: str = ""
    meta_description: str = ""
    canonical: str = ""
    og_tags: dict[str, str] = field(default_factory=dict)
    twitter_tags: dict[str, str] = field(default_factory=dict)
    viewport: str = ""
    lang: str = ""
    h1_tags: list[str] = field(default_factory=list)


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* with lxml, falling back to the stdlib parser."""
    try:
        return BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        pass
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as exc:
        raise ParseFailure(f"Could not parse HTML: {exc}") from exc


def extract_page_signals(soup: BeautifulSoup) -> PageSignals:
    signals = PageSignals()

    # Title
    title_tag = soup.find("title")
    if title_tag:
        signals.title = title_tag.get_text().strip()

    # Meta tags: the first matching tag wins even when its content is empty
    seen: set[str] = set()
    for meta in soup.find_all("meta"):
        name = (meta.get("name") or "").strip()
        prop = (meta.get("property") or "").strip()
        content = meta.get("content") or ""

        if name in ("description", "viewport"):
            if name not in seen:
                seen.add(name)
                if name == "description":
                    signals.meta_description = content
                else:
                    signals.viewport = content
        elif name.startswith("twitter:") and content:
            signals.twitter_tags[name] = content

        if prop.startswith("og:") and content:
            signals.og_tags[prop] = content

    # Canonical
    canonical_tag = soup.find("link", rel=_has_rel("canonical"))
    if canonical_tag:
        signals.canonical = canonical_tag.get("href") or ""

    # Language
    html_tag = soup.find("html")
    if html_tag:
        signals.lang = html_tag.get("lang") or ""

    # Headings
    signals.h1_tags = [h1.get_text().strip() for h1 in soup.find_all("h1")]

    return signals


def extract_anchors(soup: BeautifulSoup) -> list[tuple[str, str]]:
    """Return (href, anchor text) for every <a href> in document order."""
    anchors: list[tuple[str, str]] = []
    for a_tag in soup.find_all("a", href=True):
        href = a_tag.get("href")
        if href:
            anchors.append((href, a_tag.get_text().strip()))
    return anchors


def _has_rel(value: str):
    def match(rel: Optional[object]) -> bool:
        if not rel:
            return False
        values = rel if isinstance(rel, list) else str(rel).split()
        return value in (v.lower() for v in values)
    return match
