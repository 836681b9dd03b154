"""
Meta tag analyzer: title, description, canonical, Open Graph, Twitter Cards,
viewport, language and H1 tags.
"""
from __future__ import annotations

import json
from urllib.parse import urljoin, urlparse

from analyzers.base import BaseAnalyzer
from config import HTML_ACCEPT, MAX_REDIRECTS, META_RULES, PAGE_TIMEOUT, MetaRules
from crawler.fetcher import fetch_resource
from crawler.parser import extract_page_signals, parse_html
from models import MetaTagItem


class MetaAnalyzer(BaseAnalyzer):
    name = "Meta"

    def __init__(self, session_factory=None, rules: MetaRules = META_RULES):
        super().__init__(session_factory)
        self.rules = rules

    def analyze(self, url: str) -> list[MetaTagItem]:
        with self.session_factory() as session:
            resp = fetch_resource(
                url, session,
                timeout=PAGE_TIMEOUT,
                max_redirects=MAX_REDIRECTS,
                headers={"Accept": HTML_ACCEPT},
            )

        signals = extract_page_signals(parse_html(resp.body))

        return [
            self.check_title(signals.title),
            self.check_description(signals.meta_description),
            self.check_canonical(signals.canonical, url),
            self.check_open_graph(signals.og_tags),
            self.check_twitter_card(signals.twitter_tags),
            self.check_viewport(signals.viewport),
            self.check_language(signals.lang),
            self.check_h1(signals.h1_tags),
        ]

    # ── Title ─────────────────────────────────────────────────────────────────
    def check_title(self, title: str) -> MetaTagItem:
        name, length = "Title Tag", len(title)

        if not title:
            return self.error(name, "Missing title tag", title, length)
        if length < self.rules.title_min_chars:
            return self.warning(
                name,
                f'Title too short: "{title}" ({length} characters). Recommended: 50-60 characters',
                title, length,
            )
        if length > self.rules.title_max_chars:
            return self.warning(
                name,
                f'Title too long: "{title}" ({length} characters). May be truncated in search results',
                title, length,
            )
        return self.good(name, f'Title: "{title}" ({length} characters)', title, length)

    # ── Description ───────────────────────────────────────────────────────────
    def check_description(self, description: str) -> MetaTagItem:
        name, length = "Meta Description", len(description)

        if not description:
            return self.error(name, "Missing meta description", description, length)
        if length < self.rules.description_min_chars:
            return self.warning(
                name,
                f"Meta description too short: {length} characters. Recommended: 150-160 characters",
                description, length,
            )
        if length > self.rules.description_max_chars:
            return self.warning(
                name,
                f"Meta description too long: {length} characters. May be truncated in search results",
                description, length,
            )
        return self.good(name, f'Meta description: "{description}" ({length} characters)', description, length)

    # ── Canonical ─────────────────────────────────────────────────────────────
    def check_canonical(self, canonical: str, page_url: str) -> MetaTagItem:
        name = "Canonical URL"

        if not canonical:
            return self.warning(name, "Missing canonical URL - may cause duplicate content issues", canonical)

        resolved = _resolve(canonical, page_url)
        if resolved is None:
            return self.error(name, "Invalid canonical URL format", canonical)
        return self.good(name, f"Canonical URL: {resolved}", canonical)

    # ── Open Graph ────────────────────────────────────────────────────────────
    def check_open_graph(self, og_tags: dict[str, str]) -> MetaTagItem:
        name = "Open Graph Tags"
        value = json.dumps(og_tags, separators=(",", ":"))
        missing = [tag for tag in self.rules.required_og_tags if not og_tags.get(tag)]

        if not missing:
            return self.good(name, "All essential Open Graph tags present", value)

        description = f"Missing Open Graph tags: {', '.join(missing)}"
        if len(missing) > self.rules.og_error_threshold:
            return self.error(name, description, value)
        return self.warning(name, description, value)

    # ── Twitter Cards ─────────────────────────────────────────────────────────
    def check_twitter_card(self, twitter_tags: dict[str, str]) -> MetaTagItem:
        name = "Twitter Cards"
        value = json.dumps(twitter_tags, separators=(",", ":"))

        if not twitter_tags.get("twitter:card"):
            return self.warning(name, "Missing Twitter Card meta tags", value)
        if not twitter_tags.get("twitter:title") or not twitter_tags.get("twitter:description"):
            return self.warning(name, "Twitter Card incomplete - missing title or description", value)
        return self.good(name, "Twitter Card tags properly configured", value)

    # ── Viewport ──────────────────────────────────────────────────────────────
    def check_viewport(self, viewport: str) -> MetaTagItem:
        name = "Viewport Meta Tag"

        if not viewport:
            return self.error(name, "Missing viewport meta tag - required for mobile responsiveness", viewport)
        if self.rules.viewport_required_token not in viewport:
            return self.warning(
                name,
                "Viewport tag should include width=device-width for proper mobile rendering",
                viewport,
            )
        return self.good(name, "Viewport meta tag properly configured", viewport)

    # ── Language ──────────────────────────────────────────────────────────────
    def check_language(self, lang: str) -> MetaTagItem:
        name = "Language Declaration"
        if lang:
            return self.good(name, f"Language declared as: {lang}", lang)
        return self.warning(name, "Missing language declaration in HTML tag", lang)

    # ── H1 ────────────────────────────────────────────────────────────────────
    def check_h1(self, h1_tags: list[str]) -> MetaTagItem:
        name = "H1 Tags"
        value = ", ".join(h1_tags)

        if not h1_tags:
            return self.error(name, "Missing H1 tag - important for SEO structure", value)
        if len(h1_tags) > 1:
            return self.warning(name, f"Multiple H1 tags found ({len(h1_tags)}). Single H1 recommended", value)

        h1 = h1_tags[0]
        description = f'H1 tag: "{h1}" ({len(h1)} characters)'
        if len(h1) > self.rules.h1_max_chars:
            return self.warning(name, description + " - Consider shorter H1 for better readability", value)
        return self.good(name, description, value)


def _resolve(href: str, base_url: str) -> str | None:
    """Resolve *href* against *base_url*; None when the result is not a usable URL."""
    try:
        resolved = urljoin(base_url, href.strip())
        parsed = urlparse(resolved)
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if not parsed.scheme or (parsed.scheme in ("http", "https") and not parsed.hostname):
        return None
    return resolved
