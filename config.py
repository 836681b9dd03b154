"""
Global configuration for the SEO Audit service.
All tunable thresholds and rule tables live here.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root, never overriding the real environment
load_dotenv(Path(__file__).resolve().parent / ".env", override=False)


# ── Fetch policy ──────────────────────────────────────────────────────────────
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SEO-Audit-Bot/1.0)"
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
SITEMAP_ACCEPT = "application/xml,text/xml,*/*"

MAX_REDIRECTS = 5
PAGE_TIMEOUT = 15                        # seconds
LINK_CHECK_TIMEOUT = 10
ROBOTS_TIMEOUT = 10
SITEMAP_TIMEOUT = 15
HEADERS_TIMEOUT = 15
PAGESPEED_TIMEOUT = 30

ROBOTS_MAX_BYTES = 1024 * 1024           # 1 MB
SITEMAP_MAX_BYTES = 10 * 1024 * 1024     # 10 MB
HEADERS_FALLBACK_MAX_BYTES = 1024        # 1 KB
PAGE_MAX_BYTES = 10 * 1024 * 1024

# ── Link liveness sampling ────────────────────────────────────────────────────
LINK_SAMPLE_SIZE = 10
NON_NAVIGABLE_PREFIXES = ("javascript:", "mailto:", "tel:")


# ── Meta thresholds ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MetaRules:
    title_min_chars: int = 30
    title_max_chars: int = 60
    description_min_chars: int = 120
    description_max_chars: int = 160
    h1_max_chars: int = 70
    required_og_tags: tuple[str, ...] = ("og:title", "og:description", "og:image", "og:url")
    og_error_threshold: int = 2          # more missing than this is an error
    viewport_required_token: str = "width=device-width"


META_RULES = MetaRules()


# ── Security headers expected ─────────────────────────────────────────────────
@dataclass(frozen=True)
class SecurityHeaderRule:
    name: str
    description: str
    required: bool = True
    expected: tuple[str, ...] = field(default_factory=tuple)

    @property
    def header(self) -> str:
        return self.name.lower()


SECURITY_HEADERS: tuple[SecurityHeaderRule, ...] = (
    SecurityHeaderRule("Strict-Transport-Security", "Enforces HTTPS connections"),
    SecurityHeaderRule("X-Content-Type-Options", "Prevents MIME type sniffing", expected=("nosniff",)),
    SecurityHeaderRule("X-Frame-Options", "Prevents clickjacking attacks", expected=("DENY", "SAMEORIGIN")),
    SecurityHeaderRule("Content-Security-Policy", "Prevents XSS and data injection"),
)

CACHE_CONTROL_HEADER = "Cache-Control"


# ── Scoring ───────────────────────────────────────────────────────────────────
ROBOTS_FOUND_POINTS = 50
SITEMAP_FOUND_POINTS = 50
GOOD_SECURITY_HEADER_POINTS = 20
GOOD_META_POINTS = 25
MAX_SCORE = 100

# Desktop performance below these triggers a recommendation
PERFORMANCE_RECOMMEND_BELOW = 80
PERFORMANCE_HIGH_PRIORITY_BELOW = 50


# ── PageSpeed Insights ────────────────────────────────────────────────────────
PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
PAGESPEED_CATEGORIES = ("PERFORMANCE", "ACCESSIBILITY", "BEST_PRACTICES", "SEO")
PAGESPEED_STRATEGIES = ("desktop", "mobile")

# report key -> Lighthouse audit id
CORE_WEB_VITAL_AUDITS: dict[str, str] = {
    "lcp": "largest-contentful-paint",
    "fid": "max-potential-fid",
    "cls": "cumulative-layout-shift",
    "fcp": "first-contentful-paint",
    "si":  "speed-index",
}
MISSING_VITAL = "N/A"


# ── HTTP API ──────────────────────────────────────────────────────────────────
API_ENDPOINTS = (
    "POST /api/audit",
    "GET /api/speed",
    "GET /api/meta",
    "GET /api/links",
    "GET /api/robots",
    "GET /api/headers",
)


# ── Environment ───────────────────────────────────────────────────────────────
@dataclass
class Settings:
    pagespeed_api_key: str = field(
        default_factory=lambda: os.environ.get("PAGESPEED_API_KEY", "")
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


# Module-level singleton:
#   from config import settings
settings = Settings()
