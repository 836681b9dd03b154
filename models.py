"""
Core data models for the SEO Audit service.
All modules import from here; nothing else is cross-imported at this level.

Every model exposes to_dict(), which produces the JSON wire shape (camelCase
keys, optional fields omitted when unset).
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlparse

from errors import InvalidInput


# ── Enumerations ──────────────────────────────────────────────────────────────
class Status:
    GOOD    = "good"
    WARNING = "warning"
    ERROR   = "error"

    ALL = [GOOD, WARNING, ERROR]

    COLORS = {
        GOOD:    "#00C851",
        WARNING: "#FFA500",
        ERROR:   "#FF4B4B",
    }

    ICONS = {
        GOOD:    "🟢",
        WARNING: "🟡",
        ERROR:   "🔴",
    }


class Priority:
    HIGH   = "high"
    MEDIUM = "medium"
    LOW    = "low"

    ALL = [HIGH, MEDIUM, LOW]


class LinkType:
    INTERNAL = "internal"
    EXTERNAL = "external"


class LinkStatus:
    WORKING = "working"
    BROKEN  = "broken"


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in data.items() if v is not None}


# ── Request ───────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class AuditRequest:
    url: str

    def __post_init__(self):
        # frozen: store the normalized form
        object.__setattr__(self, "url", validate_url(self.url))


def validate_url(url: Any) -> str:
    """Return *url* stripped of surrounding whitespace if it is an absolute http(s) URL, else raise InvalidInput."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidInput("URL is required")
    url = url.strip()
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidInput(f"Invalid URL format: {exc}") from exc
    if parsed.scheme not in ("http", "https") or not hostname or any(ch.isspace() for ch in parsed.netloc):
        raise InvalidInput("Invalid URL format")
    return url


# ── Meta ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MetaTagItem:
    name: str
    status: str
    description: str
    value: Optional[str] = None
    length: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "name": self.name,
            "status": self.status,
            "description": self.description,
            "value": self.value,
            "length": self.length,
        })


# ── Links ─────────────────────────────────────────────────────────────────────
@dataclass
class LinkRecord:
    href: str
    text: str
    full_url: str
    type: str
    status: Optional[str] = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "href": self.href,
            "text": self.text,
            "fullUrl": self.full_url,
            "type": self.type,
            "status": self.status,
            "statusCode": self.status_code,
            "error": self.error,
        })


@dataclass
class LinkBucket:
    links: list[LinkRecord] = field(default_factory=list)
    working: int = 0
    broken: int = 0
    status: str = Status.GOOD
    total: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "links": [link.to_dict() for link in self.links],
            "working": self.working,
            "broken": self.broken,
            "status": self.status,
            "total": self.total,
        })


@dataclass
class LinksResult:
    internal: LinkBucket
    external: LinkBucket

    def to_dict(self) -> dict[str, Any]:
        return {"internal": self.internal.to_dict(), "external": self.external.to_dict()}


# ── Robots / sitemap ──────────────────────────────────────────────────────────
@dataclass
class RobotsTxtInfo:
    found: bool = False
    accessible: bool = False
    size: int = 0
    sitemaps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "found": self.found,
            "accessible": self.accessible,
            "size": self.size,
            "sitemaps": list(self.sitemaps),
        }


@dataclass
class SitemapInfo:
    found: bool = False
    accessible: bool = False
    url_count: int = 0
    format: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "found": self.found,
            "accessible": self.accessible,
            "urlCount": self.url_count,
            "format": self.format,
        })


@dataclass
class RobotsResult:
    robots_txt: RobotsTxtInfo
    sitemap: SitemapInfo

    def to_dict(self) -> dict[str, Any]:
        return {"robotsTxt": self.robots_txt.to_dict(), "sitemap": self.sitemap.to_dict()}


# ── Headers ───────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class HeaderFinding:
    name: str
    status: str
    description: str
    value: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "name": self.name,
            "status": self.status,
            "description": self.description,
            "value": self.value,
        })


@dataclass
class HeadersResult:
    security: list[HeaderFinding] = field(default_factory=list)
    caching: list[HeaderFinding] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "security": [h.to_dict() for h in self.security],
            "caching": [h.to_dict() for h in self.caching],
        }


# ── Speed ─────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class StrategyScore:
    score: int
    strategy: str

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "strategy": self.strategy}


@dataclass(frozen=True)
class CoreWebVitals:
    lcp: str
    fid: str
    cls: str
    fcp: Optional[str] = None
    si: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"lcp": self.lcp, "fid": self.fid, "cls": self.cls, "fcp": self.fcp, "si": self.si})


@dataclass(frozen=True)
class SpeedSample:
    """One strategy's answer from the page-speed data source."""
    score: int
    vitals: Optional[dict[str, str]] = None


@dataclass
class SpeedResult:
    performance: Optional[StrategyScore] = None
    mobile: Optional[StrategyScore] = None
    core_web_vitals: Optional[CoreWebVitals] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "performance": self.performance.to_dict() if self.performance else None,
            "mobile": self.mobile.to_dict() if self.mobile else None,
            "coreWebVitals": self.core_web_vitals.to_dict() if self.core_web_vitals else None,
        })


# ── Scores & recommendations ──────────────────────────────────────────────────
@dataclass
class ScoreSet:
    overall: int = 0
    technical: int = 0
    content: int = 0
    performance: int = 0
    mobile: int = 0

    def components(self) -> list[int]:
        return [self.technical, self.content, self.performance, self.mobile]

    def to_dict(self) -> dict[str, int]:
        return {
            "overall": self.overall,
            "technical": self.technical,
            "content": self.content,
            "performance": self.performance,
            "mobile": self.mobile,
        }


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    priority: str
    category: str

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "category": self.category,
        }


# ── Top-level audit result ────────────────────────────────────────────────────
@dataclass
class AuditResult:
    url: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )
    scores: ScoreSet = field(default_factory=ScoreSet)
    meta: Optional[list[MetaTagItem]] = None
    speed: Optional[SpeedResult] = None
    links: Optional[LinksResult] = None
    robots: Optional[RobotsResult] = None
    headers: Optional[HeadersResult] = None
    recommendations: list[Recommendation] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def recommendations_by_priority(self) -> dict[str, list[Recommendation]]:
        out: dict[str, list[Recommendation]] = {p: [] for p in Priority.ALL}
        for rec in self.recommendations:
            out.setdefault(rec.priority, []).append(rec)
        return out

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "url": self.url,
            "timestamp": self.timestamp,
            "scores": self.scores.to_dict(),
            "meta": {"items": [m.to_dict() for m in self.meta]} if self.meta is not None else None,
            "speed": self.speed.to_dict() if self.speed else None,
            "links": self.links.to_dict() if self.links else None,
            "robots": self.robots.to_dict() if self.robots else None,
            "headers": self.headers.to_dict() if self.headers else None,
            "recommendations": [r.to_dict() for r in self.recommendations],
            "errors": list(self.errors) or None,
        })
