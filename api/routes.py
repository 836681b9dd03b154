"""Audit endpoints.

Routes
------
POST /api/audit            body ``{"url": "..."}``
GET  /api/speed?url=...
GET  /api/meta?url=...
GET  /api/links?url=...
GET  /api/robots?url=...
GET  /api/headers?url=...
GET  /api/health
GET  /robots.txt
GET  /sitemap.xml
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger
from pydantic import BaseModel

from analyzers.base import BaseAnalyzer
from analyzers.headers import HeadersAnalyzer
from analyzers.links import LinkAnalyzer
from analyzers.meta import MetaAnalyzer
from analyzers.orchestrator import default_analyzers, run_audit
from analyzers.robots_analyzer import RobotsSitemapAnalyzer
from analyzers.speed import SpeedAnalyzer
from config import API_ENDPOINTS
from errors import InvalidInput
from models import AuditRequest

router = APIRouter()

# endpoint name -> analyzer factory; a fresh analyzer per request
ANALYZER_FACTORIES: dict[str, Callable[[], BaseAnalyzer]] = {
    "speed": SpeedAnalyzer,
    "meta": MetaAnalyzer,
    "links": LinkAnalyzer,
    "robots": RobotsSitemapAnalyzer,
    "headers": HeadersAnalyzer,
}


class AuditBody(BaseModel):
    url: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _run_single(key: str, url: Optional[str]) -> Any:
    if not url:
        return _error(400, "URL parameter is required")
    url = AuditRequest(url).url

    analyzer = ANALYZER_FACTORIES[key]()
    try:
        result = analyzer.analyze(url)
    except Exception as exc:
        logger.error("{} analysis error for {}: {}", analyzer.name, url, exc)
        return _error(500, f"{analyzer.name} analysis failed: {exc}")

    if isinstance(result, list):
        return {"items": [item.to_dict() for item in result]}
    return result.to_dict()


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/api/health")
def health() -> dict[str, Any]:
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "endpoints": list(API_ENDPOINTS),
    }


@router.post("/api/audit")
def audit(body: AuditBody) -> Any:
    """Run the full audit. Analyzer failures are reported in ``errors``, not as HTTP errors."""
    try:
        request = AuditRequest(body.url)
        result = run_audit(request.url, analyzers=default_analyzers())
    except InvalidInput:
        raise
    except Exception as exc:
        logger.exception("Audit error for {}", body.url)
        return _error(500, str(exc) or "Audit failed")
    return result.to_dict()


@router.get("/api/speed")
def speed(url: Optional[str] = None) -> Any:
    return _run_single("speed", url)


@router.get("/api/meta")
def meta(url: Optional[str] = None) -> Any:
    return _run_single("meta", url)


@router.get("/api/links")
def links(url: Optional[str] = None) -> Any:
    return _run_single("links", url)


@router.get("/api/robots")
def robots(url: Optional[str] = None) -> Any:
    return _run_single("robots", url)


@router.get("/api/headers")
def headers(url: Optional[str] = None) -> Any:
    return _run_single("headers", url)


# ---------------------------------------------------------------------------
# The service's own crawl hints
# ---------------------------------------------------------------------------

@router.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt(request: Request) -> str:
    base_url = str(request.base_url).rstrip("/")
    return (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        "# Sitemap\n"
        f"Sitemap: {base_url}/sitemap.xml\n"
        "\n"
        "# Crawl-delay for respectful crawling\n"
        "Crawl-delay: 1\n"
        "\n"
        "# Block development/testing paths\n"
        "Disallow: /test\n"
        "Disallow: /dev\n"
        "Disallow: /_*"
    )


@router.get("/sitemap.xml")
def sitemap_xml(request: Request) -> Response:
    base_url = str(request.base_url).rstrip("/")
    body = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        "  <url>\n"
        f"    <loc>{base_url}/</loc>\n"
        f"    <lastmod>{date.today().isoformat()}</lastmod>\n"
        "    <changefreq>weekly</changefreq>\n"
        "    <priority>1.0</priority>\n"
        "  </url>\n"
        "</urlset>"
    )
    return Response(content=body, media_type="application/xml")
