"""
Recommendation generator.
Scans the report in a fixed order and emits one recommendation per violation;
no deduplication or re-ranking.
"""
from __future__ import annotations

from config import PERFORMANCE_HIGH_PRIORITY_BELOW, PERFORMANCE_RECOMMEND_BELOW
from models import AuditResult, Priority, Recommendation, Status


def generate_recommendations(result: AuditResult) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    # ── Meta findings ─────────────────────────────────────────────────────────
    for item in result.meta or []:
        if item.status in (Status.WARNING, Status.ERROR):
            recommendations.append(Recommendation(
                title=f"Improve {item.name}",
                description=item.description,
                priority=Priority.HIGH if item.status == Status.ERROR else Priority.MEDIUM,
                category="meta",
            ))

    # ── Performance ───────────────────────────────────────────────────────────
    performance = result.speed.performance if result.speed else None
    if performance is not None and 0 < performance.score < PERFORMANCE_RECOMMEND_BELOW:
        recommendations.append(Recommendation(
            title="Improve Page Speed",
            description="Optimize images, minify CSS/JS, and enable compression to improve loading speed",
            priority=Priority.HIGH if performance.score < PERFORMANCE_HIGH_PRIORITY_BELOW else Priority.MEDIUM,
            category="performance",
        ))

    # ── Security headers ──────────────────────────────────────────────────────
    if result.headers is not None:
        for header in result.headers.security:
            if header.status in (Status.WARNING, Status.ERROR):
                recommendations.append(Recommendation(
                    title=f"Add {header.name} header",
                    description=header.description,
                    priority=Priority.MEDIUM,
                    category="security",
                ))

    # ── Broken external links ─────────────────────────────────────────────────
    if result.links is not None and result.links.external.broken > 0:
        recommendations.append(Recommendation(
            title="Fix broken external links",
            description=f"{result.links.external.broken} broken external links detected",
            priority=Priority.HIGH,
            category="links",
        ))

    # ── Robots / sitemap ──────────────────────────────────────────────────────
    if result.robots is not None:
        if not result.robots.robots_txt.found:
            recommendations.append(Recommendation(
                title="Add robots.txt file",
                description="Create a robots.txt file to help search engines crawl your site",
                priority=Priority.MEDIUM,
                category="technical",
            ))
        if not result.robots.sitemap.found:
            recommendations.append(Recommendation(
                title="Add XML sitemap",
                description="Create and submit an XML sitemap to help search engines index your pages",
                priority=Priority.MEDIUM,
                category="technical",
            ))

    return recommendations
