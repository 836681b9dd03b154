"""
Score calculator.

Scoring model:
- Each component score is derived independently from whichever analyzer
  results are present; a missing analyzer leaves its component at 0.
- `overall` is the mean of the non-zero components, so a component that never
  ran does not drag the average down.
"""
from __future__ import annotations

from config import (
    GOOD_META_POINTS,
    GOOD_SECURITY_HEADER_POINTS,
    MAX_SCORE,
    ROBOTS_FOUND_POINTS,
    SITEMAP_FOUND_POINTS,
)
from models import AuditResult, ScoreSet, Status


def _round(value: float) -> int:
    """Half-up rounding."""
    return int(value + 0.5)


def compute_scores(result: AuditResult) -> ScoreSet:
    scores = ScoreSet()

    # ── Performance / mobile ──────────────────────────────────────────────────
    speed = result.speed
    if speed is not None:
        if speed.performance is not None:
            scores.performance = speed.performance.score
        if speed.mobile is not None:
            scores.mobile = speed.mobile.score
        elif speed.performance is not None:
            scores.mobile = speed.performance.score

    # ── Technical: robots + security headers ──────────────────────────────────
    technical_parts: list[int] = []

    if result.robots is not None:
        robots_score = (
            (ROBOTS_FOUND_POINTS if result.robots.robots_txt.found else 0)
            + (SITEMAP_FOUND_POINTS if result.robots.sitemap.found else 0)
        )
        technical_parts.append(robots_score)

    if result.headers is not None:
        good_headers = sum(1 for h in result.headers.security if h.status == Status.GOOD)
        technical_parts.append(min(good_headers * GOOD_SECURITY_HEADER_POINTS, MAX_SCORE))

    if technical_parts:
        scores.technical = _round(sum(technical_parts) / len(technical_parts))

    # ── Content: meta findings ────────────────────────────────────────────────
    if result.meta is not None:
        good_meta = sum(1 for item in result.meta if item.status == Status.GOOD)
        scores.content = min(good_meta * GOOD_META_POINTS, MAX_SCORE)

    # ── Overall ───────────────────────────────────────────────────────────────
    ran = [score for score in scores.components() if score > 0]
    if ran:
        scores.overall = _round(sum(ran) / len(ran))

    return scores


def score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 50:
        return "Needs Work"
    else:
        return "Poor"


def score_color(score: float) -> str:
    if score >= 90:
        return "#00C851"
    elif score >= 75:
        return "#FFD700"
    elif score >= 50:
        return "#FF8800"
    else:
        return "#FF4444"
