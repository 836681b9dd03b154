"""
Plotly chart builders for the audit report.
All functions return plotly Figure objects.
"""
from __future__ import annotations

import plotly.graph_objects as go

from models import AuditResult, LinksResult, ScoreSet, Status
from scoring.scorer import score_color

_BG = "#1A1D27"
_PAPER = "#0E1117"
_GRID = "#2A2D3A"
_TEXT = "#FAFAFA"

_SCORE_LABELS = {
    "technical":   "Technical",
    "content":     "Content",
    "performance": "Performance",
    "mobile":      "Mobile",
}


def _base_layout(**kwargs) -> dict:
    return {
        "paper_bgcolor": _PAPER,
        "plot_bgcolor":  _BG,
        "font": {"color": _TEXT, "family": "sans-serif"},
        "margin": {"l": 20, "r": 20, "t": 40, "b": 20},
        **kwargs,
    }


def _title(text: str) -> dict:
    return {"text": text, "x": 0.5, "xanchor": "center", "font": {"size": 14, "color": _TEXT}}


# ── Overall score gauge ───────────────────────────────────────────────────────

def score_gauge(score: float, title: str = "Overall SEO Score", height: int = 260) -> go.Figure:
    color = score_color(score)
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        domain={"x": [0, 1], "y": [0, 1]},
        number={"font": {"size": 48 if height >= 240 else 28, "color": color}},
        gauge={
            "axis": {"range": [0, 100], "tickcolor": _TEXT, "tickfont": {"color": _TEXT}},
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": _BG,
            "borderwidth": 2,
            "bordercolor": _GRID,
            "steps": [
                {"range": [0, 50],  "color": "#3A1A1A"},
                {"range": [50, 75], "color": "#3A2E1A"},
                {"range": [75, 90], "color": "#2A3A1A"},
                {"range": [90, 100],"color": "#1A3A1A"},
            ],
            "threshold": {
                "line": {"color": color, "width": 4},
                "thickness": 0.8,
                "value": score,
            },
        },
    ))
    fig.update_layout(**_base_layout(height=height), title=_title(title))
    return fig


# ── Component scores (horizontal bar) ─────────────────────────────────────────

def component_scores_bar(scores: ScoreSet) -> go.Figure:
    values = scores.to_dict()
    labels = list(_SCORE_LABELS.values())
    data = [values[key] for key in _SCORE_LABELS]

    fig = go.Figure(go.Bar(
        y=labels,
        x=data,
        orientation="h",
        marker_color=[score_color(v) for v in data],
        hovertemplate="<b>%{y}</b>: %{x}/100<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Score Breakdown"),
        xaxis={"range": [0, 100], "title": "Score", "gridcolor": _GRID, "color": _TEXT},
        yaxis={"gridcolor": _GRID, "color": _TEXT, "automargin": True},
        showlegend=False,
    )
    return fig


# ── Findings by status donut ──────────────────────────────────────────────────

def findings_by_status_donut(result: AuditResult) -> go.Figure:
    counts = {s: 0 for s in Status.ALL}
    for item in result.meta or []:
        counts[item.status] += 1
    if result.headers is not None:
        for finding in result.headers.security + result.headers.caching:
            counts[finding.status] += 1

    total = sum(counts.values())
    if not total:
        return _empty_chart("No findings")

    fig = go.Figure(go.Pie(
        labels=[s.capitalize() for s in Status.ALL],
        values=[counts[s] for s in Status.ALL],
        hole=0.6,
        marker={"colors": [Status.COLORS[s] for s in Status.ALL], "line": {"color": _BG, "width": 2}},
        hovertemplate="<b>%{label}</b>: %{value} findings<extra></extra>",
    ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Findings by Status"),
        annotations=[{
            "text": f"<b>{total}</b><br>Total",
            "x": 0.5, "y": 0.5,
            "font_size": 18,
            "font_color": _TEXT,
            "showarrow": False,
        }],
        legend={"font": {"color": _TEXT}},
        showlegend=True,
    )
    return fig


# ── Link health (stacked bar) ─────────────────────────────────────────────────

def link_health_bar(links: LinksResult) -> go.Figure:
    buckets = {"Internal": links.internal, "External": links.external}
    if not any(b.links for b in buckets.values()):
        return _empty_chart("No links checked")

    fig = go.Figure()
    for label, attr, color in (("Working", "working", Status.COLORS[Status.GOOD]),
                               ("Broken", "broken", Status.COLORS[Status.ERROR])):
        fig.add_trace(go.Bar(
            x=list(buckets.keys()),
            y=[getattr(b, attr) for b in buckets.values()],
            name=label,
            marker_color=color,
            hovertemplate=f"<b>%{{x}}</b><br>{label}: %{{y}}<extra></extra>",
        ))
    fig.update_layout(
        **_base_layout(height=260),
        title=_title("Checked Links"),
        barmode="stack",
        legend={"orientation": "h", "y": -0.15, "font": {"color": _TEXT}},
        xaxis={"gridcolor": _GRID, "color": _TEXT},
        yaxis={"title": "Links", "gridcolor": _GRID, "color": _TEXT},
    )
    return fig


# ── Helper ─────────────────────────────────────────────────────────────────────

def _empty_chart(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, showarrow=False, font={"color": _TEXT, "size": 14})
    fig.update_layout(**_base_layout(height=260))
    return fig
