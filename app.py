"""
SEO Audit: Streamlit application
Single-page audit report: speed, meta tags, links, robots/sitemap and headers.
"""
from __future__ import annotations

from datetime import datetime
from urllib.parse import urlparse

import pandas as pd
import streamlit as st

from analyzers.orchestrator import run_audit
from errors import InvalidInput
from log import configure_logging
from models import AuditResult, Priority, Status
from reporting.exporter import (
    findings_summary_df,
    headers_to_df,
    links_to_df,
    meta_to_df,
    recommendations_to_df,
    to_csv_bytes,
)
from scoring.scorer import score_color, score_label
from ui.charts import component_scores_bar, findings_by_status_donut, link_health_bar, score_gauge

configure_logging()

# ── Page config ────────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="SEO Audit",
    page_icon="🔍",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ─────────────────────────────────────────────────────────────────
st.markdown("""
<style>
.block-container { padding-top: 1rem; }

/* Metric cards */
.metric-card {
    background: #1A1D27;
    border-radius: 10px;
    padding: 1rem 1.2rem;
    margin-bottom: 0.5rem;
    border-left: 4px solid;
}
.metric-card.error    { border-color: #FF4B4B; }
.metric-card.warning  { border-color: #FFA500; }
.metric-card.good     { border-color: #00C851; }
.metric-card.neutral  { border-color: #6C63FF; }

.metric-val  { font-size: 2rem; font-weight: 700; margin: 0; }
.metric-lbl  { font-size: 0.8rem; color: #888; text-transform: uppercase; letter-spacing: 0.05em; }

/* Priority pills */
.pill {
    display: inline-block;
    padding: 2px 10px;
    border-radius: 12px;
    font-size: 0.75rem;
    font-weight: 600;
    letter-spacing: 0.05em;
    text-transform: uppercase;
}
.pill.high   { background: #FF4B4B22; color: #FF4B4B; border: 1px solid #FF4B4B55; }
.pill.medium { background: #FFA50022; color: #FFA500; border: 1px solid #FFA50055; }
.pill.low    { background: #4B9EFF22; color: #4B9EFF; border: 1px solid #4B9EFF55; }

.modebar { display: none !important; }

.sidebar-logo { font-size: 1.5rem; font-weight: 800; color: #6C63FF; margin-bottom: 0.5rem; }
</style>
""", unsafe_allow_html=True)


# ── State helpers ──────────────────────────────────────────────────────────────

def _clear_results():
    st.session_state.pop("audit_result", None)


def _has_result() -> bool:
    return "audit_result" in st.session_state and st.session_state.audit_result is not None


# ── Sidebar ────────────────────────────────────────────────────────────────────

def render_sidebar() -> str | None:
    with st.sidebar:
        st.markdown('<div class="sidebar-logo">🔍 SEO Audit</div>', unsafe_allow_html=True)
        st.caption("Single-page SEO audit")
        st.divider()

        st.subheader("Target")
        url = st.text_input(
            "Page URL",
            placeholder="https://example.com",
            help="Full URL including https://",
        )

        st.divider()

        if _has_result():
            if st.button("🔄 New Audit", use_container_width=True):
                _clear_results()
                st.rerun()
            st.divider()

        start = st.button("Start Audit", type="primary", use_container_width=True)

        if not _has_result():
            st.divider()
            st.caption("Enter a page URL and click **Start Audit** to run every check against it.")

    if start and url:
        url = url.strip()
        if not url.startswith("http"):
            url = "https://" + url
        return url

    return None


# ── Run audit ──────────────────────────────────────────────────────────────────

def start_audit(url: str) -> None:
    with st.status("Running audit…", expanded=True) as status_widget:
        st.write(f"Auditing **{url}**…")
        try:
            result = run_audit(url)
        except InvalidInput as exc:
            status_widget.update(label="Invalid URL", state="error")
            st.error(str(exc))
            return

        st.write(f"Generated **{len(result.recommendations)}** recommendation(s).")
        if result.errors:
            status_widget.update(label="Audit finished with errors", state="complete")
        else:
            status_widget.update(label="Audit complete!", state="complete")

    st.session_state.audit_result = result
    st.rerun()


# ── Dashboard: Overview ────────────────────────────────────────────────────────

def render_overview(result: AuditResult) -> None:
    scores = result.scores
    by_priority = result.recommendations_by_priority

    col_gauge, col_stats = st.columns([1, 2])

    with col_gauge:
        st.plotly_chart(score_gauge(scores.overall), use_container_width=True)
        color = score_color(scores.overall)
        st.markdown(
            f'<div style="text-align:center;font-size:1.1rem;font-weight:700;color:{color}">'
            f'{score_label(scores.overall)}</div>',
            unsafe_allow_html=True,
        )

    with col_stats:
        c1, c2, c3, c4 = st.columns(4)
        _metric_card(c1, "Technical",   scores.technical,   _score_class(scores.technical))
        _metric_card(c2, "Content",     scores.content,     _score_class(scores.content))
        _metric_card(c3, "Performance", scores.performance, _score_class(scores.performance))
        _metric_card(c4, "Mobile",      scores.mobile,      _score_class(scores.mobile))

        c5, c6, c7, c8 = st.columns(4)
        _metric_card(c5, "High Priority", len(by_priority[Priority.HIGH]),
                     "error" if by_priority[Priority.HIGH] else "good")
        _metric_card(c6, "Medium Priority", len(by_priority[Priority.MEDIUM]),
                     "warning" if by_priority[Priority.MEDIUM] else "good")
        _metric_card(c7, "Failed Checks", len(result.errors), "error" if result.errors else "good")
        _metric_card(c8, "Audited", result.timestamp[11:19], "neutral")

    if result.errors:
        st.divider()
        for err in result.errors:
            st.warning(err)

    st.divider()
    c_left, c_right = st.columns(2)
    with c_left:
        st.plotly_chart(component_scores_bar(scores), use_container_width=True)
    with c_right:
        st.plotly_chart(findings_by_status_donut(result), use_container_width=True)

    st.divider()
    st.subheader("Recommendations")
    render_recommendations(result)


def render_recommendations(result: AuditResult) -> None:
    if not result.recommendations:
        st.success("No recommendations, everything checked out.")
        return

    for priority, recs in result.recommendations_by_priority.items():
        for rec in recs:
            st.markdown(
                f'<span class="pill {priority}">{priority}</span> '
                f'**{rec.title}** <span style="color:#888">({rec.category})</span>',
                unsafe_allow_html=True,
            )
            st.caption(rec.description)


# ── Dashboard: Meta ────────────────────────────────────────────────────────────

def render_meta(result: AuditResult) -> None:
    if result.meta is None:
        st.warning("Meta tag analysis did not complete.")
        return

    df = meta_to_df(result)
    _render_status_table(df)


# ── Dashboard: Speed ───────────────────────────────────────────────────────────

def render_speed(result: AuditResult) -> None:
    speed = result.speed
    if speed is None:
        st.warning("Page speed analysis did not complete.")
        return

    col1, col2 = st.columns(2)
    with col1:
        if speed.performance is not None:
            st.plotly_chart(score_gauge(speed.performance.score, "Desktop", height=220), use_container_width=True)
        else:
            st.info("No desktop score.")
    with col2:
        if speed.mobile is not None:
            st.plotly_chart(score_gauge(speed.mobile.score, "Mobile", height=220), use_container_width=True)
        else:
            st.info("No mobile score.")

    vitals = speed.core_web_vitals
    if vitals is not None:
        st.subheader("Core Web Vitals")
        c1, c2, c3, c4, c5 = st.columns(5)
        _metric_card(c1, "LCP", vitals.lcp)
        _metric_card(c2, "FID", vitals.fid)
        _metric_card(c3, "CLS", vitals.cls)
        _metric_card(c4, "FCP", vitals.fcp or "N/A")
        _metric_card(c5, "Speed Index", vitals.si or "N/A")


# ── Dashboard: Links ───────────────────────────────────────────────────────────

def render_links(result: AuditResult) -> None:
    links = result.links
    if links is None:
        st.warning("Link analysis did not complete.")
        return

    c1, c2, c3, c4 = st.columns(4)
    _metric_card(c1, "Internal Checked", len(links.internal.links), "neutral")
    _metric_card(c2, "Internal Broken", links.internal.broken, links.internal.status)
    _metric_card(c3, "External Found", links.external.total or 0, "neutral")
    _metric_card(c4, "External Broken", links.external.broken, links.external.status)

    st.plotly_chart(link_health_bar(links), use_container_width=True)

    df = links_to_df(result)
    if df.empty:
        st.info("No links found on the page.")
        return
    st.dataframe(
        df,
        use_container_width=True,
        height=min(600, len(df) * 36 + 60),
        column_config={
            "URL":         st.column_config.TextColumn("URL", width="large"),
            "Status Code": st.column_config.TextColumn("Status Code", width="small"),
        },
    )


# ── Dashboard: Robots & Sitemap ────────────────────────────────────────────────

def render_crawlability(result: AuditResult) -> None:
    robots = result.robots
    if robots is None:
        st.warning("Robots and sitemap analysis did not complete.")
        return

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("robots.txt")
        rt = robots.robots_txt
        st.markdown(f"**Found:** {'Yes' if rt.found else 'No'}")
        if rt.found:
            st.markdown(f"**Size:** {rt.size:,} bytes")
            if rt.sitemaps:
                st.markdown("**Sitemaps declared:**")
                for sm_url in rt.sitemaps:
                    st.markdown(f"- `{sm_url}`")

    with col2:
        st.subheader("Sitemap")
        sm = robots.sitemap
        st.markdown(f"**Found:** {'Yes' if sm.found else 'No'}")
        if sm.found:
            st.markdown(f"**Format:** {sm.format or 'unknown'}")
            st.markdown(f"**URLs found:** {sm.url_count:,}")


# ── Dashboard: Headers ─────────────────────────────────────────────────────────

def render_headers(result: AuditResult) -> None:
    if result.headers is None:
        st.warning("Header analysis did not complete.")
        return

    _render_status_table(headers_to_df(result))


# ── Dashboard: Export ─────────────────────────────────────────────────────────

def render_export(result: AuditResult) -> None:
    st.subheader("Export Data")
    host = urlparse(result.url).hostname or "site"
    stamp = datetime.now().strftime('%Y%m%d_%H%M')

    exports = [
        ("Recommendations", recommendations_to_df(result.recommendations)),
        ("Meta Tags",       meta_to_df(result)),
        ("Links",           links_to_df(result)),
        ("Headers",         headers_to_df(result)),
        ("Summary",         findings_summary_df(result)),
    ]

    cols = st.columns(len(exports))
    for col, (label, df) in zip(cols, exports):
        with col:
            st.download_button(
                f"Download {label} (CSV)",
                data=to_csv_bytes(df),
                file_name=f"{label.lower().replace(' ', '_')}_{host}_{stamp}.csv",
                mime="text/csv",
                use_container_width=True,
            )
            st.caption(f"{len(df)} rows")


# ── Helpers ────────────────────────────────────────────────────────────────────

def _metric_card(col, label: str, value, card_class: str = "neutral") -> None:
    with col:
        st.markdown(
            f'<div class="metric-card {card_class}">'
            f'<div class="metric-lbl">{label}</div>'
            f'<div class="metric-val">{value}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


def _score_class(score: int) -> str:
    if score >= 75:
        return Status.GOOD
    elif score >= 50:
        return Status.WARNING
    return Status.ERROR


def _render_status_table(df: pd.DataFrame) -> None:
    if df.empty:
        st.info("Nothing to show.")
        return

    def _status_style(val):
        c = Status.COLORS.get(str(val).lower(), "#888")
        return f"color: {c}; font-weight: bold"

    st.dataframe(
        df.style.map(_status_style, subset=["Status"]),
        use_container_width=True,
        height=min(600, len(df) * 36 + 60),
        column_config={
            "Description": st.column_config.TextColumn("Description", width="large"),
        },
    )


# ── Landing / empty state ──────────────────────────────────────────────────────

def render_landing() -> None:
    st.markdown("""
    <div style="text-align:center; padding: 4rem 2rem;">
        <div style="font-size:4rem">🔍</div>
        <h1 style="font-size:2.5rem; font-weight:800; color:#6C63FF; margin:0.5rem 0">SEO Audit</h1>
        <p style="font-size:1.1rem; color:#888; max-width:600px; margin:0 auto 2rem">
            Audits a single page: page speed and Core Web Vitals, meta tags, link health,
            robots.txt and sitemap presence, and security and caching headers.
        </p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3, col4 = st.columns(4)
    _feature_card(col1, "⚡", "Speed", "Desktop and mobile PageSpeed scores with Core Web Vitals")
    _feature_card(col2, "🏷️", "Meta Tags", "Title, description, canonical, Open Graph, Twitter, H1")
    _feature_card(col3, "🔗", "Links", "Samples internal and external links and checks they resolve")
    _feature_card(col4, "🔐", "Headers", "HSTS, CSP, frame and content-type options, caching")


def _feature_card(col, icon: str, title: str, desc: str) -> None:
    with col:
        st.markdown(
            f'<div class="metric-card neutral" style="text-align:center">'
            f'<div style="font-size:2rem">{icon}</div>'
            f'<div style="font-weight:700;margin:0.5rem 0">{title}</div>'
            f'<div style="font-size:0.85rem;color:#888">{desc}</div>'
            f'</div>',
            unsafe_allow_html=True,
        )


# ── Main ───────────────────────────────────────────────────────────────────────

def main():
    url = render_sidebar()

    if url is not None:
        _clear_results()
        start_audit(url)
        return

    if not _has_result():
        render_landing()
        return

    result: AuditResult = st.session_state.audit_result

    st.title(f"Audit: {urlparse(result.url).hostname}")
    st.caption(
        f"{result.url} · "
        f"Score: **{result.scores.overall}/100** · "
        f"{len(result.recommendations)} recommendation(s)"
    )

    tab_names = ["Overview", "Speed", "Meta Tags", "Links", "Robots & Sitemap", "Headers", "Export"]
    tabs = st.tabs(tab_names)

    with tabs[0]:
        render_overview(result)

    with tabs[1]:
        render_speed(result)

    with tabs[2]:
        render_meta(result)

    with tabs[3]:
        render_links(result)

    with tabs[4]:
        render_crawlability(result)

    with tabs[5]:
        render_headers(result)

    with tabs[6]:
        render_export(result)


if __name__ == "__main__":
    main()
