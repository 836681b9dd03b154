"""
Converts AuditResult sections to Pandas DataFrames and CSV bytes for export.
"""
from __future__ import annotations

import io

import pandas as pd

from models import AuditResult, Priority, Recommendation, Status


# ── Recommendations DataFrame ─────────────────────────────────────────────────

def recommendations_to_df(recommendations: list[Recommendation]) -> pd.DataFrame:
    if not recommendations:
        return pd.DataFrame(columns=["Priority", "Category", "Title", "Description"])

    rows = []
    for rec in recommendations:
        rows.append({
            "Priority":    rec.priority.upper(),
            "Category":    rec.category,
            "Title":       rec.title,
            "Description": rec.description,
        })

    df = pd.DataFrame(rows)

    # Priority sort order; stable so the emission order survives within a priority
    priority_order = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}
    df["_order"] = df["Priority"].str.lower().map(priority_order)
    df = df.sort_values("_order", kind="stable").drop(columns=["_order"])
    return df.reset_index(drop=True)


# ── Findings DataFrames ───────────────────────────────────────────────────────

def meta_to_df(result: AuditResult) -> pd.DataFrame:
    if not result.meta:
        return pd.DataFrame(columns=["Check", "Status", "Description", "Value", "Length"])

    return pd.DataFrame([
        {
            "Check":       item.name,
            "Status":      item.status.upper(),
            "Description": item.description,
            "Value":       item.value or "",
            "Length":      item.length if item.length is not None else "",
        }
        for item in result.meta
    ])


def headers_to_df(result: AuditResult) -> pd.DataFrame:
    if result.headers is None:
        return pd.DataFrame(columns=["Group", "Header", "Status", "Description", "Value"])

    rows = []
    for group, findings in (("Security", result.headers.security), ("Caching", result.headers.caching)):
        for finding in findings:
            rows.append({
                "Group":       group,
                "Header":      finding.name,
                "Status":      finding.status.upper(),
                "Description": finding.description,
                "Value":       finding.value or "",
            })
    return pd.DataFrame(rows)


def links_to_df(result: AuditResult) -> pd.DataFrame:
    """Every probed link from both buckets."""
    columns = ["Type", "URL", "Anchor Text", "Status", "Status Code"]
    if result.links is None:
        return pd.DataFrame(columns=columns)

    rows = []
    for bucket in (result.links.internal, result.links.external):
        for link in bucket.links:
            rows.append({
                "Type":        link.type,
                "URL":         link.full_url,
                "Anchor Text": link.text[:200],
                "Status":      link.status or "",
                "Status Code": link.status_code if link.status_code is not None else "",
            })

    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows)


# ── Summary table ──────────────────────────────────────────────────────────────

def findings_summary_df(result: AuditResult) -> pd.DataFrame:
    """Count of meta and security-header findings by status."""
    counts: dict[tuple[str, str], int] = {}
    for item in result.meta or []:
        counts[("Meta", item.status)] = counts.get(("Meta", item.status), 0) + 1
    if result.headers is not None:
        for finding in result.headers.security:
            counts[("Security", finding.status)] = counts.get(("Security", finding.status), 0) + 1

    if not counts:
        return pd.DataFrame(columns=["Section", "Status", "Count"])

    data = [{"Section": k[0], "Status": k[1].capitalize(), "Count": v} for k, v in counts.items()]
    df = pd.DataFrame(data)
    status_order = {s.capitalize(): i for i, s in enumerate([Status.ERROR, Status.WARNING, Status.GOOD])}
    df["_order"] = df["Status"].map(status_order)
    return df.sort_values(["Section", "_order"]).drop(columns=["_order"]).reset_index(drop=True)


# ── CSV export ─────────────────────────────────────────────────────────────────

def to_csv_bytes(df: pd.DataFrame) -> bytes:
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")
