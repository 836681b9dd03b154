"""Tests for the DataFrame / CSV export helpers."""

from __future__ import annotations

from models import (
    AuditResult,
    HeaderFinding,
    HeadersResult,
    LinkBucket,
    LinkRecord,
    LinksResult,
    MetaTagItem,
    Priority,
    Recommendation,
    Status,
)
from reporting.exporter import (
    findings_summary_df,
    headers_to_df,
    links_to_df,
    meta_to_df,
    recommendations_to_df,
    to_csv_bytes,
)

URL = "https://example.com/"


def test_recommendations_sorted_by_priority_keeping_order():
    recs = [
        Recommendation("m1", "d", Priority.MEDIUM, "meta"),
        Recommendation("h1", "d", Priority.HIGH, "meta"),
        Recommendation("m2", "d", Priority.MEDIUM, "security"),
        Recommendation("h2", "d", Priority.HIGH, "links"),
    ]
    df = recommendations_to_df(recs)
    assert df["Title"].tolist() == ["h1", "h2", "m1", "m2"]
    assert df["Priority"].tolist() == ["HIGH", "HIGH", "MEDIUM", "MEDIUM"]


def test_empty_frames_keep_columns():
    result = AuditResult(url=URL)
    assert list(recommendations_to_df([]).columns) == ["Priority", "Category", "Title", "Description"]
    assert meta_to_df(result).empty
    assert headers_to_df(result).empty
    assert links_to_df(result).empty
    assert findings_summary_df(result).empty


def test_meta_and_headers_rows():
    result = AuditResult(
        url=URL,
        meta=[MetaTagItem("Title Tag", Status.WARNING, "Title too short", "Hi", 2)],
        headers=HeadersResult(
            security=[HeaderFinding("X-Frame-Options", Status.GOOD, "X-Frame-Options: DENY", "DENY")],
            caching=[HeaderFinding("Cache-Control", Status.WARNING, "Missing Cache-Control header")],
        ),
    )
    meta = meta_to_df(result)
    assert meta.iloc[0]["Status"] == "WARNING"
    assert meta.iloc[0]["Length"] == 2

    headers = headers_to_df(result)
    assert headers["Group"].tolist() == ["Security", "Caching"]
    assert headers.iloc[1]["Value"] == ""

    summary = findings_summary_df(result)
    assert summary.to_dict("records") == [
        {"Section": "Meta", "Status": "Warning", "Count": 1},
        {"Section": "Security", "Status": "Good", "Count": 1},
    ]


def test_links_rows_and_csv():
    link = LinkRecord("/a", "A", "https://example.com/a", "internal", "broken", 404)
    result = AuditResult(url=URL, links=LinksResult(internal=LinkBucket(links=[link], broken=1), external=LinkBucket()))

    df = links_to_df(result)
    assert df.iloc[0]["URL"] == "https://example.com/a"
    assert df.iloc[0]["Status Code"] == 404

    csv = to_csv_bytes(df).decode("utf-8")
    assert csv.splitlines()[0] == "Type,URL,Anchor Text,Status,Status Code"
    assert "https://example.com/a" in csv
