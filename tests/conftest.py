"""Shared fixtures: an in-memory stand-in for ``requests.Session``.

``FakeSession`` answers from a route table keyed by ``(METHOD, url)`` or just
``url`` and hands back real ``requests.Response`` objects, so the fetcher's
streaming, size-cap and decoding paths run unchanged. No network I/O happens.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Union

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers


@dataclass
class Route:
    status: int = 200
    body: Union[str, bytes] = ""
    headers: dict = field(default_factory=lambda: {"Content-Type": "text/html; charset=utf-8"})


def make_response(url: str, route: Route) -> requests.Response:
    body = route.body.encode("utf-8") if isinstance(route.body, str) else route.body
    resp = requests.Response()
    resp.status_code = route.status
    resp.headers = CaseInsensitiveDict(route.headers)
    resp.raw = io.BytesIO(body)
    resp.url = url
    resp.encoding = get_encoding_from_headers(resp.headers)
    return resp


class FakeSession:
    """Route-table session. Unknown URLs raise ConnectionError."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, str]] = []
        self.params: list[dict] = []
        self.headers: dict = {}
        self.max_redirects = 30

    def request(self, method, url, headers=None, timeout=None, allow_redirects=True, stream=False, **kwargs):
        method = method.upper()
        self.calls.append((method, url))
        route = self.routes.get((method, url), self.routes.get(url))
        if route is None:
            raise requests.exceptions.ConnectionError(f"no route for {method} {url}")
        if isinstance(route, Exception):
            raise route
        return make_response(url, route)

    def get(self, url, params=None, timeout=None, **kwargs):
        self.params.append(params or {})
        return self.request("GET", url, timeout=timeout)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture()
def fake_session():
    """A fresh FakeSession; tests fill ``fake_session.routes`` as needed."""
    return FakeSession()


@pytest.fixture()
def session_factory(fake_session):
    return lambda: fake_session


def html_page(
    title="A perfectly reasonable page title here",
    description=None,
    extra_head="",
    body="<h1>Main heading</h1>",
    lang="en",
):
    """Build a small HTML document; pass ``None`` to omit a part."""
    parts = ["<!DOCTYPE html>", f'<html lang="{lang}">' if lang is not None else "<html>", "<head>"]
    if title is not None:
        parts.append(f"<title>{title}</title>")
    if description is not None:
        parts.append(f'<meta name="description" content="{description}">')
    parts.append(extra_head)
    parts.append("</head>")
    parts.append(f"<body>{body}</body>")
    parts.append("</html>")
    return "\n".join(parts)
