"""
Low-level HTTP fetcher. Handles single-URL retrieval with a fixed user agent,
timeout, redirect cap and response-size cap.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import requests
from loguru import logger
from requests.structures import CaseInsensitiveDict

from config import DEFAULT_USER_AGENT, MAX_REDIRECTS, PAGE_MAX_BYTES, PAGE_TIMEOUT
from errors import FetchFailure

_CHUNK_SIZE = 8192


@dataclass
class FetchedResource:
    url: str
    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: str = ""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "").lower()


def make_session(max_redirects: int = MAX_REDIRECTS) -> requests.Session:
    """
    Fresh session for a single analyzer run. No retry adapter is mounted:
    a failed fetch is terminal for the current audit.
    """
    session = requests.Session()
    session.max_redirects = max_redirects
    session.headers.update({"User-Agent": DEFAULT_USER_AGENT})
    return session


def fetch_resource(
    url: str,
    session: requests.Session,
    method: str = "GET",
    timeout: float = PAGE_TIMEOUT,
    max_redirects: int = MAX_REDIRECTS,
    max_bytes: Optional[int] = PAGE_MAX_BYTES,
    truncate: bool = False,
    validate_status: bool = True,
    headers: Optional[dict[str, str]] = None,
) -> FetchedResource:
    """
    Fetch *url* and return its status, headers and (decoded) body.

    Raises FetchFailure on network errors, too many redirects, a body larger
    than *max_bytes* (unless *truncate* is set) and, when *validate_status* is
    true, any status code >= 400.
    """
    request_headers = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        request_headers.update(headers)

    session.max_redirects = max_redirects
    try:
        resp = session.request(
            method,
            url,
            headers=request_headers,
            timeout=timeout,
            allow_redirects=True,
            stream=True,
        )
    except requests.exceptions.TooManyRedirects as exc:
        raise FetchFailure(f"Maximum number of redirects exceeded ({max_redirects})") from exc
    except requests.exceptions.Timeout as exc:
        raise FetchFailure(f"timeout of {int(timeout * 1000)}ms exceeded") from exc
    except requests.exceptions.SSLError as exc:
        raise FetchFailure(f"SSL Error: {exc}") from exc
    except requests.exceptions.ConnectionError as exc:
        raise FetchFailure(f"Connection Error: {exc}") from exc
    except requests.RequestException as exc:
        raise FetchFailure(str(exc)) from exc

    try:
        if validate_status and resp.status_code >= 400:
            raise FetchFailure(f"Request failed with status code {resp.status_code}")

        body = ""
        if method.upper() != "HEAD":
            body = _read_body(resp, max_bytes, truncate)

        return FetchedResource(
            url=resp.url or url,
            status_code=resp.status_code,
            headers=CaseInsensitiveDict(resp.headers),
            body=body,
        )
    finally:
        resp.close()


def _read_body(resp: requests.Response, max_bytes: Optional[int], truncate: bool) -> str:
    """Read the streamed body, enforcing the size cap."""
    chunks: list[bytes] = []
    size = 0
    try:
        for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
            if not chunk:
                continue
            size += len(chunk)
            if max_bytes is not None and size > max_bytes:
                if not truncate:
                    raise FetchFailure(f"maxContentLength size of {max_bytes} exceeded")
                chunks.append(chunk[: max_bytes - (size - len(chunk))])
                break
            chunks.append(chunk)
    except requests.RequestException as exc:
        raise FetchFailure(f"Error reading response body: {exc}") from exc

    # requests falls back to ISO-8859-1 for text/* without a charset; prefer utf-8
    has_charset = "charset" in resp.headers.get("content-type", "").lower()
    encoding = (resp.encoding if has_charset else None) or "utf-8"
    try:
        return b"".join(chunks).decode(encoding, errors="replace")
    except LookupError:
        return b"".join(chunks).decode("utf-8", errors="replace")


def check_url_status(
    url: str,
    session: requests.Session,
    timeout: float = 10,
    max_redirects: int = MAX_REDIRECTS,
) -> tuple[Optional[int], Optional[str]]:
    """
    Lightweight HEAD liveness check.
    Returns (status_code, error); status_code is None when the request failed.
    Never raises.
    """
    try:
        resp = fetch_resource(
            url, session,
            method="HEAD",
            timeout=timeout,
            max_redirects=max_redirects,
            validate_status=False,
        )
    except FetchFailure as exc:
        logger.debug("HEAD {} failed: {}", url, exc)
        return None, str(exc)
    return resp.status_code, None
