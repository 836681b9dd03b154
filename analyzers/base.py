"""
Base class for all analyzers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import requests

from crawler.fetcher import make_session
from models import MetaTagItem, Status


class BaseAnalyzer(ABC):
    """
    All analyzers inherit from this class.

    An analyzer is stateless: `analyze(url)` fetches what it needs through a
    fresh session from `session_factory` and returns its typed result, or
    raises an AuditError.
    """

    name: str = "Uncategorized"

    def __init__(self, session_factory: Optional[Callable[[], requests.Session]] = None):
        self.session_factory = session_factory or make_session

    @abstractmethod
    def analyze(self, url: str) -> Any:
        """Run the check against *url* and return its result."""
        ...

    # ── Convenience factories ─────────────────────────────────────────────────

    @staticmethod
    def good(name: str, description: str, value: Optional[str] = None, length: Optional[int] = None) -> MetaTagItem:
        return MetaTagItem(name, Status.GOOD, description, value, length)

    @staticmethod
    def warning(name: str, description: str, value: Optional[str] = None, length: Optional[int] = None) -> MetaTagItem:
        return MetaTagItem(name, Status.WARNING, description, value, length)

    @staticmethod
    def error(name: str, description: str, value: Optional[str] = None, length: Optional[int] = None) -> MetaTagItem:
        return MetaTagItem(name, Status.ERROR, description, value, length)

