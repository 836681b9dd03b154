"""
Error taxonomy for the audit pipeline.
Analyzers raise these; the orchestrator turns them into report-level messages.
"""
from __future__ import annotations


class AuditError(Exception):
    """Base class for every error raised by the audit pipeline."""


class InvalidInput(AuditError):
    """The submitted URL is missing or not an absolute http(s) URL."""


class FetchFailure(AuditError):
    """A resource could not be fetched (timeout, DNS, refused, bad status, size cap)."""


class ParseFailure(AuditError):
    """A fetched document could not be parsed."""


class ConfigurationMissing(AuditError):
    """A required setting (e.g. the PageSpeed API key) is absent."""
