"""Exception hierarchy for Grok Search."""

from __future__ import annotations


class GrokSearchError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(GrokSearchError):
    """Required configuration is missing or invalid (not retried)."""


class UpstreamError(GrokSearchError):
    """The search API answered with a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Grok API error: {status_code} - {body}")


class EmptyResponseError(GrokSearchError):
    """The search API answered without a response body."""

    def __init__(self, message: str = "No response body") -> None:
        super().__init__(message)


class ToolArgumentError(GrokSearchError):
    """A tool was called with a missing or wrongly typed argument."""
