"""Exceptions raised by the page analyzer."""

from typing import Optional


class SEOAnalyzerError(Exception):
    """Base class for analyzer errors."""


class InvalidUrlError(SEOAnalyzerError, ValueError):
    """The URL handed to analyze() cannot be turned into an http(s) URL."""

    def __init__(self, url: str, reason: str = "not a valid http(s) URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid URL '{url}': {reason}")


class AnalysisFailed(SEOAnalyzerError):
    """The analysis run was aborted."""

    def __init__(self, reason: str, url: Optional[str] = None):
        self.reason = reason
        self.url = url
        message = f"SEO analysis failed: {reason}"
        if url:
            message = f"SEO analysis of {url} failed: {reason}"
        super().__init__(message)


class FetchError(AnalysisFailed):
    """A page could not be retrieved at the transport level.

    Raised for DNS, connect, timeout and reset failures and when the
    redirect cap is exceeded. HTTP error statuses are never reported this way.
    """
