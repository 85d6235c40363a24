"""Exception types raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for errors surfaced by the extractor."""


class InvalidURL(ExtractionError, ValueError):
    """The input is not an absolute http(s) URL."""


class FetchError(ExtractionError):
    """The static HTTP fetch failed at the transport level."""


class BrowserUnavailable(ExtractionError):
    """The headless browser could not launch, navigate or evaluate."""


class BrowserTimeout(BrowserUnavailable):
    """The browser sequence exceeded its hard deadline."""


class ImageProxyError(ExtractionError):
    """An image could not be proxied; ``status`` is the HTTP status to report."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status
