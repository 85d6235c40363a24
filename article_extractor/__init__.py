"""Multi-strategy article extraction: static readability parsing with a headless-browser path."""

from __future__ import annotations

from .config import ExtractConfig
from .errors import (
    BrowserTimeout,
    BrowserUnavailable,
    ExtractionError,
    FetchError,
    ImageProxyError,
    InvalidURL,
)
from .extractor import Extractor, extract, extract_sync
from .images import fetch_proxied_image, rewrite_image_url
from .models import ExtractionResult
from .quality import is_low_quality

__all__ = [
    "BrowserTimeout",
    "BrowserUnavailable",
    "ExtractConfig",
    "ExtractionError",
    "ExtractionResult",
    "Extractor",
    "FetchError",
    "ImageProxyError",
    "InvalidURL",
    "extract",
    "extract_sync",
    "fetch_proxied_image",
    "is_low_quality",
    "rewrite_image_url",
]
