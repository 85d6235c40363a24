"""Placeholder articles for pages that could not be extracted."""

from __future__ import annotations

from urllib.parse import urlsplit

from .models import ExtractionResult
from .utils import humanize_slug

MIN_SLUG_TITLE_CHARS = 5

FALLBACK_EXCERPT = "无法自动提取内容，请查看原文 (Content could not be extracted automatically; see the original page.)"
FALLBACK_CONTENT = (
    "无法自动提取此页面的内容。这可能是因为该网站使用了JavaScript动态加载内容或设置了访问限制。\n"
    "The content of this page could not be extracted automatically. "
    "The site probably loads its content with JavaScript or blocks automated access.\n\n"
    "请点击下方的 'Read Original' 链接查看原文。\n"
    "Please open the original page to read the full article.\n\n"
    "原文链接 (Original link): {url}"
)


def fallback_title(url: str) -> str:
    """Derive a readable title from the URL path, else from the domain."""
    parsed = urlsplit(url)
    segments = [part for part in parsed.path.split("/") if part]
    if segments:
        candidate = humanize_slug(segments[-1])
        if candidate and len(candidate) > MIN_SLUG_TITLE_CHARS:
            return candidate

    domain = parsed.netloc.rsplit("@", 1)[-1]
    if domain.startswith("www."):
        domain = domain[len("www."):]
    return f"Article from {domain}"


def build_fallback(url: str) -> ExtractionResult:
    """Build the placeholder result returned when extraction yields nothing usable."""
    return ExtractionResult(
        url=url,
        title=fallback_title(url),
        content=FALLBACK_CONTENT.format(url=url),
        excerpt=FALLBACK_EXCERPT,
        image_url="",
    )
