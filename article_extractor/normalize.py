"""Whitespace cleanup, title cleanup and excerpt synthesis."""

from __future__ import annotations

from typing import Optional

EXCERPT_MAX_CHARS = 200
EXCERPT_MAX_WORDS = 30
MIN_DESCRIPTION_CHARS = 10
ELLIPSIS = "..."

DEFAULT_EXCERPT = "暂无摘要 (No summary available)"

TITLE_SUFFIXES = (
    " - 知乎",
    " - 微信公众号",
    " - WeChat",
    " - 公众号",
)


def normalize_content(text: Optional[str]) -> str:
    """Strip every line and drop blank ones, keeping line structure."""
    if not text:
        return ""
    lines = (line.strip() for line in text.strip().splitlines())
    return "\n".join(line for line in lines if line)


def clean_title(title: Optional[str]) -> str:
    """Trim the title and remove the first matching platform suffix."""
    title = (title or "").strip()
    for suffix in TITLE_SUFFIXES:
        if title.endswith(suffix):
            return title[: -len(suffix)].strip()
    return title


def create_excerpt(
    description: Optional[str],
    content: Optional[str],
    default: str = DEFAULT_EXCERPT,
) -> str:
    """Build a short summary from the meta description or the body text.

    A description longer than ten characters wins and is cut at 200
    characters. Otherwise the first 30 words of the content are used.
    """
    description = (description or "").strip()
    if len(description) > MIN_DESCRIPTION_CHARS:
        if len(description) > EXCERPT_MAX_CHARS:
            return description[:EXCERPT_MAX_CHARS] + ELLIPSIS
        return description

    if content:
        flattened = content.replace("\n", " ")
        words = flattened.split()
        if len(words) > EXCERPT_MAX_WORDS:
            return " ".join(words[:EXCERPT_MAX_WORDS]) + ELLIPSIS
        if words:
            return " ".join(words)

    return default
