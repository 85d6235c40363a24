"""Utility helpers for URL parsing and string normalization."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, unquote, urlsplit

from .errors import InvalidURL

SLUG_SEPARATOR_PATTERN = re.compile(r"[-_]+")
WHITESPACE_PATTERN = re.compile(r"\s+")
HOSTNAME_PATTERN = re.compile(r"^[a-z0-9.\-:]+$")


def parse_article_url(url: str) -> SplitResult:
    """Parse an absolute http(s) URL or raise ``InvalidURL``."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidURL("URL is empty")
    try:
        parsed = urlsplit(url.strip())
        # Accessing .port validates the netloc
        parsed.port
    except ValueError as exc:
        raise InvalidURL(f"Malformed URL {url!r}: {exc}") from exc
    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        raise InvalidURL(f"Not an absolute http(s) URL: {url!r}")
    _check_hostname(parsed.hostname, url)
    return parsed


def _check_hostname(hostname: str, url: str) -> None:
    try:
        ascii_host = hostname.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidURL(f"Invalid host in {url!r}: {exc}") from exc
    if not HOSTNAME_PATTERN.match(ascii_host):
        raise InvalidURL(f"Invalid host in {url!r}")


def host_of(url: str) -> str:
    """Lower-cased host of ``url``, or an empty string when it has none."""
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def host_matches(host: str, patterns) -> bool:
    return any(pattern in host for pattern in patterns)


def humanize_slug(segment: str) -> Optional[str]:
    """Turn a URL path segment such as ``my-post.html`` into ``My Post``."""
    text = unquote(segment).split(".")[0]
    text = SLUG_SEPARATOR_PATTERN.sub(" ", text)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    if not text:
        return None
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))
