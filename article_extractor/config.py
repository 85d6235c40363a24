"""Configuration objects and constants for the extractor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger("article_extractor")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
DEFAULT_ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"

ENV_PREFIX = "ARTICLE_EXTRACTOR_"


@dataclass
class ExtractConfig:
    """Settings that control fetching, rendering and timeouts."""

    http_timeout: float = 15.0
    browser_timeout: float = 30.0
    settle_delay: float = 5.0
    content_wait: float = 10.0
    extra_wait: float = 2.0
    max_browsers: int = 2
    user_agent: str = DEFAULT_USER_AGENT
    browser_user_agent: str = DEFAULT_BROWSER_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE
    browser_domains: Tuple[str, ...] = field(default_factory=tuple)
    use_browser: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExtractConfig":
        """Build a config, overriding defaults from ARTICLE_EXTRACTOR_* variables.

        ``ARTICLE_EXTRACTOR_BROWSER_DOMAINS`` is a comma-separated host list;
        booleans accept ``1/true/yes`` and ``0/false/no``.
        """
        environ = os.environ if environ is None else environ
        config = cls()
        for entry in fields(cls):
            raw = environ.get(ENV_PREFIX + entry.name.upper())
            if raw is None or not raw.strip():
                continue
            current = getattr(config, entry.name)
            try:
                value = _coerce(raw.strip(), current)
            except ValueError:
                logger.warning(
                    "Ignoring %s%s=%r; keeping default %r",
                    ENV_PREFIX,
                    entry.name.upper(),
                    raw,
                    current,
                )
                continue
            setattr(config, entry.name, value)
        return config


def _coerce(raw: str, current: Any) -> Any:
    if isinstance(current, bool):
        lowered = raw.lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(raw)
    if isinstance(current, int):
        value = int(raw)
        if value < 1:
            raise ValueError(raw)
        return value
    if isinstance(current, float):
        value = float(raw)
        if value < 0:
            raise ValueError(raw)
        return value
    if isinstance(current, tuple):
        return tuple(part.strip().lower() for part in raw.split(",") if part.strip())
    return raw
