"""Per-platform extraction profiles for the browser strategy."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Tuple

from .utils import host_matches, host_of

GENERIC_WAIT_SELECTORS = ("article", "main", ".content", ".article-content", "h1")
COMMON_STRIP_SELECTORS = ("script", "style", "noscript")
MIN_CANDIDATE_CHARS = 100


@dataclass(frozen=True)
class SiteProfile:
    """Selectors and thresholds used to pull article text from a rendered page.

    ``candidate_selectors`` are tried in order; the first element whose text,
    after removing ``strip_selectors``, exceeds ``min_text_length`` wins. When
    none does, ``body_fallback`` decides between whole-page text and nothing.
    """

    name: str
    host_patterns: Tuple[str, ...]
    wait_selectors: Tuple[str, ...]
    candidate_selectors: Tuple[str, ...]
    strip_selectors: Tuple[str, ...]
    min_text_length: int = MIN_CANDIDATE_CHARS
    body_fallback: bool = False

    @property
    def ranked_wait_selectors(self) -> Tuple[str, ...]:
        """Site-specific wait selectors followed by the generic ones."""
        extra = tuple(s for s in GENERIC_WAIT_SELECTORS if s not in self.wait_selectors)
        return self.wait_selectors + extra

    def script_args(self) -> dict:
        return {
            "selectors": list(self.candidate_selectors),
            "strip": list(self.strip_selectors),
            "minLength": self.min_text_length,
            "bodyFallback": self.body_fallback,
        }


WECHAT = SiteProfile(
    name="wechat",
    host_patterns=("mp.weixin.qq.com",),
    wait_selectors=(".rich_media_content", "#js_content", ".rich_media_title"),
    candidate_selectors=(
        ".rich_media_content",
        "#js_content",
        ".rich_media_area_primary .rich_media_content",
        '[data-role="main"]',
    ),
    strip_selectors=COMMON_STRIP_SELECTORS
    + (".rich_media_tool", ".rich_media_meta", '[data-role="bottom"]'),
)

ZHIHU = SiteProfile(
    name="zhihu",
    host_patterns=("zhihu.com",),
    wait_selectors=(".Post-RichTextContainer", ".RichText", ".Post-content", ".ContentItem-title"),
    candidate_selectors=(
        ".Post-RichTextContainer",
        ".RichText",
        ".Post-content",
        ".ArticleItem-content",
        '[data-testid="article-content"]',
        "article",
    ),
    strip_selectors=COMMON_STRIP_SELECTORS + (".Post-NormalMain", ".ContentItem-actions"),
)

GENERIC = SiteProfile(
    name="generic",
    host_patterns=(),
    wait_selectors=GENERIC_WAIT_SELECTORS,
    candidate_selectors=(
        "article",
        "main",
        ".content",
        ".article-content",
        ".post-content",
        ".entry-content",
        '[role="main"]',
    ),
    strip_selectors=COMMON_STRIP_SELECTORS
    + ("nav", "header", "footer", "aside", ".sidebar", ".navigation"),
    body_fallback=True,
)

KNOWN_PROFILES: Tuple[SiteProfile, ...] = (WECHAT, ZHIHU)


def classify_site(url: str, extra_domains: Iterable[str] = ()) -> SiteProfile:
    """Pick the profile for ``url``.

    Hosts listed in ``extra_domains`` are rendered with the generic profile
    under the name ``"browser"`` so callers can tell them apart from plain
    static pages.
    """
    host = host_of(url)
    for profile in KNOWN_PROFILES:
        if host_matches(host, profile.host_patterns):
            return profile
    extra = tuple(d.lower() for d in extra_domains if d)
    if extra and host_matches(host, extra):
        return replace(GENERIC, name="browser", host_patterns=extra)
    return GENERIC


def needs_browser(profile: SiteProfile) -> bool:
    """True when pages for this profile are rendered client-side."""
    return bool(profile.host_patterns)
