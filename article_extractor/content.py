"""HTML extraction and metadata parsing for statically fetched pages."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString
from lxml.etree import ParserError
from readability import Document
from readability.readability import Unparseable

from .models import ParsedPage

logger = logging.getLogger("article_extractor")

_MIN_PLAINTEXT_CHARS = 200
_INLINE_WHITESPACE = re.compile(r"\s+")
_BLOCK_TAGS = [
    "p", "div", "section", "article", "main", "blockquote", "pre", "li", "tr",
    "h1", "h2", "h3", "h4", "h5", "h6", "figcaption", "table", "ul", "ol",
]
_DESCRIPTION_META = (
    {"property": "og:description"},
    {"name": "description"},
    {"name": "twitter:description"},
)
_IMAGE_META = (
    {"property": "og:image"},
    {"name": "og:image"},
    {"name": "twitter:image"},
    {"property": "twitter:image"},
)


def _clean_content(soup: BeautifulSoup, strip_chrome: bool = False) -> BeautifulSoup:
    """Remove noisy tags while keeping relevant article markup."""
    for tag in soup(["script", "style", "noscript", "form", "template"]):
        tag.decompose()
    if strip_chrome:
        for tag in soup(["header", "footer", "nav", "aside"]):
            tag.decompose()
    return soup


def _join_plain_text(soup: BeautifulSoup) -> str:
    """Render markup as plain text with one line per block element."""
    for node in soup.find_all(string=True):
        # Comments and doctypes are skipped by get_text()
        if type(node) is NavigableString and node.find_parent("pre") is None:
            node.replace_with(NavigableString(_INLINE_WHITESPACE.sub(" ", str(node))))
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_before("\n")
        block.append("\n")
    lines = (line.strip() for line in soup.get_text().splitlines())
    return "\n".join(line for line in lines if line)


def _iter_primary_candidates(soup_full: BeautifulSoup) -> Iterable[BeautifulSoup]:
    """Yield progressively broader content scopes to fall back on."""
    for selector in ("main", "article"):
        candidate = soup_full.select_one(selector)
        if candidate:
            yield BeautifulSoup(str(candidate), "html.parser")
    if soup_full.body:
        yield BeautifulSoup(str(soup_full.body), "html.parser")


def _meta_content(soup: BeautifulSoup, candidates) -> Optional[str]:
    for attrs in candidates:
        tag = soup.find("meta", attrs=attrs)
        if tag and tag.get("content") and tag["content"].strip():
            return tag["content"].strip()
    return None


def _readability_summary(document: Document) -> Optional[BeautifulSoup]:
    try:
        summary_html = document.summary(html_partial=True)
    except Unparseable as exc:
        logger.debug("Readability could not score %s: %s", document.url, exc)
        return None
    return _clean_content(BeautifulSoup(summary_html, "html.parser"))


def _readability_title(document: Document) -> str:
    try:
        return (document.short_title() or "").strip()
    except (ParserError, Unparseable) as exc:
        logger.debug("Readability could not read a title from %s: %s", document.url, exc)
        return ""


def extract_content(html: str, final_url: str) -> ParsedPage:
    """Extract the title, body text, description and lead image from HTML."""
    soup_full = BeautifulSoup(html or "", "html.parser")
    summary: Optional[BeautifulSoup] = None
    title = ""
    if html and html.strip():
        document = Document(html, url=final_url)
        summary = _readability_summary(document)
        title = _readability_title(document)

    plain_text = _join_plain_text(BeautifulSoup(str(summary), "html.parser")) if summary else ""
    content_scope = summary

    if len(plain_text) < _MIN_PLAINTEXT_CHARS:
        for candidate in _iter_primary_candidates(soup_full):
            candidate = _clean_content(candidate, strip_chrome=True)
            candidate_plain = _join_plain_text(BeautifulSoup(str(candidate), "html.parser"))
            if len(candidate_plain) >= _MIN_PLAINTEXT_CHARS:
                content_scope = candidate
                plain_text = candidate_plain
                break

    if not title and soup_full.title and soup_full.title.string:
        title = soup_full.title.string.strip()

    image_url: Optional[str] = None
    if content_scope is not None:
        for img in content_scope.find_all("img"):
            src = img.get("src") or img.get("data-src")
            if not src or src.startswith("data:"):
                continue
            image_url = urljoin(final_url, src)
            break
    if image_url is None:
        meta_image = _meta_content(soup_full, _IMAGE_META)
        if meta_image:
            image_url = urljoin(final_url, meta_image)

    return ParsedPage(
        source_url=final_url,
        title=title,
        text=plain_text,
        description=_meta_content(soup_full, _DESCRIPTION_META),
        image_url=image_url,
    )
