"""Static HTTP fetch followed by readability-style parsing."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import requests

from .config import DEFAULT_ACCEPT, ExtractConfig
from .content import extract_content
from .errors import FetchError
from .images import rewrite_image_url
from .models import ExtractionResult
from .normalize import clean_title, create_excerpt, normalize_content

logger = logging.getLogger("article_extractor")


class StaticStrategy:
    """Fetch the raw HTML with ``requests`` and parse it with readability."""

    name = "static"
    self_assessed = False

    def __init__(
        self,
        config: Optional[ExtractConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ExtractConfig()
        self._session = session

    def _headers(self) -> dict:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": self.config.accept_language,
        }

    def fetch_html(self, url: str) -> Tuple[str, str]:
        """GET ``url`` and return the decoded body and the final URL."""
        session = self._session or requests.Session()
        try:
            resp = session.get(url, headers=self._headers(), timeout=self.config.http_timeout)
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc
        finally:
            if self._session is None:
                session.close()

        if not resp.ok:
            logger.warning("%s answered HTTP %s; parsing the body anyway", url, resp.status_code)
        # requests assumes ISO-8859-1 for text/* without a charset
        declared = "charset=" in (resp.headers.get("Content-Type") or "").lower()
        if resp.encoding is None or (not declared and resp.encoding.lower() == "iso-8859-1"):
            resp.encoding = resp.apparent_encoding or resp.encoding
        return resp.text, resp.url or url

    def extract_html(self, html: str, url: str, final_url: Optional[str] = None) -> ExtractionResult:
        """Build a result from already fetched HTML."""
        page = extract_content(html, final_url or url)
        content = normalize_content(page.text)
        return ExtractionResult(
            url=url,
            title=clean_title(page.title),
            content=content,
            excerpt=create_excerpt(page.description, content),
            image_url=rewrite_image_url(page.image_url),
        )

    async def attempt(self, url: str) -> Tuple[ExtractionResult, bool]:
        logger.info("Fetching %s", url)
        html, final_url = await asyncio.to_thread(self.fetch_html, url)
        result = self.extract_html(html, url, final_url)
        logger.debug(
            "Static parse of %s: title=%r, %d chars of content",
            url,
            result.title,
            len(result.content),
        )
        return result, True
