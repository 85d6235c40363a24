"""Headless Chromium rendering for pages that build their content client-side."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Tuple
from urllib.parse import urljoin

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import ExtractConfig
from .errors import BrowserTimeout, BrowserUnavailable
from .images import rewrite_image_url
from .models import ExtractionResult
from .normalize import clean_title, create_excerpt, normalize_content
from .sites import SiteProfile, classify_site, needs_browser

logger = logging.getLogger("article_extractor")

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
)
POLL_INTERVAL = 0.25
MIN_BROWSER_CONTENT_CHARS = 50

BROWSER_EXCERPT = "使用浏览器提取的内容"
SPARSE_CONTENT_MESSAGE = (
    "通过浏览器访问成功，但提取的内容较少。\n"
    "The page loaded in the browser, but little text could be extracted.\n\n"
    "页面标题 (Title)：{title}\n"
    "描述 (Description)：{description}\n\n"
    "这可能是一个需要特殊处理的页面类型。请点击查看原文获取完整内容。\n"
    "Please open the original page to read the full content."
)

# Evaluated with the profile's script_args(); returns plain strings only.
EXTRACT_JS = """
(args) => {
    const BLOCKS = 'p,div,section,article,blockquote,pre,li,tr,br,h1,h2,h3,h4,h5,h6,figcaption';

    const meta = (selectors) => {
        for (const sel of selectors) {
            const el = document.querySelector(sel);
            const value = el ? (el.getAttribute('content') || '').trim() : '';
            if (value) return value;
        }
        return '';
    };

    const strippedText = (el) => {
        const clone = el.cloneNode(true);
        if (args.strip.length) {
            clone.querySelectorAll(args.strip.join(',')).forEach((n) => n.remove());
        }
        const walker = document.createTreeWalker(clone, NodeFilter.SHOW_TEXT);
        const nodes = [];
        while (walker.nextNode()) nodes.push(walker.currentNode);
        nodes.forEach((n) => {
            if (!n.parentElement || !n.parentElement.closest('pre')) {
                n.nodeValue = n.nodeValue.replace(/\\s+/g, ' ');
            }
        });
        clone.querySelectorAll(BLOCKS).forEach((n) => n.after('\\n'));
        return (clone.textContent || '').trim();
    };

    let content = '';
    for (const sel of args.selectors) {
        const el = document.querySelector(sel);
        if (!el) continue;
        const text = strippedText(el);
        if (text.length > args.minLength) {
            content = text;
            break;
        }
    }
    if (!content && args.bodyFallback && document.body) {
        content = strippedText(document.body);
    }

    return {
        url: location.href,
        title: document.title || '',
        description: meta(['meta[name="description"]', 'meta[property="og:description"]']),
        imageURL: meta(['meta[property="og:image"]', 'meta[name="twitter:image"]']),
        content: content,
    };
}
"""


def build_browser_result(url: str, raw: dict) -> ExtractionResult:
    """Turn the in-page extraction payload into an ExtractionResult."""
    title = clean_title(raw.get("title"))
    description = (raw.get("description") or "").strip()
    content = normalize_content(raw.get("content"))
    excerpt = create_excerpt(description, content, default=BROWSER_EXCERPT)
    if len(content) < MIN_BROWSER_CONTENT_CHARS:
        content = SPARSE_CONTENT_MESSAGE.format(title=title, description=description)

    image_url = (raw.get("imageURL") or "").strip()
    if image_url:
        image_url = urljoin(raw.get("url") or url, image_url)

    return ExtractionResult(
        url=url,
        title=title,
        content=content,
        excerpt=excerpt,
        image_url=rewrite_image_url(image_url),
    )


async def wait_for_content(page: Page, profile: SiteProfile, config: ExtractConfig) -> Optional[str]:
    """Poll the ranked selectors until one is visible; return it, or None after a grace wait."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + config.content_wait
    selectors = profile.ranked_wait_selectors
    while True:
        for selector in selectors:
            if await page.locator(selector).first.is_visible():
                logger.debug("Content selector %s is visible", selector)
                return selector
        if loop.time() >= deadline:
            break
        await page.wait_for_timeout(int(POLL_INTERVAL * 1000))

    logger.debug("No content selector became visible; waiting %.1fs more", config.extra_wait)
    if config.extra_wait:
        await page.wait_for_timeout(int(config.extra_wait * 1000))
    return None


class BrowserStrategy:
    """Render the page in headless Chromium and run the profile's extraction script.

    At most ``config.max_browsers`` browser processes run at once per strategy
    instance; further calls wait for a slot before their deadline starts.
    """

    name = "browser"
    self_assessed = True

    def __init__(
        self,
        config: Optional[ExtractConfig] = None,
        playwright_factory: Callable = async_playwright,
    ) -> None:
        self.config = config or ExtractConfig()
        self._playwright_factory = playwright_factory
        self._semaphore = asyncio.Semaphore(self.config.max_browsers)

    def handles(self, url: str) -> bool:
        return self.config.use_browser and needs_browser(classify_site(url, self.config.browser_domains))

    async def attempt(self, url: str) -> Tuple[ExtractionResult, bool]:
        try:
            result = await self.extract(url)
        except BrowserUnavailable as exc:
            logger.warning("Browser extraction failed for %s: %s", url, exc)
            return ExtractionResult(url=url), False
        if not result.title:
            logger.info("Browser returned no title for %s", url)
            return result, False
        return result, True

    async def extract(self, url: str, profile: Optional[SiteProfile] = None) -> ExtractionResult:
        """Render ``url`` and extract it, raising BrowserUnavailable or BrowserTimeout."""
        profile = profile or classify_site(url, self.config.browser_domains)
        async with self._semaphore:
            logger.info("Rendering %s with the %s profile", url, profile.name)
            try:
                raw = await asyncio.wait_for(
                    self._render(url, profile), timeout=self.config.browser_timeout
                )
            except asyncio.TimeoutError as exc:
                raise BrowserTimeout(
                    f"Browser did not finish {url} within {self.config.browser_timeout:.0f}s"
                ) from exc
            except PlaywrightTimeoutError as exc:
                raise BrowserTimeout(f"Browser timed out on {url}: {exc}") from exc
            except (PlaywrightError, OSError) as exc:
                raise BrowserUnavailable(f"Headless browser failed on {url}: {exc}") from exc
        return build_browser_result(url, raw)

    async def _render(self, url: str, profile: SiteProfile) -> dict:
        async with self._playwright_factory() as playwright:
            browser = await playwright.chromium.launch(headless=True, args=list(CHROMIUM_ARGS))
            try:
                context = await browser.new_context(user_agent=self.config.browser_user_agent)
                page = await context.new_page()
                page.set_default_navigation_timeout(self.config.browser_timeout * 1000)
                await page.goto(url, wait_until="domcontentloaded")
                if self.config.settle_delay:
                    await page.wait_for_timeout(int(self.config.settle_delay * 1000))
                await wait_for_content(page, profile, self.config)
                raw = await page.evaluate(EXTRACT_JS, profile.script_args())
            finally:
                await browser.close()
        if not isinstance(raw, dict):
            raise BrowserUnavailable(f"Extraction script returned {type(raw).__name__}")
        return raw
