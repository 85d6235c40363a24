"""High-level orchestration: route a URL through the extraction strategies."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from .browser import BrowserStrategy
from .config import ExtractConfig
from .errors import FetchError
from .fallback import build_fallback
from .models import ExtractionResult
from .quality import is_low_quality
from .static import StaticStrategy
from .utils import parse_article_url

logger = logging.getLogger("article_extractor")


class Strategy(Protocol):
    """One way of turning a URL into an article.

    ``attempt`` returns the result and whether it is usable. Strategies with
    ``self_assessed`` set have already judged their own output and are
    returned as soon as they succeed; the others go through the quality gate.
    """

    name: str
    self_assessed: bool

    async def attempt(self, url: str) -> Tuple[ExtractionResult, bool]: ...


class Extractor:
    """Try the browser for client-rendered platforms, then the static fetch."""

    def __init__(
        self,
        config: Optional[ExtractConfig] = None,
        static: Optional[StaticStrategy] = None,
        browser: Optional[BrowserStrategy] = None,
    ) -> None:
        self.config = config or ExtractConfig()
        self.static = static or StaticStrategy(self.config)
        self.browser = browser or BrowserStrategy(self.config)

    def plan(self, url: str) -> List[Strategy]:
        """Ordered strategies for ``url``; the static fetch always comes last."""
        strategies: List[Strategy] = []
        if self.browser.handles(url):
            strategies.append(self.browser)
        strategies.append(self.static)
        return strategies

    async def extract(self, url: str) -> ExtractionResult:
        """Extract ``url``, degrading to a placeholder article when needed.

        Raises ``InvalidURL`` for malformed input and ``FetchError`` when the
        static fetch fails and no other strategy was tried first.
        """
        parse_article_url(url)
        url = url.strip()
        return await run_strategies(url, self.plan(url))


async def run_strategies(url: str, strategies: Sequence[Strategy]) -> ExtractionResult:
    """Try each strategy in turn and apply the quality gate to the survivor."""
    candidate: Optional[ExtractionResult] = None
    attempted: List[str] = []
    for strategy in strategies:
        try:
            result, ok = await strategy.attempt(url)
        except FetchError:
            if not attempted:
                raise
            logger.warning(
                "%s failed for %s after %s; using placeholder",
                strategy.name,
                url,
                ", ".join(attempted),
            )
            break
        attempted.append(strategy.name)
        if not ok:
            continue
        if strategy.self_assessed:
            logger.info("Extracted %s with the %s strategy", url, strategy.name)
            return result
        candidate = result
        break

    if candidate is None or is_low_quality(candidate):
        logger.warning("Low-quality extraction for %s; using placeholder", url)
        return build_fallback(url)
    logger.info("Extracted %s with the %s strategy", url, attempted[-1])
    return candidate


async def extract(url: str, config: Optional[ExtractConfig] = None) -> ExtractionResult:
    """Extract a single URL with a fresh Extractor."""
    return await Extractor(config).extract(url)


def extract_sync(url: str, config: Optional[ExtractConfig] = None) -> ExtractionResult:
    """Blocking wrapper around ``extract`` for synchronous callers."""
    return asyncio.run(extract(url, config))
