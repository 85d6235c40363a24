"""MCP server exposing the article extractor as tools."""

from __future__ import annotations

import logging

from mcp.server.fastmcp import FastMCP

from .config import ExtractConfig
from .extractor import Extractor
from .images import rewrite_image_url

logger = logging.getLogger("article_extractor.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="article-extractor")

_extractor: Extractor | None = None


def _get_extractor() -> Extractor:
    # Shared instance; its browser semaphore spans all tool calls.
    global _extractor
    if _extractor is None:
        _extractor = Extractor(ExtractConfig.from_env())
    return _extractor


@mcp.tool()
async def extract(url: str) -> dict:
    """Extract the title, plain-text body, excerpt and lead image of an article URL."""
    result = await _get_extractor().extract(url)
    return result.to_dict()


@mcp.tool()
def rewrite_image(url: str) -> str:
    """Return the proxy path for hot-link protected image URLs, else the URL itself."""
    return rewrite_image_url(url)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
