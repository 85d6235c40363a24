"""Command-line entry point for the article extractor."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List, Sequence

from .config import ExtractConfig
from .errors import ExtractionError, ImageProxyError
from .extractor import Extractor
from .images import fetch_proxied_image
from .models import ExtractionResult

logger = logging.getLogger("article_extractor.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("extract", *argv)


def _add_extract_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("urls", nargs="+", help="One or more article URLs to extract")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array instead of plain text",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Never launch the headless browser; use the static fetch only",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds for the static fetch (default: 15)",
    )
    parser.add_argument(
        "--browser-timeout",
        type=float,
        default=None,
        help="Hard limit in seconds for one headless browser run (default: 30)",
    )
    parser.add_argument(
        "--max-browsers",
        type=int,
        default=None,
        help="Maximum number of browser processes running at once (default: 2)",
    )
    parser.add_argument(
        "--browser-domain",
        action="append",
        dest="browser_domains",
        default=[],
        metavar="HOST",
        help="Also render this host in the browser (can be given multiple times)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_image_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", help="Image URL on a hot-link protected host")
    parser.add_argument(
        "--output",
        required=True,
        type=Path,
        help="File the image should be written to",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the title, text, excerpt and lead image of web articles.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract", help="Extract one or more article URLs"
    )
    _add_extract_arguments(extract_parser)

    image_parser = subparsers.add_parser(
        "image", help="Download an image through the anti-hotlink proxy logic"
    )
    _add_image_arguments(image_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def build_config(args: argparse.Namespace) -> ExtractConfig:
    """Environment defaults overridden by command-line flags."""
    config = ExtractConfig.from_env()
    overrides = {}
    if args.no_browser:
        overrides["use_browser"] = False
    if args.timeout is not None:
        overrides["http_timeout"] = args.timeout
    if args.browser_timeout is not None:
        overrides["browser_timeout"] = args.browser_timeout
    if args.max_browsers is not None:
        overrides["max_browsers"] = max(1, args.max_browsers)
    if args.browser_domains:
        overrides["browser_domains"] = config.browser_domains + tuple(
            d.lower() for d in args.browser_domains
        )
    return replace(config, **overrides)


def format_result(result: ExtractionResult) -> str:
    lines = [f"# {result.title}", "", f"URL: {result.url}"]
    if result.image_url:
        lines.append(f"Image: {result.image_url}")
    lines.extend(["", f"> {result.excerpt}", "", result.content])
    return "\n".join(lines)


async def _extract_all(urls: List[str], config: ExtractConfig):
    extractor = Extractor(config)
    outcomes = []
    for url in urls:
        try:
            outcomes.append((url, await extractor.extract(url)))
        except ExtractionError as exc:
            logger.error("Failed to extract %s: %s", url, exc)
            outcomes.append((url, exc))
    return outcomes


def _run_extract(args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    config = build_config(args)

    overall_start = time.perf_counter()
    outcomes = asyncio.run(_extract_all(args.urls, config))
    total_elapsed = time.perf_counter() - overall_start

    failures = sum(1 for _, outcome in outcomes if isinstance(outcome, Exception))
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        len(outcomes) - failures,
        len(outcomes),
        failures,
    )

    if args.json:
        payload = [
            {"url": url, "error": str(outcome)}
            if isinstance(outcome, Exception)
            else outcome.to_dict()
            for url, outcome in outcomes
        ]
        sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    else:
        rendered = [
            format_result(outcome)
            for _, outcome in outcomes
            if isinstance(outcome, ExtractionResult)
        ]
        if rendered:
            sys.stdout.write("\n\n---\n\n".join(rendered) + "\n")
    sys.stdout.flush()
    return 1 if failures else 0


def _run_image(args: argparse.Namespace) -> int:
    _configure_logging(args.verbose)
    try:
        image = fetch_proxied_image(args.url)
    except ImageProxyError as exc:
        logger.error("Image proxy refused %s (HTTP %d): %s", args.url, exc.status, exc)
        return 1
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(image.body)
    logger.info("Saved %s (%s, %d bytes) to %s", args.url, image.content_type, len(image.body), args.output)
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.command == "extract":
        code = _run_extract(args)
    else:
        code = _run_image(args)
    sys.exit(code)


if __name__ == "__main__":
    main()
