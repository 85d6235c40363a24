"""Image URL rewriting for hot-link protected hosts and the matching proxy fetch."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote_plus

import requests
from filetype import guess

from .config import DEFAULT_BROWSER_USER_AGENT
from .errors import ImageProxyError
from .utils import host_matches, host_of

logger = logging.getLogger("article_extractor")

PROXY_PATH = "/api/proxy/image"

# Shared by rewrite_image_url and fetch_proxied_image; keep both sides in sync.
ANTI_HOTLINK_DOMAINS = (
    "mmbiz.qpic.cn",
    "wx.qpic.cn",
    "mmbiz.qlogo.cn",
)
WECHAT_IMAGE_DOMAINS = ("mmbiz.qpic.cn", "wx.qpic.cn")
WECHAT_REFERER = "https://mp.weixin.qq.com/"
WECHAT_USER_AGENT = DEFAULT_BROWSER_USER_AGENT + " MicroMessenger/6.7.3.9001"

DEFAULT_CONTENT_TYPE = "image/jpeg"
MAX_IMAGE_BYTES = 10 * 1024 * 1024
PROXY_TIMEOUT = 15.0


@dataclass
class ProxiedImage:
    """Image body fetched on behalf of a client, with response headers to relay."""

    content_type: str
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


def is_proxied_host(host: str) -> bool:
    return bool(host) and host_matches(host.lower(), ANTI_HOTLINK_DOMAINS)


def rewrite_image_url(image_url: Optional[str]) -> str:
    """Route images from hot-link protected CDNs through the internal proxy."""
    if not image_url:
        return ""
    if is_proxied_host(host_of(image_url)):
        return f"{PROXY_PATH}?url={quote_plus(image_url)}"
    return image_url


def detect_image_mime(data: bytes) -> Optional[str]:
    """Detect an image MIME type from the file signature."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.mime
    return None


def _proxy_headers(host: str) -> Dict[str, str]:
    if host_matches(host, WECHAT_IMAGE_DOMAINS):
        return {"Referer": WECHAT_REFERER, "User-Agent": WECHAT_USER_AGENT}
    return {"User-Agent": DEFAULT_BROWSER_USER_AGENT}


def fetch_proxied_image(
    image_url: Optional[str],
    session: Optional[requests.Session] = None,
    timeout: float = PROXY_TIMEOUT,
) -> ProxiedImage:
    """Fetch an allow-listed image with the referrer its CDN expects.

    Raises ``ImageProxyError`` carrying 400 for a missing or malformed URL,
    403 for hosts outside ``ANTI_HOTLINK_DOMAINS`` and 502 when the upstream
    fetch fails.
    """
    if not image_url:
        raise ImageProxyError("Image URL is required", status=400)
    host = host_of(image_url)
    if not host or not image_url.lower().startswith(("http://", "https://")):
        raise ImageProxyError(f"Invalid image URL: {image_url}", status=400)
    if not is_proxied_host(host):
        raise ImageProxyError(f"Domain not allowed for proxy: {host}", status=403)

    owned = session is None
    session = session or requests.Session()
    try:
        resp = session.get(image_url, headers=_proxy_headers(host), timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Failed to fetch image %s: %s", image_url, exc)
        raise ImageProxyError(f"Failed to fetch image: {exc}", status=502) from exc
    finally:
        if owned:
            session.close()

    if resp.status_code != 200:
        logger.warning("Upstream returned %s for image %s", resp.status_code, image_url)
        raise ImageProxyError(
            f"Upstream returned {resp.status_code} for {image_url}", status=502
        )

    data = resp.content
    if len(data) > MAX_IMAGE_BYTES:
        raise ImageProxyError(
            f"Image larger than {MAX_IMAGE_BYTES} bytes: {image_url}", status=502
        )

    content_type = resp.headers.get("Content-Type") or detect_image_mime(data) or DEFAULT_CONTENT_TYPE
    return ProxiedImage(
        content_type=content_type,
        body=data,
        headers={
            "Content-Type": content_type,
            "Cache-Control": "public, max-age=86400",
            "Access-Control-Allow-Origin": "*",
        },
    )
