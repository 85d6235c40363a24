"""Admissibility check applied to extracted articles."""

from __future__ import annotations

from .models import ExtractionResult

MIN_TITLE_CHARS = 3
MIN_CONTENT_CHARS = 50
# Marker words only count on short pages; long articles may mention them.
MARKER_LENGTH_LIMIT = 200

BLOCK_MARKERS = (
    "javascript",
    "请开启",
    "loading",
    "error",
    "404",
    "403",
    "access denied",
    "页面不存在",
    "内容加载中",
    "请稍后",
    "当前环境异常",
    "完成验证后即可继续访问",
)


def is_low_quality(result: ExtractionResult) -> bool:
    """Return True when the result looks empty, blocked or still loading."""
    if len(result.title.strip()) < MIN_TITLE_CHARS:
        return True

    content = result.content.strip()
    if len(content) < MIN_CONTENT_CHARS:
        return True

    if len(content) < MARKER_LENGTH_LIMIT:
        lowered = content.lower()
        return any(marker in lowered for marker in BLOCK_MARKERS)
    return False
