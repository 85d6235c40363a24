"""Data models used throughout the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class ExtractionResult:
    """Structured article produced by one extraction attempt."""

    url: str
    title: str = ""
    content: str = ""
    excerpt: str = ""
    image_url: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "excerpt": self.excerpt,
            "image_url": self.image_url,
        }


@dataclass
class ParsedPage:
    """Raw output of the static HTML parser before normalization."""

    source_url: str
    title: str
    text: str
    description: Optional[str]
    image_url: Optional[str]
