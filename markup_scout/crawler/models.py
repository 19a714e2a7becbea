# markup_scout/crawler/models.py
"""
Data models for the MarkupScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urljoin

HTML_TYPES = frozenset({"text/html", "application/xhtml+xml", "text/xhtml+xml"})
CSS_TYPES = frozenset({"text/css"})


def _mime(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class Page:
    """A fetched (or locally loaded) resource: absolute URL, body and content type."""

    url: str
    body: str
    content_type: str = "text/html"

    @property
    def mime(self) -> str:
        return _mime(self.content_type)

    @property
    def is_html(self) -> bool:
        return self.mime in HTML_TYPES

    @property
    def is_css(self) -> bool:
        return self.mime in CSS_TYPES

    def to_absolute(self, link: str) -> str:
        """Resolve *link* against this page's URL."""
        return urljoin(self.url, link.strip())
