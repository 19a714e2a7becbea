# markup_scout/crawler/link_extractor.py
"""
Resource and link extraction for MarkupScout.

All returned URLs are absolute, resolved against the page's own URL.
A reference that cannot be parsed as a URL raises :class:`ValueError`.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Set, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from markup_scout.crawler.models import Page

# url(x), url('x'), url("x"); never spans a line or a closing parenthesis
_CSS_URL_RE = re.compile(r"""url\(\s*(['"]?)([^'"()\n]+?)\1\s*\)""")

# (tag, attribute) pairs a page links through
_LINK_ATTRS: Tuple[Tuple[str, str], ...] = (
    ("a", "href"),
    ("area", "href"),
    ("link", "href"),
    ("script", "src"),
    ("iframe", "src"),
    ("frame", "src"),
    ("img", "src"),
)

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "data:", "tel:")


def _soup(page: Page) -> BeautifulSoup:
    return BeautifulSoup(page.body, "html.parser")


def _attr_values(soup: BeautifulSoup, pairs: Iterable[Tuple[str, str]]) -> List[str]:
    values: List[str] = []
    for tag in soup.find_all([name for name, _ in pairs]):
        if not isinstance(tag, Tag):
            continue
        for name, attr in pairs:
            if tag.name != name:
                continue
            value = tag.get(attr)
            if isinstance(value, str) and value.strip():
                values.append(value.strip())
    return values


def extract_css_urls(page: Page) -> Set[str]:
    """Return every `url(...)` reference of a CSS body as an absolute URL."""
    result: Set[str] = set()
    for line in page.body.splitlines():
        for _quote, ref in _CSS_URL_RE.findall(line):
            result.add(page.to_absolute(ref))
    return result


def extract_img_urls(page: Page) -> Set[str]:
    """Return the `src` of every `<img>` of an HTML body as an absolute URL."""
    return {page.to_absolute(src) for src in _attr_values(_soup(page), (("img", "src"),))}


def extract_resources(page: Page) -> Set[str]:
    """Dispatch on content type: CSS → `url()` references, HTML → images."""
    if page.is_css:
        return extract_css_urls(page)
    if page.is_html:
        return extract_img_urls(page)
    return set()


def extract_links(page: Page) -> List[str]:
    """
    Extract every outgoing reference of an HTML page, in document order and
    without duplicates. mailto:, javascript:, data: and tel: links are ignored.
    """
    seen: Set[str] = set()
    links: List[str] = []
    for raw in _attr_values(_soup(page), _LINK_ATTRS):
        if raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        absolute = page.to_absolute(raw)
        if absolute not in seen:
            seen.add(absolute)
            links.append(absolute)
    return links


__all__ = ["extract_css_urls", "extract_img_urls", "extract_resources", "extract_links"]
