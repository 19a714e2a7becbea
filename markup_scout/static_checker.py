# File: markup_scout/static_checker.py
"""markup_scout.static_checker: map a static page's links onto the local file
tree and report the ones whose target file is missing."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Callable, Deque, Iterable, Optional, Set
from urllib.parse import unquote, urlparse

from markup_scout.crawler.link_extractor import extract_css_urls
from markup_scout.crawler.models import Page
from markup_scout.logger import logger

__all__ = ["StaticLinkChecker"]


class StaticLinkChecker:
    """Resolve same-host links against *root* and call *on_missing* for each broken one.

    Links to another host are skipped. CSS files found along the way are
    read and their ``url()`` references join the worklist, each URL being
    checked at most once per call to :meth:`check`.
    """

    def __init__(self, site: str, root: Path, on_missing: Callable[[str], None]) -> None:
        self.host = urlparse(site).netloc.lower()
        self.root = Path(root)
        self.on_missing = on_missing

    def local_path(self, url: str) -> Optional[Path]:
        """The file *url* maps to, or None when it lives on another host."""
        parsed = urlparse(url)
        if parsed.netloc.lower() != self.host:
            return None
        relative = unquote(parsed.path or "/").lstrip("/")
        return self.root / relative

    def check(self, links: Iterable[str]) -> int:
        """Check *links* (absolute URLs); return the number of missing targets."""
        worklist: Deque[str] = deque()
        seen: Set[str] = set()
        for link in links:
            if link not in seen:
                seen.add(link)
                worklist.append(link)

        missing = 0
        while worklist:
            link = worklist.popleft()
            path = self.local_path(link)
            if path is None:
                logger.debug("Skipping off-site link %s", link)
                continue
            if not path.exists():
                missing += 1
                self.on_missing(str(path))
                continue
            if path.suffix == ".css" and path.is_file():
                css_page = Page(link, path.read_text(encoding="utf-8", errors="replace"), "text/css")
                for ref in sorted(extract_css_urls(css_page)):
                    if ref not in seen:
                        seen.add(ref)
                        worklist.append(ref)
        return missing
