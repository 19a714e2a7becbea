# === FILE: markup_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import re
import time
from typing import Callable, Dict, List, Mapping, Optional, Set
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession, ClientTimeout, CookieJar

from markup_scout.crawler.frontier import Frontier, normalize_url
from markup_scout.crawler.link_extractor import extract_links
from markup_scout.crawler.models import Page
from markup_scout.logger import logger

__all__ = ("AsyncCrawler", "PageHook", "UrlHook")

PageHook = Callable[[Page], None]
UrlHook = Callable[[str], None]


class AsyncCrawler:
    """Same-host crawler driving per-resource hooks.

    Fetches run one at a time. Each CSS page is handed to the
    ``every_css_page`` hooks, each HTML page to the ``every_html_page``
    hooks (after which its own links are followed) and every URL that could
    not be retrieved to the ``every_failed_url`` hooks. Hooks may call
    :meth:`enqueue`. A redirect landing on a URL already admitted to the
    frontier is dropped, so every page is dispatched at most once.
    """

    def __init__(
        self,
        site: str,
        *,
        user_agent: str = "MarkupScout/0.1.0",
        timeout: float = 10.0,
        cookies: Optional[Mapping[str, str]] = None,
        ignore_links: Optional[re.Pattern[str]] = None,
    ) -> None:
        self.site = site
        self.host = urlparse(site).netloc.lower()
        self.user_agent = user_agent
        self.timeout = timeout
        self.cookies: Dict[str, str] = dict(cookies or {})
        self.ignore_links = ignore_links
        self.frontier = Frontier()
        self.history: List[str] = []
        self.failures: Set[str] = set()
        self.session: Optional[ClientSession] = None
        self.logger = logger
        self._css_hooks: List[PageHook] = []
        self._html_hooks: List[PageHook] = []
        self._failed_hooks: List[UrlHook] = []

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
            cookies=self.cookies,
            cookie_jar=CookieJar(unsafe=True),
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # hook registration ------------------------------------------------------

    def every_css_page(self, hook: PageHook) -> PageHook:
        self._css_hooks.append(hook)
        return hook

    def every_html_page(self, hook: PageHook) -> PageHook:
        self._html_hooks.append(hook)
        return hook

    def every_failed_url(self, hook: UrlHook) -> UrlHook:
        self._failed_hooks.append(hook)
        return hook

    # frontier ---------------------------------------------------------------

    def visit(self, url: str) -> bool:
        """True when *url* belongs to the crawled site and is not excluded."""
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or parsed.netloc.lower() != self.host:
            return False
        if self.ignore_links is not None and self.ignore_links.search(url):
            return False
        return True

    def enqueue(self, url: str) -> bool:
        """Queue *url* unless it is off-site, excluded or already admitted."""
        if not self.visit(url):
            return False
        return self.frontier.push(url)

    async def crawl(self) -> List[str]:
        if not self.session:
            raise RuntimeError("Session not initialized")
        self.logger.info("Crawl start: %s", self.site)
        start = time.monotonic()
        self.enqueue(self.site)
        while self.frontier:
            url = self.frontier.pop()
            self.history.append(url)
            page = await self._fetch(url)
            if page is not None:
                self._dispatch(page)
        duration = time.monotonic() - start
        self.logger.info(
            "Crawl done: %d visited, %d failed in %.2f s",
            len(self.history),
            len(self.failures),
            duration,
        )
        return self.history

    async def _fetch(self, url: str) -> Optional[Page]:
        assert self.session is not None
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    self._failed(url, f"HTTP {resp.status}")
                    return None
                final_url = normalize_url(str(resp.url))
                if final_url != url:
                    if final_url in self.frontier:
                        self.logger.debug("Redirect %s -> %s already admitted", url, final_url)
                        return None
                    self.frontier.mark_seen(final_url)
                mime = resp.content_type or ""
                page = Page(final_url, "", mime)
                if page.is_html or page.is_css:
                    body = await resp.text(errors="replace")
                    page = Page(page.url, body, mime)
                return page
        except (ClientError, asyncio.TimeoutError) as e:
            self._failed(url, str(e) or type(e).__name__)
            return None

    def _failed(self, url: str, reason: str) -> None:
        self.logger.warning("Failed %s: %s", url, reason)
        self.failures.add(url)
        for hook in self._failed_hooks:
            hook(url)

    def _dispatch(self, page: Page) -> None:
        if page.is_css:
            for hook in self._css_hooks:
                hook(page)
        elif page.is_html:
            for hook in self._html_hooks:
                hook(page)
            for link in extract_links(page):
                self.enqueue(link)
