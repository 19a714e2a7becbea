# File: markup_scout/engine.py
"""markup_scout.engine: orchestration of a live crawl or a static file walk,
markup validation of every page and failure accounting."""

from __future__ import annotations

import asyncio
import glob
import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote, urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout

from markup_scout.accountant import ErrorAccountant, ExitStatus
from markup_scout.config import CrawlOptions
from markup_scout.console import Console
from markup_scout.crawler.crawler import AsyncCrawler
from markup_scout.crawler.link_extractor import extract_css_urls, extract_img_urls, extract_links
from markup_scout.crawler.models import Page
from markup_scout.logger import logger
from markup_scout.static_checker import StaticLinkChecker
from markup_scout.validator import Validator

__all__ = ["Engine"]

STATIC_CONTENT_TYPE = "text/html"


class Engine:
    """Facade for the CLI and tests: runs one crawl and owns its counters."""

    def __init__(self, options: CrawlOptions, console: Optional[Console] = None) -> None:
        self.options = options
        self.console = console or Console(colored=options.color, verbose=options.verbose)
        self.accountant = ErrorAccountant()
        self.validator = Validator(options.schema_dir, options.ignore_re)
        self.crawler: Optional[AsyncCrawler] = None
        self.visited_count = 0
        self.failures_count = 0
        self.console.say("note", f"validating {options.site_url}\n")

    # counters ---------------------------------------------------------------

    @property
    def errors_count(self) -> int:
        return self.accountant.errors_count

    @property
    def not_founds_count(self) -> int:
        return self.accountant.not_founds_count

    @property
    def exit_status(self) -> ExitStatus:
        return self.accountant.exit_status

    # entry points -----------------------------------------------------------

    def run(self) -> ExitStatus:
        """Run the configured mode to completion and return the exit status."""
        if self.options.mode == "static":
            self.crawl_static()
        else:
            asyncio.run(self.crawl())
        return self.exit_status

    async def internet_connection(self) -> bool:
        """Probe `ping_url`; any network error means no connection."""
        if not self.options.ping_url:
            return True
        try:
            async with ClientSession(timeout=ClientTimeout(total=self.options.timeout)) as session:
                async with session.get(self.options.ping_url) as resp:
                    return resp.status < 500
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.debug("Connectivity probe %s failed: %s", self.options.ping_url, exc)
            return False

    async def crawl(self) -> AsyncCrawler:
        """Live mode: crawl the site, validating HTML pages and following resources."""
        opts = self.options
        if opts.ping_url and not await self.internet_connection():
            logger.warning("No internet connection (probe %s failed)", opts.ping_url)
            self.console.say("warning", "No internet connection")

        async with AsyncCrawler(
            opts.site_url,
            user_agent=opts.user_agent,
            timeout=opts.timeout,
            cookies=opts.cookie_jar(),
            ignore_links=opts.exclude_re,
        ) as crawler:
            self.crawler = crawler

            @crawler.every_css_page
            def _css(page: Page) -> None:
                for url in sorted(extract_css_urls(page)):
                    crawler.enqueue(url)

            @crawler.every_html_page
            def _html(page: Page) -> None:
                for url in sorted(extract_img_urls(page)):
                    crawler.enqueue(url)
                if opts.markup and page.is_html:
                    self.validate_page(page, page.url)

            if opts.not_found:
                crawler.every_failed_url(self.not_found_error)

            await crawler.crawl()

        self.visited_count = len(crawler.history)
        self.failures_count = len(crawler.failures)
        self._print_status_line()
        return crawler

    def crawl_static(self) -> int:
        """Static mode: walk `pattern` and treat every file as an HTML page of `site`."""
        opts = self.options
        checker = StaticLinkChecker(opts.site_url, opts.root, self.not_found_error)
        files = [f for f in sorted(glob.glob(opts.pattern, recursive=True)) if os.path.isfile(f)]
        for f in files:
            page = self.static_page(f)
            if opts.markup:
                self.validate_page(page, f)
            if opts.not_found:
                checker.check(extract_links(page))

        self.visited_count = len(files)
        self.failures_count = 0
        self._print_status_line()
        return len(files)

    # steps ------------------------------------------------------------------

    def static_page(self, file: str) -> Page:
        """Build the in-memory page of a local *file*, addressed under `site`."""
        path = Path(file)
        try:
            relative = path.resolve().relative_to(Path(self.options.root).resolve())
        except ValueError:
            relative = path
        url = urljoin(self.options.site_url, quote(relative.as_posix()))
        body = path.read_text(encoding="utf-8", errors="replace")
        return Page(url, body, STATIC_CONTENT_TYPE)

    def validate_page(self, page: Page, location: str) -> bool:
        result = self.validator.validate(page.body)
        logger.debug("%s: %d validation error(s)", location, len(result.errors))
        if self.accountant.record_validation(result.is_valid):
            self.console.page_ok()
        else:
            self.console.page_invalid(location, result.errors)
        return result.is_valid

    def not_found_error(self, location: str) -> None:
        self.accountant.record_not_found()
        logger.info("Not found: %s", location)
        self.console.not_found(location)

    def _print_status_line(self) -> None:
        logger.info(
            "%d visited, %d failures, %d not founds, %d errors",
            self.visited_count,
            self.failures_count,
            self.not_founds_count,
            self.errors_count,
        )
        self.console.summary(
            self.visited_count, self.failures_count, self.not_founds_count, self.errors_count
        )
