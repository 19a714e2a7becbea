# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Dict, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web

from markup_scout.config import CrawlOptions
from samples import MINIMAL_XHTML_XSD

#: path → (body, content type), an HTTP status for an empty response, or a handler
Routes = Dict[str, Union[Tuple[str, str], int, Callable[[web.Request], Awaitable[web.StreamResponse]]]]


@pytest.fixture()
def schema_dir(tmp_path: Path) -> Path:
    """Directory holding an `xhtml1-strict.xsd` schema."""
    directory = tmp_path / "schemas"
    directory.mkdir()
    (directory / "xhtml1-strict.xsd").write_text(MINIMAL_XHTML_XSD, encoding="utf-8")
    return directory


@pytest.fixture()
def make_options() -> Callable[..., CrawlOptions]:
    """Build CrawlOptions with test-friendly defaults (no color, no probe)."""

    def _make(**overrides) -> CrawlOptions:
        data = {"color": False, "ping_url": None, "timeout": 5.0}
        data.update(overrides)
        return CrawlOptions(**data)

    return _make


def _handler(route):
    if callable(route):
        return route

    async def handle(_request: web.Request) -> web.Response:
        if isinstance(route, int):
            return web.Response(status=route)
        body, content_type = route
        return web.Response(text=body, content_type=content_type)

    return handle


@pytest_asyncio.fixture
async def serve() -> AsyncIterator[Callable[[Routes], Awaitable[str]]]:
    """Start throwaway aiohttp apps; yields `serve(routes) -> base URL`.

    Unknown paths answer 404.
    """
    runners: list[web.AppRunner] = []

    async def _serve(routes: Routes) -> str:
        app = web.Application()
        for path, route in routes.items():
            app.router.add_get(path, _handler(route))
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        runners.append(runner)
        port = runner.addresses[0][1]
        return f"http://127.0.0.1:{port}/"

    yield _serve

    for runner in runners:
        await runner.cleanup()
