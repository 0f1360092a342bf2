# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from site_parity.config import ParityConfig
from site_parity.models import ExtractionResult, LinkOrigin, LinkRecord

BASE_URL = "https://site.com/page"

OLD_PAGE = """\
<html>
<head><title>Old site</title></head>
<body>
  <nav><a href="/">Home</a></nav>
  <main>
    <h1>Welcome</h1>
    <p>Read <a href="/x">the X page</a> and <a href="/y">the Y page</a>.</p>
  </main>
</body>
</html>
"""

NEW_PAGE = """\
<html>
<head><title>New site</title></head>
<body>
  <main>
    <p>Still <a href="/x?ref=new">X</a>, now also <a href="/z" rel="nofollow">Z</a>.</p>
  </main>
</body>
</html>
"""


def make_result(url: str, *paths: str, host: str = "https://site.com") -> ExtractionResult:
    """ExtractionResult with one internal link per path."""
    links = tuple(
        LinkRecord(url=f"{host}{p}", anchor_text=p, origin=LinkOrigin.INTERNAL) for p in paths
    )
    return ExtractionResult(url=url, title="t", links=links)


@pytest.fixture()
def config() -> ParityConfig:
    return ParityConfig(timeout=2.0, user_agent="TestAgent/1.0")


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def add_site_routes(app: web.Application) -> None:
    """Old/new pages plus a redirect, a 404, a slow page and a non-HTML page."""

    async def handle_old(_):
        return web.Response(text=OLD_PAGE, content_type="text/html")

    async def handle_new(_):
        return web.Response(text=NEW_PAGE, content_type="text/html")

    async def handle_moved(_):
        raise web.HTTPFound("/old")

    async def handle_missing(_):
        return web.Response(status=404, text="not here")

    async def handle_slow(_):
        import asyncio

        await asyncio.sleep(1.5)
        return web.Response(text="<p>late</p>", content_type="text/html")

    app.router.add_get("/old", handle_old)
    app.router.add_get("/new", handle_new)
    app.router.add_get("/moved", handle_moved)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/slow", handle_slow)


@pytest.fixture()
def serve() -> Callable[[web.Application, int], AsyncIterator[str]]:
    return _serve_app


@pytest_asyncio.fixture
async def site_server(unused_tcp_port: int) -> AsyncIterator[str]:
    app = web.Application()
    add_site_routes(app)
    async for url in _serve_app(app, unused_tcp_port):
        yield url
