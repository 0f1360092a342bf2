# File: site_parity/server.py
"""site_parity.server: JSON HTTP endpoints over the engine (aiohttp.web).

``POST /api/scrape``  ``{"url": ...}``               → extraction document
``POST /api/compare`` ``{"url1": old, "url2": new}``  → migration report

Missing fields or a non-JSON body answer 400, fetch/parse failures 500;
both carry ``{"error": message}`` and never a traceback.
"""
from __future__ import annotations

import json
from typing import Any, AsyncIterator, Dict, Mapping

from aiohttp import ClientSession, web

from site_parity.config import ParityConfig
from site_parity.engine import Engine
from site_parity.errors import MissingInput, SiteParityError
from site_parity.fetcher import open_session
from site_parity.logger import logger

__all__ = ["create_app", "run_server"]

ENGINE_KEY = web.AppKey("engine", Engine)
SESSION_KEY = web.AppKey("session", ClientSession)


def _error(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def _payload(request: web.Request) -> Mapping[str, Any]:
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MissingInput("Request body must be a JSON object") from exc
    if not isinstance(data, dict):
        raise MissingInput("Request body must be a JSON object")
    return data


def _required(data: Mapping[str, Any], *names: str, message: str) -> Dict[str, str]:
    values = {name: data.get(name) for name in names}
    if not all(isinstance(v, str) and v.strip() for v in values.values()):
        raise MissingInput(message)
    return {name: str(value).strip() for name, value in values.items()}


async def handle_scrape(request: web.Request) -> web.Response:
    try:
        data = _required(await _payload(request), "url", message="URL is required")
    except MissingInput as exc:
        return _error(str(exc), 400)
    engine = request.app[ENGINE_KEY]
    try:
        result = await engine.scrape(data["url"], session=request.app[SESSION_KEY])
    except SiteParityError as exc:
        logger.error("Scraping error: %s", exc)
        return _error(str(exc), 500)
    except Exception:
        logger.exception("Unexpected scraping error")
        return _error("Failed to scrape content", 500)
    return web.json_response(result.to_dict())


async def handle_compare(request: web.Request) -> web.Response:
    try:
        data = _required(await _payload(request), "url1", "url2", message="Both URLs are required")
    except MissingInput as exc:
        return _error(str(exc), 400)
    engine = request.app[ENGINE_KEY]
    try:
        report = await engine.compare(data["url1"], data["url2"], session=request.app[SESSION_KEY])
    except SiteParityError as exc:
        logger.error("Comparison error: %s", exc)
        return _error(str(exc), 500)
    except Exception:
        logger.exception("Unexpected comparison error")
        return _error("Failed to compare websites", 500)
    return web.json_response(report.to_dict())


def create_app(config: ParityConfig | None = None) -> web.Application:
    """Build the application; one client session lives as long as the app."""
    config = config or ParityConfig()
    app = web.Application()
    app[ENGINE_KEY] = Engine(config)

    async def _session_ctx(app: web.Application) -> AsyncIterator[None]:
        async with open_session(config) as session:
            app[SESSION_KEY] = session
            yield

    app.cleanup_ctx.append(_session_ctx)
    app.router.add_post("/api/scrape", handle_scrape)
    app.router.add_post("/api/compare", handle_compare)
    return app


def run_server(config: ParityConfig, host: str | None = None, port: int | None = None) -> None:
    host = host or config.host
    port = port or config.port
    logger.info("Serving on http://%s:%d", host, port)
    web.run_app(create_app(config), host=host, port=port, print=None)
