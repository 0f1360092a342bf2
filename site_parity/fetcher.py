"""
Fetcher module: one HTTP GET per page with the configured timeout and User-Agent.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_parity.config import ParityConfig
from site_parity.errors import FetchFailure
from site_parity.logger import logger

__all__ = ["PageData", "Fetcher", "open_session"]


@dataclass(frozen=True, slots=True)
class PageData:
    """Markup of a fetched page and the URL it was finally served from."""

    url: str
    content: str
    status: int = 200


def open_session(config: ParityConfig) -> ClientSession:
    """Session carrying the timeout and User-Agent of *config*; caller closes it."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches single pages; no retries, redirects are followed."""

    def __init__(self, session: ClientSession, config: ParityConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its markup.

        Raises FetchFailure on network errors, timeouts and non-2xx statuses.
        """
        logger.debug("GET %s", url)
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchFailure(f"Failed to fetch {url}: HTTP {resp.status}")
                ctype = resp.headers.get("Content-Type", "").lower()
                if ctype and "html" not in ctype:
                    logger.warning("%s is served as %s, parsing anyway", url, ctype)
                text = await resp.text(errors="replace")
                return PageData(url=str(resp.url), content=text, status=resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchFailure(
                f"Failed to fetch {url}: timed out after {self.config.timeout:g} s"
            ) from exc
        except ClientError as exc:
            raise FetchFailure(f"Failed to fetch {url}: {exc}") from exc
