# File: site_parity/engine.py
"""site_parity.engine: fetch + extract pipelines and the two-page comparison."""

from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientSession

from site_parity.aggregator import MigrationReport, build_migration_report
from site_parity.config import ParityConfig
from site_parity.extractor.page_extractor import extract
from site_parity.fetcher import Fetcher, open_session
from site_parity.logger import logger
from site_parity.models import ExtractionResult, LinkScope
from site_parity.urls import ensure_scheme

__all__ = ["Engine"]


class Engine:
    """Facade for the CLI, the HTTP service and tests.

    Every call re-fetches and re-extracts; nothing is cached between calls.
    A *session* may be passed in to reuse connections (the HTTP service does),
    otherwise a short-lived one is opened per call.
    """

    def __init__(self, config: Optional[ParityConfig] = None) -> None:
        self.config = config or ParityConfig()

    async def _pipeline(self, session: ClientSession, url: str, scope: LinkScope) -> ExtractionResult:
        page = await Fetcher(session, self.config).fetch(ensure_scheme(url))
        # extraction is CPU-bound
        return await asyncio.to_thread(extract, page.content, page.url, self.config, scope=scope)

    async def scrape(
        self,
        url: str,
        *,
        scope: LinkScope = LinkScope.CONTENT,
        session: Optional[ClientSession] = None,
    ) -> ExtractionResult:
        """Fetch and extract one page."""
        logger.info("Scraping %s", url)
        if session is not None:
            return await self._pipeline(session, url, scope)
        async with open_session(self.config) as own:
            return await self._pipeline(own, url, scope)

    async def compare(
        self,
        old_url: str,
        new_url: str,
        *,
        session: Optional[ClientSession] = None,
    ) -> MigrationReport:
        """Fetch and extract both pages concurrently, then compare their links.

        If either pipeline fails the other is cancelled and the error
        propagates; there is no partial report.
        """
        logger.info("Comparing %s -> %s", old_url, new_url)
        if session is None:
            async with open_session(self.config) as own:
                return await self._compare(own, old_url, new_url)
        return await self._compare(session, old_url, new_url)

    async def _compare(self, session: ClientSession, old_url: str, new_url: str) -> MigrationReport:
        tasks = [
            asyncio.create_task(self._pipeline(session, url, LinkScope.DOCUMENT))
            for url in (old_url, new_url)
        ]
        try:
            old, new = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        report = build_migration_report(old, new)
        logger.info(
            "Similarity %d%% (%d shared, %d missing)",
            report.similarity,
            len(report.comparison.shared),
            len(report.comparison.missing),
        )
        return report
