"""Concurrent fetch of every data source an analysis needs."""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from config import Settings
from fetchers.base import PerformanceReport, RawPageData
from fetchers.page import PageFetcher
from fetchers.pagespeed import PageSpeedClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """Everything fetched for one analysis. Failed sources are None / error-marked."""

    url: str
    mobile: PerformanceReport | None
    desktop: PerformanceReport | None
    page: RawPageData


class FetchOrchestrator:
    """
    Issues the three source requests concurrently.

    Each source is tried exactly once. A failure in one never blocks the
    others, and fetch_all only returns once all three have settled.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self._client = client

    async def fetch_all(self, url: str) -> FetchResult:
        """
        Fetch PageSpeed mobile, PageSpeed desktop and the raw page for `url`.

        Args:
            url: Normalized URL to analyze

        Returns:
            FetchResult
        """
        if self._client is not None:
            return await self._fetch_with(self._client, url)

        async with httpx.AsyncClient() as client:
            return await self._fetch_with(client, url)

    async def _fetch_with(self, client: httpx.AsyncClient, url: str) -> FetchResult:
        pagespeed = PageSpeedClient(
            client,
            api_url=self.settings.pagespeed_api_url,
            api_key=self.settings.pagespeed_api_key,
            timeout=self.settings.pagespeed_timeout,
        )
        page_fetcher = PageFetcher(
            client,
            user_agent=self.settings.crawler_user_agent,
            timeout=self.settings.http_timeout,
        )

        logger.info(f"Fetching sources for {url}")
        mobile, desktop, page = await asyncio.gather(
            pagespeed.fetch(url, "mobile"),
            pagespeed.fetch(url, "desktop"),
            page_fetcher.fetch(url),
        )

        logger.info(
            f"Sources for {url}: mobile={'ok' if mobile else 'unavailable'}, "
            f"desktop={'ok' if desktop else 'unavailable'}, "
            f"page={'ok' if page.error is None else page.error}"
        )
        return FetchResult(url=url, mobile=mobile, desktop=desktop, page=page)
