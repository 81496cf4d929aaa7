"""Raw page fetcher."""

import logging

import httpx

from fetchers.base import RawPageData

logger = logging.getLogger(__name__)


class PageFetcher:
    """Downloads the page HTML and response headers with a declared bot user agent."""

    def __init__(self, client: httpx.AsyncClient, user_agent: str, timeout: float = 30):
        self.client = client
        self.user_agent = user_agent
        self.timeout = timeout

    async def fetch(self, url: str) -> RawPageData:
        """
        Fetch the page.

        Never raises: any failure is returned as RawPageData with an error marker.
        """
        try:
            response = await self.client.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                follow_redirects=True,
            )
            response.raise_for_status()

        except httpx.TimeoutException:
            logger.warning(f"Timeout fetching {url}")
            return RawPageData.failed(url, "Timeout fetching page")

        except httpx.HTTPStatusError as e:
            logger.warning(f"Page fetch for {url} returned {e.response.status_code}")
            return RawPageData.failed(url, f"HTTP {e.response.status_code}")

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Page fetch failed for {url}: {e}")
            return RawPageData.failed(url, str(e) or e.__class__.__name__)

        except Exception as e:
            logger.exception(f"Page fetch failed for {url}: {e}")
            return RawPageData.failed(url, str(e) or e.__class__.__name__)

        final_url = str(response.url)
        return RawPageData(
            url=final_url,
            html=response.text,
            headers={k.lower(): v for k, v in response.headers.items()},
            is_secure_transport=final_url.startswith("https://"),
        )
