"""PageSpeed Insights client."""

import logging

import httpx

from fetchers.base import PerformanceReport, Strategy

logger = logging.getLogger(__name__)


class PageSpeedClient:
    """
    Fetches Lighthouse lab data from the PageSpeed Insights API.

    Collects:
    - Category scores: Performance, Accessibility, SEO
    - Audit display values (FCP, LCP, TBT, CLS, Speed Index, TTI, ...)
    """

    CATEGORIES = ("performance", "accessibility", "seo")

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str,
        api_key: str | None = None,
        timeout: float = 90,
    ):
        self.client = client
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout

    async def fetch(self, url: str, strategy: Strategy) -> PerformanceReport | None:
        """
        Run a PageSpeed analysis for one strategy.

        Args:
            url: Website URL to audit
            strategy: "mobile" or "desktop"

        Returns:
            PerformanceReport, or None if the API call failed for any reason
        """
        params = [("url", url), ("strategy", strategy)]
        params += [("category", category) for category in self.CATEGORIES]
        if self.api_key:
            params.append(("key", self.api_key))

        try:
            response = await self.client.get(
                self.api_url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            raw_data = response.json()

        except httpx.TimeoutException:
            logger.warning(f"PageSpeed {strategy} timeout for {url}")
            return None

        except httpx.HTTPStatusError as e:
            logger.warning(
                f"PageSpeed {strategy} API error for {url}: "
                f"{e.response.status_code} {e.response.text[:200]}"
            )
            return None

        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"PageSpeed {strategy} failed for {url}: {e}")
            return None

        except Exception as e:
            logger.exception(f"PageSpeed {strategy} failed for {url}: {e}")
            return None

        if not isinstance(raw_data, dict):
            logger.warning(f"PageSpeed {strategy} returned {type(raw_data).__name__} for {url}, expected an object")
            return None

        return self._extract_report(raw_data, strategy)

    def _extract_report(self, raw_data: dict, strategy: Strategy) -> PerformanceReport:
        """
        Extract category scores and audit display values from PageSpeed JSON.

        Args:
            raw_data: Full PageSpeed response
            strategy: Strategy the report was requested for

        Returns:
            PerformanceReport
        """
        lighthouse = _section(raw_data, "lighthouseResult")
        categories = _section(lighthouse, "categories")

        category_scores = {}
        for cat_name in self.CATEGORIES:
            score = _section(categories, cat_name).get("score")
            category_scores[cat_name] = float(score) if isinstance(score, (int, float)) else None

        audits = {}
        for audit_id, audit_data in _section(lighthouse, "audits").items():
            display_value = audit_data.get("displayValue") if isinstance(audit_data, dict) else None
            if display_value:
                audits[audit_id] = str(display_value)

        return PerformanceReport(
            strategy=strategy,
            performance_score=category_scores["performance"],
            accessibility_score=category_scores["accessibility"],
            seo_score=category_scores["seo"],
            audits=audits,
        )


def _section(data: dict, key: str) -> dict:
    """Nested object at `key`, or an empty dict when missing or not an object."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}
