"""Fetch orchestrator tests using httpx.MockTransport."""

import httpx
import pytest

from config import Settings
from fetchers import FetchOrchestrator, PageSpeedClient, normalize_url

PAGESPEED_URL = "https://pagespeed.test/runPagespeed"


def pagespeed_payload(strategy: str) -> dict:
    performance = 0.42 if strategy == "mobile" else 0.91
    return {
        "lighthouseResult": {
            "categories": {
                "performance": {"score": performance},
                "accessibility": {"score": 0.88},
                "seo": {"score": 1},
            },
            "audits": {
                "first-contentful-paint": {"displayValue": "1.8 s"},
                "largest-contentful-paint": {"displayValue": "3.1 s"},
                "interactive": {"score": 0.5},
            },
        }
    }


def make_settings() -> Settings:
    return Settings(
        _env_file=None,
        pagespeed_api_url=PAGESPEED_URL,
        pagespeed_api_key="test-key",
    )


def make_handler(pagespeed_status: int = 200, page_error: Exception | None = None, seen: list | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if request.url.host == "pagespeed.test":
            if pagespeed_status != 200:
                return httpx.Response(pagespeed_status, text="quota exceeded")
            return httpx.Response(200, json=pagespeed_payload(request.url.params["strategy"]))
        if page_error is not None:
            raise page_error
        return httpx.Response(
            200,
            html="<html><head><title>Acme</title></head></html>",
            headers={"Strict-Transport-Security": "max-age=31536000", "X-Powered-By": "PHP"},
        )

    return handler


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("acme.example", "https://acme.example"),
        ("  http://acme.example/ ", "http://acme.example/"),
        ("https://acme.example/a", "https://acme.example/a"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


async def test_fetch_all_success():
    seen = []
    async with httpx.AsyncClient(transport=httpx.MockTransport(make_handler(seen=seen))) as client:
        result = await FetchOrchestrator(make_settings(), client=client).fetch_all("https://acme.example/")

    assert result.mobile.performance_score == 0.42
    assert result.desktop.performance_score == 0.91
    assert result.mobile.accessibility_score == 0.88
    assert result.mobile.audits["first-contentful-paint"] == "1.8 s"
    assert "interactive" not in result.mobile.audits

    assert result.page.error is None
    assert result.page.is_secure_transport
    assert result.page.header("Strict-Transport-Security") == "max-age=31536000"
    assert "x-powered-by" in result.page.headers
    assert "<title>Acme</title>" in result.page.html

    assert len(seen) == 3
    pagespeed_request = next(r for r in seen if r.url.host == "pagespeed.test")
    assert pagespeed_request.url.params.get_list("category") == ["performance", "accessibility", "seo"]
    assert pagespeed_request.url.params["key"] == "test-key"
    page_request = next(r for r in seen if r.url.host == "acme.example")
    assert "LanternBot" in page_request.headers["user-agent"]


async def test_pagespeed_failure_is_absorbed():
    transport = httpx.MockTransport(make_handler(pagespeed_status=429))
    async with httpx.AsyncClient(transport=transport) as client:
        result = await FetchOrchestrator(make_settings(), client=client).fetch_all("https://acme.example/")

    assert result.mobile is None
    assert result.desktop is None
    assert result.page.error is None


async def test_page_timeout_is_error_marked():
    transport = httpx.MockTransport(make_handler(page_error=httpx.ConnectTimeout("too slow")))
    async with httpx.AsyncClient(transport=transport) as client:
        result = await FetchOrchestrator(make_settings(), client=client).fetch_all("https://acme.example/")

    assert result.mobile is not None
    assert result.desktop is not None
    assert result.page.error == "Timeout fetching page"
    assert result.page.html == ""


async def test_page_http_error_is_error_marked():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "pagespeed.test":
            return httpx.Response(200, json=pagespeed_payload("mobile"))
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await FetchOrchestrator(make_settings(), client=client).fetch_all("https://acme.example/")

    assert result.page.error == "HTTP 503"


async def test_pagespeed_invalid_json_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        pagespeed = PageSpeedClient(client, api_url=PAGESPEED_URL)
        assert await pagespeed.fetch("https://acme.example/", "mobile") is None


async def test_invalid_url_is_error_marked():
    transport = httpx.MockTransport(make_handler())
    async with httpx.AsyncClient(transport=transport) as client:
        result = await FetchOrchestrator(make_settings(), client=client).fetch_all("https://acme.example:abc/")

    assert result.page.error
    assert result.page.html == ""
    assert result.mobile is not None
    assert result.desktop is not None


@pytest.mark.parametrize("body", [[1, 2], "just a string", {"lighthouseResult": [1]}])
async def test_pagespeed_unexpected_json_shape(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        report = await PageSpeedClient(client, api_url=PAGESPEED_URL).fetch("https://acme.example/", "mobile")

    if isinstance(body, dict):
        assert report.performance_score is None
        assert report.audits == {}
    else:
        assert report is None
