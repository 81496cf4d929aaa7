"""Lantern data source fetchers."""

from fetchers.base import PerformanceReport, RawPageData, normalize_url
from fetchers.orchestrator import FetchOrchestrator, FetchResult
from fetchers.page import PageFetcher
from fetchers.pagespeed import PageSpeedClient

__all__ = [
    "PerformanceReport",
    "RawPageData",
    "normalize_url",
    "FetchOrchestrator",
    "FetchResult",
    "PageFetcher",
    "PageSpeedClient",
]
