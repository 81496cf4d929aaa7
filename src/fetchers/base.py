"""Data returned by the external sources."""

from dataclasses import dataclass, field
from typing import Literal

Strategy = Literal["mobile", "desktop"]


@dataclass(frozen=True)
class PerformanceReport:
    """Lab data for one PageSpeed strategy."""

    strategy: Strategy
    performance_score: float | None  # 0-1
    accessibility_score: float | None = None  # 0-1
    seo_score: float | None = None  # 0-1
    audits: dict[str, str] = field(default_factory=dict)  # audit id -> display value


@dataclass(frozen=True)
class RawPageData:
    """
    The fetched page.

    Header names are stored lower-cased so lookups are case-insensitive.
    When `error` is set the fetch failed and nothing else should be trusted.
    """

    url: str
    html: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    is_secure_transport: bool = False
    error: str | None = None

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    @classmethod
    def failed(cls, url: str, error: str) -> "RawPageData":
        return cls(
            url=url,
            is_secure_transport=url.startswith("https://"),
            error=error,
        )


def normalize_url(url: str) -> str:
    """Default the scheme to https:// when the caller left it off."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url
