"""Shared fixtures and page builders."""

import pytest

from analyzers.base import BusinessContext, ScoringContext
from fetchers.base import PerformanceReport, RawPageData

TITLE = "Acme Plumbing | Trusted Plumbers in Austin TX"
DESCRIPTION = (
    "Acme Plumbing provides licensed plumbing repair, drain cleaning and water heater "
    "installation across Austin. Call today for a free quote."
)

LOCAL_BUSINESS_JSON_LD = """
<script type="application/ld+json">
{"@context": "https://schema.org", "@type": "Plumber", "name": "Acme Plumbing",
 "telephone": "(512) 555-0142"}
</script>
"""

FAQ_JSON_LD = """
<script type="application/ld+json">
{"@context": "https://schema.org", "@type": "FAQPage", "mainEntity": []}
</script>
"""

FULL_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{TITLE}</title>
  <meta name="description" content="{DESCRIPTION}">
  <meta property="og:title" content="Acme Plumbing">
  <meta property="og:description" content="Trusted plumbers in Austin">
  <meta property="og:image" content="https://acme.example/og.png">
  <link rel="canonical" href="https://acme.example/">
  <style>a:focus {{ outline: 2px solid #0050b3; }}</style>
  {LOCAL_BUSINESS_JSON_LD}
  {FAQ_JSON_LD}
</head>
<body>
  <a href="#main">Skip to main content</a>
  <header><a href="tel:5125550142">(512) 555-0142</a></header>
  <main id="main">
    <h1>Austin Plumbing Experts</h1>
    <p>We are a family-owned plumbing company serving Austin since 2005.</p>
    <h2>Our Services</h2>
    <ul><li>Drain cleaning</li><li>Water heaters</li></ul>
    <h2>Our Process</h2>
    <p>Licensed and certified technicians with 20+ years of experience.</p>
    <h2>FAQ</h2>
    <dl><dt>Do you serve Round Rock?</dt><dd>Yes.</dd></dl>
    <p>Visit us at 100 Congress Avenue. Hours: Mon-Fri 8am-6pm.</p>
    <img src="/team.jpg" alt="Our team">
  </main>
  <footer>hello@acme.example</footer>
</body>
</html>
"""

SECURE_HEADERS = {
    "content-type": "text/html; charset=utf-8",
    "strict-transport-security": "max-age=31536000; includeSubDomains",
    "content-security-policy": "default-src 'self'; script-src 'self'; frame-ancestors 'none'",
    "x-frame-options": "DENY",
    "x-content-type-options": "nosniff",
    "referrer-policy": "strict-origin-when-cross-origin",
    "permissions-policy": "camera=(), microphone=(), geolocation=()",
}


def make_page(html: str = FULL_HTML, headers: dict | None = None, url: str = "https://acme.example/") -> RawPageData:
    return RawPageData(
        url=url,
        html=html,
        headers={k.lower(): v for k, v in (headers or {}).items()},
        is_secure_transport=url.startswith("https://"),
    )


def make_report(
    strategy: str = "mobile",
    performance: float | None = 0.9,
    accessibility: float | None = 1.0,
    audits: dict | None = None,
) -> PerformanceReport:
    return PerformanceReport(
        strategy=strategy,
        performance_score=performance,
        accessibility_score=accessibility,
        seo_score=0.9,
        audits=audits or {},
    )


@pytest.fixture
def business() -> BusinessContext:
    return BusinessContext(company_name="Acme Plumbing", industry="Plumbing", city="Austin")


@pytest.fixture
def context(business) -> ScoringContext:
    return ScoringContext(
        business=business,
        mobile=make_report("mobile"),
        desktop=make_report("desktop", performance=0.95),
    )
