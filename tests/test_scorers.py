"""Category scorer tests."""

import pytest

from analyzers import (
    AccessibilityScorer,
    AEOGEOScorer,
    AIReadinessScorer,
    CheckStatus,
    ScoringContext,
    SecurityScorer,
    SEOScorer,
    default_scorers,
    security_grade,
)
from conftest import FULL_HTML, SECURE_HEADERS, make_page, make_report
from fetchers.base import RawPageData
from signals import extract_signals


def _check(result, name):
    return next(c for c in result.detailed_checks if c.name == name)


@pytest.fixture
def full_signals():
    return extract_signals(make_page(FULL_HTML, headers=SECURE_HEADERS))


@pytest.fixture
def degenerate_signals():
    return extract_signals(RawPageData.failed("https://down.example", "Timeout fetching page"))


# =============================================================================
# Invariants shared by every scorer
# =============================================================================


@pytest.mark.parametrize("html", [FULL_HTML, "", "<html><body><h1>a</h1><h1>b</h1></body></html>"])
def test_scores_and_checks_within_bounds(html, context):
    signals = extract_signals(make_page(html))
    for scorer in default_scorers():
        result = scorer.score(signals, context)
        assert 0 <= result.score <= 100
        for check in result.detailed_checks:
            assert 0 <= check.score <= check.max_score
        assert result.score == min(100, sum(c.score for c in result.detailed_checks))


def test_degenerate_signals_score_zero(degenerate_signals, context):
    for scorer in (AIReadinessScorer(), AEOGEOScorer(), SEOScorer(), SecurityScorer()):
        result = scorer.score(degenerate_signals, context)
        assert result.score == 0
        assert len(result.issues) == 1


# =============================================================================
# AI readiness
# =============================================================================


def test_ai_readiness_structured_data_only(full_signals, context):
    result = AIReadinessScorer().score(full_signals, context)

    schema = _check(result, "Structured Data for AI")
    assert schema.score == 20
    assert schema.status == CheckStatus.GOOD
    assert result.score == 20
    assert result.metadata["features"]["chatbot"]["detected"] is False
    assert len(result.metadata["opportunities"]) == 3


def test_ai_readiness_chatbot_scores_thirty(context):
    html = '<script src="https://js.driftt.com/include/abc.js"></script>'
    result = AIReadinessScorer().score(extract_signals(make_page(html)), context)

    assert _check(result, "AI Chatbot").score == 30
    assert result.metadata["features"]["chatbot"]["providers"] == ["Drift"]
    assert result.checks["chatbot"] is True


# =============================================================================
# AEO / GEO
# =============================================================================


def test_aeo_geo_full_page(full_signals, context):
    result = AEOGEOScorer().score(full_signals, context)

    assert _check(result, "Schema Markup (Structured Data)").score == 20
    assert _check(result, "FAQ Content").score == 15
    assert _check(result, "Local Business Signals").score == 15
    assert _check(result, "Structured Content Format").score == 15
    assert result.metadata["llm_context"]["test_query"] == '"Best plumbing in Austin"'


def test_aeo_faq_text_without_schema(context):
    html = "<h2>Frequently Asked Questions</h2><p>Answers below.</p>"
    result = AEOGEOScorer().score(extract_signals(make_page(html)), context)

    faq = _check(result, "FAQ Content")
    assert faq.score == 10
    assert faq.status == CheckStatus.PARTIAL


def test_aeo_llm_context_low_score(context):
    result = AEOGEOScorer().score(extract_signals(make_page("<p>hello</p>")), context)

    assert result.metadata["llm_context"]["would_recommend"] is False
    assert result.metadata["llm_context"]["prediction"].startswith("LOW")


# =============================================================================
# SEO
# =============================================================================


def test_seo_full_score(full_signals, context):
    result = SEOScorer().score(full_signals, context)

    assert result.score == 100
    assert result.metadata["failed_checks"] == 0


def test_seo_multiple_h1_penalized(context):
    html = FULL_HTML.replace("</main>", "<h1>Another heading</h1></main>")
    result = SEOScorer().score(extract_signals(make_page(html)), context)

    h1 = _check(result, "H1 Heading")
    assert h1.score == 5
    assert h1.status == CheckStatus.PARTIAL
    assert result.score == 90


def test_seo_short_title_loses_length_points(context):
    html = FULL_HTML.replace("Acme Plumbing | Trusted Plumbers in Austin TX", "Acme")
    result = SEOScorer().score(extract_signals(make_page(html)), context)
    assert _check(result, "Meta Title").score == 10


def test_seo_slow_mobile_loses_points(full_signals, business):
    context = ScoringContext(business=business, mobile=make_report(performance=0.3))
    result = SEOScorer().score(full_signals, context)
    assert _check(result, "Mobile Friendly").score == 0
    assert "Poor mobile performance" in result.issues


def test_seo_noindex_is_issue_without_points(full_signals, context):
    html = FULL_HTML.replace("<head>", '<head><meta name="robots" content="noindex, nofollow">')
    result = SEOScorer().score(extract_signals(make_page(html)), context)

    assert result.score == 100
    assert result.checks["robots"] is False
    assert "Page set to noindex" in result.issues


# =============================================================================
# Security
# =============================================================================


def test_security_full_score(full_signals, context):
    result = SecurityScorer().score(full_signals, context)

    assert result.score == 100
    assert result.metadata["grade"] == "A"


def test_security_unsafe_csp_is_partial(context):
    headers = dict(SECURE_HEADERS, **{"content-security-policy": "default-src 'self' 'unsafe-inline'"})
    result = SecurityScorer().score(extract_signals(make_page(headers=headers)), context)

    csp = _check(result, "Content Security Policy (CSP)")
    assert csp.score == 10
    assert csp.status == CheckStatus.PARTIAL


def test_security_plain_http_gets_no_mixed_content_points(context):
    page = make_page(headers=SECURE_HEADERS, url="http://acme.example/")
    result = SecurityScorer().score(extract_signals(page), context)

    assert _check(result, "HTTPS / SSL Certificate").score == 0
    assert _check(result, "Mixed Content").score == 0
    assert result.score == 65


def test_security_exposed_server_and_weak_nosniff(context):
    headers = dict(SECURE_HEADERS, **{"server": "Apache/2.4.1", "x-content-type-options": "sniff"})
    result = SecurityScorer().score(extract_signals(make_page(headers=headers)), context)

    assert _check(result, "Server Information Exposure").score == 2
    assert _check(result, "MIME Type Sniffing Protection").score == 5
    assert result.score == 92


def test_security_no_headers(context):
    result = SecurityScorer().score(extract_signals(make_page()), context)

    # HTTPS + no mixed content + no server header
    assert result.score == 40
    assert result.metadata["grade"] == "D"


@pytest.mark.parametrize(
    "score,grade",
    [(100, "A"), (85, "A"), (84, "B"), (70, "B"), (55, "C"), (40, "D"), (39, "F"), (0, "F")],
)
def test_security_grade(score, grade):
    assert security_grade(score) == grade


# =============================================================================
# Accessibility
# =============================================================================


def test_accessibility_full_score(full_signals, context):
    result = AccessibilityScorer().score(full_signals, context)

    assert result.score == 100
    assert result.metadata["lighthouse_score"] == 100


def test_accessibility_no_images_counts_as_full_alt(context):
    html = FULL_HTML.replace('<img src="/team.jpg" alt="Our team">', "")
    result = AccessibilityScorer().score(extract_signals(make_page(html)), context)
    assert _check(result, "Image Alt Text").score == 15


def test_accessibility_missing_alt_text(context):
    html = FULL_HTML.replace('alt="Our team"', "")
    result = AccessibilityScorer().score(extract_signals(make_page(html)), context)
    assert _check(result, "Image Alt Text").score == 0


def test_accessibility_degenerate_keeps_lab_component(degenerate_signals, business):
    context = ScoringContext(business=business, mobile=make_report(accessibility=0.8))
    result = AccessibilityScorer().score(degenerate_signals, context)

    assert result.score == 32
    assert result.issues == ["Could not analyze website HTML"]


def test_accessibility_without_lab_data(full_signals, business):
    result = AccessibilityScorer().score(full_signals, ScoringContext(business=business))

    assert result.score == 60
    assert result.metadata["lighthouse_score"] is None


# =============================================================================
# Partial credit tiers
# =============================================================================


@pytest.mark.parametrize(
    "html",
    ["<ul><li>Drain cleaning</li><li>Water heaters</li></ul>", "<dl><dt>Do you serve Austin?</dt><dd>Yes.</dd></dl>"],
)
def test_aeo_structure_lists_or_qa_alone(html, context):
    result = AEOGEOScorer().score(extract_signals(make_page(html)), context)

    structure = _check(result, "Structured Content Format")
    assert structure.score == 8
    assert structure.status == CheckStatus.PARTIAL


@pytest.mark.parametrize(
    "html,expected",
    [
        ("<p>We provide drain cleaning.</p>", 8),
        ("<h2>Our services</h2>", 7),
        ("<p>Our process is simple.</p>", 5),
    ],
)
def test_aeo_clear_answers_partial_credit(html, expected, context):
    result = AEOGEOScorer().score(extract_signals(make_page(html)), context)
    assert _check(result, "Clear, Extractable Content").score == expected


@pytest.mark.parametrize(
    "html,expected",
    [
        ("<p>Licensed plumbers.</p>", 10),
        ("<p>500 projects completed</p>", 5),
    ],
)
def test_aeo_expertise_partial_credit(html, expected, context):
    result = AEOGEOScorer().score(extract_signals(make_page(html)), context)
    assert _check(result, "Expertise & Trust Signals (E-E-A-T)").score == expected


def test_accessibility_half_the_images_with_alt(context):
    html = FULL_HTML.replace(
        '<img src="/team.jpg" alt="Our team">',
        '<img src="/team.jpg" alt="Our team"><img src="/van.jpg">',
    )
    result = AccessibilityScorer().score(extract_signals(make_page(html)), context)

    alt = _check(result, "Image Alt Text")
    assert alt.score == 8
    assert alt.status == CheckStatus.PARTIAL


def test_clickjacking_protected_by_frame_ancestors(context):
    headers = {k: v for k, v in SECURE_HEADERS.items() if k != "x-frame-options"}
    result = SecurityScorer().score(extract_signals(make_page(headers=headers)), context)

    clickjacking = _check(result, "Clickjacking Protection")
    assert clickjacking.score == 10
    assert "✓ CSP frame-ancestors directive set" in clickjacking.details
    assert result.checks["clickjacking"] is True


def test_hsts_details(context):
    result = SecurityScorer().score(extract_signals(make_page(headers=SECURE_HEADERS)), context)
    hsts = _check(result, "HSTS (HTTP Strict Transport Security)")
    assert "✓ Max-age is 1 year or more (recommended)" in hsts.details
    assert "✓ Includes subdomains" in hsts.details

    headers = dict(SECURE_HEADERS, **{"strict-transport-security": "max-age=300"})
    result = SecurityScorer().score(extract_signals(make_page(headers=headers)), context)
    hsts = _check(result, "HSTS (HTTP Strict Transport Security)")
    assert hsts.score == 15
    assert any(d.startswith("⚠ max-age is 300s") for d in hsts.details)
    assert "✓ Includes subdomains" not in hsts.details


def test_empty_h1_counts_the_same_for_seo_and_accessibility(context):
    signals = extract_signals(make_page("<html><body><h1></h1><h1>Welcome</h1></body></html>"))

    seo_h1 = _check(SEOScorer().score(signals, context), "H1 Heading")
    a11y_h1 = _check(AccessibilityScorer().score(signals, context), "Heading Structure")
    assert seo_h1.score == 5
    assert a11y_h1.score == 5
