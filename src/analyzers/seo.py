"""SEO scorer."""

from analyzers.base import (
    BaseScorer,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from signals.models import SignalSet


class SEOScorer(BaseScorer):
    """
    Scores on-page SEO best practices.

    Checks:
    - Title tag (existence, length)
    - Meta description (existence, length)
    - H1 headings (exactly one)
    - Structured data (JSON-LD)
    - HTTPS
    - Canonical URL
    - Mobile performance
    - Open Graph tags
    """

    # SEO scoring weights (total = 100)
    WEIGHTS = {
        "title": 15,
        "description": 15,
        "h1": 15,
        "schema": 15,
        "https": 10,
        "canonical": 10,
        "mobile": 10,
        "open_graph": 10,
    }

    TITLE_LENGTH = (30, 60)
    DESCRIPTION_LENGTH = (120, 160)
    MOBILE_PERFORMANCE_THRESHOLD = 0.5

    @property
    def name(self) -> str:
        return "seo"

    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        if signals.is_degenerate:
            return CategoryScore.unavailable("Could not fetch page to analyze SEO")

        issues: list[str] = []
        checks: dict[str, bool] = {}

        detailed_checks = [
            self._check_title(signals, checks, issues),
            self._check_description(signals, checks, issues),
            self._check_h1(signals, checks, issues),
            self._check_schema(signals, checks, issues),
            self._check_https(signals, checks, issues),
            self._check_canonical(signals, checks, issues),
            self._check_mobile(signals, context, checks, issues),
            self._check_open_graph(signals, checks, issues),
        ]
        self._check_robots(signals, checks, issues)

        passed = sum(1 for c in detailed_checks if c.status == CheckStatus.GOOD)
        return CategoryScore.from_checks(
            detailed_checks,
            checks=checks,
            issues=issues,
            recommendations=[c.recommendation for c in detailed_checks if c.recommendation],
            metadata={
                "passed_checks": passed,
                "failed_checks": len(detailed_checks) - passed,
                "meta_tags": {
                    "title": signals.meta_tags.title,
                    "description": signals.meta_tags.description,
                    "canonical": signals.meta_tags.canonical,
                    "robots": signals.meta_tags.robots,
                },
            },
        )

    def _check_title(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        title = signals.meta_tags.title
        check = DetailedCheck(
            name="Meta Title",
            max_score=self.WEIGHTS["title"],
            why_it_matters="The title is the headline shown in search results and browser tabs.",
        )

        if not title:
            check.note("✗ No title tag found")
            check.recommendation = "Add a unique, descriptive title tag with your main keyword and location."
            issues.append("Missing title tag")
            checks["title"] = False
            return check

        checks["title"] = True
        check.status = CheckStatus.PARTIAL
        check.award(10, f'✓ Title: "{title}" ({len(title)} chars)')

        low, high = self.TITLE_LENGTH
        if low <= len(title) <= high:
            check.award(5)
            check.status = CheckStatus.GOOD
        elif len(title) < low:
            check.recommendation = "Title is too short. Add more descriptive keywords."
        else:
            check.recommendation = "Title is too long and may be truncated in search results."
        return check

    def _check_description(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        description = signals.meta_tags.description
        check = DetailedCheck(
            name="Meta Description",
            max_score=self.WEIGHTS["description"],
            why_it_matters="The description is the snippet under your title in search results and drives clicks.",
        )

        if not description:
            check.note("✗ No meta description found")
            check.recommendation = (
                "Add a compelling meta description with your services, location, and a call-to-action."
            )
            issues.append("Missing meta description")
            checks["description"] = False
            return check

        checks["description"] = True
        check.status = CheckStatus.PARTIAL
        check.award(10, f"✓ Meta description present ({len(description)} chars)")

        low, high = self.DESCRIPTION_LENGTH
        if low <= len(description) <= high:
            check.award(5)
            check.status = CheckStatus.GOOD
        elif len(description) < low:
            check.recommendation = (
                "Description is too short. Expand to include services, location, and a call-to-action."
            )
        else:
            check.recommendation = "Description is too long and will be truncated in search results."
        return check

    def _check_h1(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        # Every <h1> tag counts, including empty ones
        h1_count = signals.accessibility.h1_count
        check = DetailedCheck(
            name="H1 Heading",
            max_score=self.WEIGHTS["h1"],
            why_it_matters="The H1 tells search engines what the page is about.",
        )

        if h1_count == 1:
            h1_text = signals.headings.h1[0] if signals.headings.h1 else ""
            check.award(15, f'✓ H1: "{h1_text}"')
            check.status = CheckStatus.GOOD
            checks["h1"] = True
        elif h1_count > 1:
            check.award(5, f"⚠ Found {h1_count} H1 tags")
            check.status = CheckStatus.PARTIAL
            check.recommendation = f"Found {h1_count} H1 tags. Use only one H1 per page for better SEO."
            issues.append("Multiple H1 tags found")
            checks["h1"] = False
        else:
            check.note("✗ No H1 heading found")
            check.recommendation = "Add a single H1 tag with your main keyword. This is crucial for SEO."
            issues.append("Missing H1 tag")
            checks["h1"] = False
        return check

    def _check_schema(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        schema = signals.schema_markup
        check = DetailedCheck(
            name="Schema Markup",
            max_score=self.WEIGHTS["schema"],
            why_it_matters="Structured data enables rich results such as stars, FAQs and business details.",
        )

        if not schema.found:
            check.note("✗ No schema markup detected")
            check.recommendation = (
                "Add LocalBusiness, Service, and FAQPage schema markup to enable rich snippets in search results."
            )
            issues.append("No schema markup detected")
            checks["schema"] = False
            return check

        checks["schema"] = True
        check.award(15, f"✓ Schema types: {', '.join(schema.types)}")
        check.status = CheckStatus.GOOD
        if not schema.has_local_business:
            check.note("✗ No LocalBusiness schema")
            check.recommendation = "Add LocalBusiness schema for better local search visibility."
        return check

    def _check_https(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="HTTPS Security",
            max_score=self.WEIGHTS["https"],
            why_it_matters="HTTPS is a ranking factor and browsers flag plain HTTP sites as not secure.",
        )

        if signals.transport.is_secure:
            check.award(10, "✓ Served over HTTPS")
            check.status = CheckStatus.GOOD
            checks["https"] = True
        else:
            check.note("✗ Served over plain HTTP")
            check.recommendation = "Switch to HTTPS. This is a ranking factor and essential for user trust."
            issues.append("Site not using HTTPS")
            checks["https"] = False
        return check

    def _check_canonical(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        canonical = signals.meta_tags.canonical
        check = DetailedCheck(
            name="Canonical URL",
            max_score=self.WEIGHTS["canonical"],
            why_it_matters="A canonical URL prevents duplicate versions of the page from splitting rankings.",
        )

        if canonical:
            check.award(10, f"✓ Canonical: {canonical}")
            check.status = CheckStatus.GOOD
            checks["canonical"] = True
        else:
            check.note("✗ No canonical link")
            check.recommendation = "Add a canonical URL to prevent duplicate content issues."
            issues.append("Missing canonical URL")
            checks["canonical"] = False
        return check

    def _check_mobile(
        self,
        signals: SignalSet,
        context: ScoringContext,
        checks: dict,
        issues: list,
    ) -> DetailedCheck:
        check = DetailedCheck(
            name="Mobile Friendly",
            max_score=self.WEIGHTS["mobile"],
            why_it_matters="Google indexes the mobile version of your site first.",
        )
        performance = context.mobile.performance_score if context.mobile else None

        if signals.meta_tags.has_viewport:
            check.note("✓ Viewport meta tag present")
        else:
            check.note("✗ No viewport meta tag")

        if performance is None:
            check.note("⚠ Mobile performance data unavailable")
            check.recommendation = "Re-run the analysis to collect mobile performance data."
            checks["mobile"] = False
        elif performance >= self.MOBILE_PERFORMANCE_THRESHOLD:
            check.award(10, f"✓ Mobile performance score {round(performance * 100)}/100")
            check.status = CheckStatus.GOOD
            checks["mobile"] = True
        else:
            check.note(f"✗ Mobile performance score {round(performance * 100)}/100")
            check.recommendation = (
                "Mobile performance needs improvement. Compress images, minimize CSS/JS, and "
                "consider a faster host."
            )
            issues.append("Poor mobile performance")
            checks["mobile"] = False
        return check

    def _check_open_graph(self, signals: SignalSet, checks: dict, issues: list) -> DetailedCheck:
        meta = signals.meta_tags
        check = DetailedCheck(
            name="Open Graph Tags",
            max_score=self.WEIGHTS["open_graph"],
            why_it_matters="Open Graph tags control how the page looks when shared on social media.",
        )

        if meta.og_title and meta.og_description:
            check.award(10, "✓ og:title and og:description present")
            check.status = CheckStatus.GOOD
            checks["openGraph"] = True
            if not meta.og_image:
                check.note("⚠ No og:image")
                check.recommendation = "Add og:image (1200x630px) for better social sharing appearance."
        else:
            if meta.og_title or meta.og_description:
                check.status = CheckStatus.PARTIAL
                check.note("⚠ Only one of og:title / og:description present")
            check.recommendation = (
                "Add Open Graph tags (og:title, og:description, og:image) for better social media sharing."
            )
            issues.append("Missing Open Graph tags")
            checks["openGraph"] = False
        return check

    def _check_robots(self, signals: SignalSet, checks: dict, issues: list) -> None:
        """Indexability is reported but carries no points."""
        robots = (signals.meta_tags.robots or "").lower()
        checks["robots"] = "noindex" not in robots
        if not checks["robots"]:
            issues.append("Page set to noindex")


def score_seo(signals: SignalSet, context: ScoringContext) -> CategoryScore:
    """Score SEO for the given signals."""
    return SEOScorer().score(signals, context)
