"""Accessibility scorer combining lab data with page heuristics."""

from analyzers.base import (
    BaseScorer,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from signals.models import AccessibilitySignals, SignalSet


class AccessibilityScorer(BaseScorer):
    """
    Scores accessibility.

    The lab accessibility audit contributes up to 40 points; the remaining 60
    come from checks on the fetched HTML.
    """

    WEIGHTS = {
        "lighthouse": 40,
        "alt_text": 15,
        "headings": 10,
        "form_labels": 10,
        "skip_link": 5,
        "landmarks": 5,
        "contrast": 5,
        "focus": 5,
        "language": 5,
    }

    @property
    def name(self) -> str:
        return "accessibility"

    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        lab_score = context.mobile.accessibility_score if context.mobile else None
        lab_check = self._check_lab_score(lab_score)
        metadata = {
            "lighthouse_score": round(lab_score * 100) if lab_score is not None else None,
        }

        if signals.is_degenerate:
            return CategoryScore.from_checks(
                [lab_check],
                issues=["Could not analyze website HTML"],
                metadata=metadata,
            )

        a11y = signals.accessibility
        issues: list[str] = []
        checks: dict[str, bool] = {}

        detailed_checks = [
            lab_check,
            self._check_alt_text(a11y, checks, issues),
            self._check_headings(a11y, checks, issues),
            self._check_labels(a11y, checks, issues),
            self._binary(
                "Skip Navigation Link",
                "skip_link",
                a11y.has_skip_link,
                checks,
                key="skipLink",
                why="Keyboard and screen-reader users need a way to jump past repeated navigation.",
                recommendation="Add a skip link for keyboard users",
            ),
            self._binary(
                "ARIA Landmarks",
                "landmarks",
                a11y.has_landmarks,
                checks,
                key="landmarks",
                why="Landmarks let assistive technology jump between page regions.",
                recommendation="Use semantic HTML5 elements (main, nav, header, footer)",
            ),
            self._binary(
                "Color Contrast",
                "contrast",
                not a11y.has_light_text,
                checks,
                key="colorContrast",
                why="Low-contrast text is hard to read for visitors with low vision.",
                recommendation="Review color contrast for readability",
                issue="Potential color contrast issues",
                issues=issues,
            ),
            self._binary(
                "Focus Indicators",
                "focus",
                a11y.has_focus_styles,
                checks,
                key="focusIndicators",
                why="Keyboard users need to see which element currently has focus.",
                recommendation="Add visible focus styles for keyboard navigation",
            ),
            self._binary(
                "Language Attribute",
                "language",
                a11y.has_lang_attribute,
                checks,
                key="langAttribute",
                why="Screen readers use the lang attribute to pick the right pronunciation.",
                recommendation='Add lang="en" to the html element',
                issue="Missing language attribute",
                issues=issues,
            ),
        ]

        return CategoryScore.from_checks(
            detailed_checks,
            checks=checks,
            issues=issues,
            recommendations=[c.recommendation for c in detailed_checks if c.recommendation],
            metadata=metadata,
        )

    def _check_lab_score(self, lab_score: float | None) -> DetailedCheck:
        check = DetailedCheck(
            name="Lighthouse Accessibility Audit",
            max_score=self.WEIGHTS["lighthouse"],
            why_it_matters="Automated lab audit covering dozens of accessibility rules.",
        )
        if lab_score is None:
            check.note("⚠ Lab accessibility score unavailable")
            return check

        check.award(round(lab_score * self.WEIGHTS["lighthouse"]), f"Lab score: {round(lab_score * 100)}/100")
        if lab_score >= 0.9:
            check.status = CheckStatus.GOOD
        elif lab_score >= 0.5:
            check.status = CheckStatus.PARTIAL
        return check

    def _check_alt_text(self, a11y: AccessibilitySignals, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="Image Alt Text",
            max_score=self.WEIGHTS["alt_text"],
            why_it_matters="Screen readers describe images using their alt text.",
        )
        ratio = a11y.alt_ratio
        checks["altText"] = ratio >= 0.9
        if a11y.image_count == 0:
            check.note("No images found")
        else:
            check.note(f"{a11y.images_with_alt} of {a11y.image_count} images have alt text")

        if ratio >= 0.9:
            check.award(15)
            check.status = CheckStatus.GOOD
        elif ratio >= 0.5:
            check.award(8)
            check.status = CheckStatus.PARTIAL
            check.recommendation = "Add descriptive alt text to all images"
            issues.append(f"{a11y.image_count - a11y.images_with_alt} images missing alt text")
        else:
            check.recommendation = "Add descriptive alt text to all images"
            issues.append(f"{a11y.image_count - a11y.images_with_alt} images missing alt text")
        return check

    def _check_headings(self, a11y: AccessibilitySignals, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="Heading Structure",
            max_score=self.WEIGHTS["headings"],
            why_it_matters="A single H1 gives assistive technology a clear page outline.",
        )
        checks["headingStructure"] = a11y.h1_count == 1
        if a11y.h1_count == 1:
            check.award(10, "✓ Exactly one H1")
            check.status = CheckStatus.GOOD
        elif a11y.h1_count > 1:
            check.award(5, f"⚠ {a11y.h1_count} H1 headings")
            check.status = CheckStatus.PARTIAL
            check.recommendation = "Use a single H1 heading per page"
        else:
            check.note("✗ No H1 heading")
            check.recommendation = "Add an H1 heading that describes the page"
            issues.append("Missing H1 heading")
        return check

    def _check_labels(self, a11y: AccessibilitySignals, checks: dict, issues: list) -> DetailedCheck:
        check = DetailedCheck(
            name="Form Labels",
            max_score=self.WEIGHTS["form_labels"],
            why_it_matters="Inputs without labels are announced without a purpose.",
        )
        ok = a11y.input_count == 0 or a11y.has_labels
        checks["formLabels"] = ok
        if ok:
            check.award(10, "✓ No text inputs" if a11y.input_count == 0 else "✓ Form labels present")
            check.status = CheckStatus.GOOD
        else:
            check.note(f"✗ {a11y.input_count} inputs without labels")
            check.recommendation = "Add labels to all form inputs"
            issues.append("Form inputs may be missing labels")
        return check

    def _binary(
        self,
        name: str,
        weight_key: str,
        passed: bool,
        checks: dict,
        key: str,
        why: str,
        recommendation: str,
        issue: str | None = None,
        issues: list | None = None,
    ) -> DetailedCheck:
        check = DetailedCheck(name=name, max_score=self.WEIGHTS[weight_key], why_it_matters=why)
        checks[key] = passed
        if passed:
            check.award(check.max_score)
            check.status = CheckStatus.GOOD
        else:
            check.recommendation = recommendation
            if issue and issues is not None:
                issues.append(issue)
        return check


def score_accessibility(signals: SignalSet, context: ScoringContext) -> CategoryScore:
    """Score accessibility for the given signals."""
    return AccessibilityScorer().score(signals, context)
