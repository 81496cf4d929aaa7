"""Score Summary aggregation."""

from collections.abc import Mapping

from analyzers.base import CategoryScore, clamp_score
from fetchers.base import PerformanceReport

SUMMARY_KEYS = ("mobile", "desktop", "aiReadiness", "aeoGeo", "seo", "security", "accessibility")


def lab_score(report: PerformanceReport | None) -> int:
    """Performance sub-score x100, 0 when the lab run failed."""
    if report is None or report.performance_score is None:
        return 0
    return clamp_score(report.performance_score * 100)


def build_score_summary(
    categories: Mapping[str, CategoryScore],
    mobile: PerformanceReport | None,
    desktop: PerformanceReport | None,
) -> dict[str, int]:
    """
    Build the Score Summary.

    Args:
        categories: Category scores keyed by scorer name
        mobile: Mobile lab report
        desktop: Desktop lab report

    Returns:
        Mapping of every summary key to an int in [0, 100]
    """
    summary = {"mobile": lab_score(mobile), "desktop": lab_score(desktop)}
    for key in SUMMARY_KEYS[2:]:
        category = categories.get(key)
        summary[key] = clamp_score(category.score) if category else 0
    return summary
