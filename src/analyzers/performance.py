"""Performance metric extraction from lab data."""

from dataclasses import asdict, dataclass

from fetchers.base import PerformanceReport

NOT_AVAILABLE = "N/A"

# Lighthouse audit id for each displayed metric
METRIC_AUDITS = {
    "first_contentful_paint": "first-contentful-paint",
    "largest_contentful_paint": "largest-contentful-paint",
    "total_blocking_time": "total-blocking-time",
    "cumulative_layout_shift": "cumulative-layout-shift",
    "speed_index": "speed-index",
    "time_to_interactive": "interactive",
}


@dataclass(frozen=True)
class PerformanceMetrics:
    """Display values of the core lab metrics."""

    first_contentful_paint: str = NOT_AVAILABLE
    largest_contentful_paint: str = NOT_AVAILABLE
    total_blocking_time: str = NOT_AVAILABLE
    cumulative_layout_shift: str = NOT_AVAILABLE
    speed_index: str = NOT_AVAILABLE
    time_to_interactive: str = NOT_AVAILABLE

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def extract_performance_metrics(report: PerformanceReport | None) -> PerformanceMetrics:
    """
    Pull display metrics from a PageSpeed report.

    Args:
        report: Mobile PerformanceReport, or None when the lab run failed

    Returns:
        PerformanceMetrics with "N/A" for every metric that is missing
    """
    if report is None:
        return PerformanceMetrics()

    values = {
        field_name: report.audits.get(audit_id) or NOT_AVAILABLE
        for field_name, audit_id in METRIC_AUDITS.items()
    }
    return PerformanceMetrics(**values)
