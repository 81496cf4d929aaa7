"""Lantern category scorers."""

from analyzers.base import (
    BaseScorer,
    BusinessContext,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from analyzers.ai_readiness import AIReadinessScorer, score_ai_readiness
from analyzers.aeo_geo import AEOGEOScorer, score_aeo_geo
from analyzers.seo import SEOScorer, score_seo
from analyzers.security import SecurityScorer, score_security, security_grade
from analyzers.accessibility import AccessibilityScorer, score_accessibility
from analyzers.performance import PerformanceMetrics, extract_performance_metrics
from analyzers.aggregator import build_score_summary


def default_scorers() -> list[BaseScorer]:
    """The category scorers in report order."""
    return [
        AIReadinessScorer(),
        AEOGEOScorer(),
        SEOScorer(),
        SecurityScorer(),
        AccessibilityScorer(),
    ]


__all__ = [
    "BaseScorer",
    "BusinessContext",
    "CategoryScore",
    "CheckStatus",
    "DetailedCheck",
    "ScoringContext",
    "AIReadinessScorer",
    "score_ai_readiness",
    "AEOGEOScorer",
    "score_aeo_geo",
    "SEOScorer",
    "score_seo",
    "SecurityScorer",
    "score_security",
    "security_grade",
    "AccessibilityScorer",
    "score_accessibility",
    "PerformanceMetrics",
    "extract_performance_metrics",
    "build_score_summary",
    "default_scorers",
]
