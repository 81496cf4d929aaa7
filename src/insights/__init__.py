"""Lantern insights package."""

from insights.engine import (
    InsightGenerator,
    InsightProducerError,
    build_default_insights,
    build_insight_context,
    parse_insights,
)
from insights.models import AIInsights, QuickWin, TopIssue
from insights.rules import FALLBACK_RULES, Rule

__all__ = [
    "InsightGenerator",
    "InsightProducerError",
    "build_default_insights",
    "build_insight_context",
    "parse_insights",
    "AIInsights",
    "QuickWin",
    "TopIssue",
    "FALLBACK_RULES",
    "Rule",
]
