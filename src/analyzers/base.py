"""Base scorer interface and the score model shared by every category."""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from fetchers.base import PerformanceReport
from signals.models import SignalSet


class CheckStatus(str, enum.Enum):
    """Outcome of a single detailed check."""

    GOOD = "good"
    PARTIAL = "partial"
    MISSING = "missing"


@dataclass
class DetailedCheck:
    """One fixed-weight check inside a category."""

    name: str
    max_score: int
    why_it_matters: str = ""
    status: CheckStatus = CheckStatus.MISSING
    score: int = 0
    details: list[str] = field(default_factory=list)
    recommendation: str = ""

    def award(self, points: int, detail: str | None = None) -> None:
        """Add points, never beyond max_score."""
        self.score = max(0, min(self.max_score, self.score + points))
        if detail:
            self.details.append(detail)

    def note(self, detail: str) -> None:
        self.details.append(detail)


@dataclass
class CategoryScore:
    """Scored result for one category."""

    score: int
    checks: dict[str, bool] = field(default_factory=dict)
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    detailed_checks: list[DetailedCheck] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_checks(
        cls,
        detailed_checks: list[DetailedCheck],
        checks: dict[str, bool] | None = None,
        issues: list[str] | None = None,
        recommendations: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "CategoryScore":
        """Build a score as the clamped sum of its detailed checks."""
        total = sum(c.score for c in detailed_checks)
        return cls(
            score=clamp_score(total),
            checks=checks or {},
            issues=issues or [],
            recommendations=recommendations or [],
            detailed_checks=detailed_checks,
            metadata=metadata or {},
        )

    @classmethod
    def unavailable(cls, issue: str, **metadata: Any) -> "CategoryScore":
        """Minimal result for a page that could not be fetched."""
        return cls(score=0, issues=[issue], metadata=metadata)


@dataclass(frozen=True)
class BusinessContext:
    """Who the report is for."""

    company_name: str
    industry: str
    city: str


@dataclass(frozen=True)
class ScoringContext:
    """Everything besides the SignalSet that a scorer may read."""

    business: BusinessContext
    mobile: PerformanceReport | None = None
    desktop: PerformanceReport | None = None


class BaseScorer(ABC):
    """Abstract base class for all category scorers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the category name used in the score summary."""
        pass

    @abstractmethod
    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        """
        Score one category.

        Args:
            signals: Signals extracted from the page
            context: Business context and lab data

        Returns:
            CategoryScore with score, checks, issues and detailed breakdown
        """
        pass


def clamp_score(value: float) -> int:
    """Round and clamp to the 0-100 range."""
    return max(0, min(100, int(round(value))))
