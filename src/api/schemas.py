"""Pydantic schemas for API request/response validation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from analyzers.base import CategoryScore, CheckStatus
from insights.models import AIInsights


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Request Schemas (what clients send to us)
# =============================================================================


class AnalyzeRequest(APIModel):
    """Request body for analyzing a website."""

    model_config = ConfigDict(str_strip_whitespace=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Website to analyze; https:// is assumed when no scheme is given",
        examples=["example.com"],
    )
    company_name: str = Field(..., min_length=1, examples=["Acme Plumbing"])
    industry: str = Field(..., min_length=1, examples=["Plumbing"])
    city: str = Field(..., min_length=1, examples=["Austin"])


# =============================================================================
# Response Schemas (what we send back to clients)
# =============================================================================


class DetailedCheckResponse(APIModel):
    name: str
    status: CheckStatus
    score: int
    max_score: int
    details: list[str]
    why_it_matters: str
    recommendation: str


class CategoryAnalysis(APIModel):
    """Common shape of every category result."""

    score: int
    checks: dict[str, bool]
    issues: list[str]
    recommendations: list[str]
    detailed_checks: list[DetailedCheckResponse]

    @classmethod
    def from_category(cls, category: CategoryScore) -> "CategoryAnalysis":
        """Build from a CategoryScore, lifting known metadata keys to fields."""
        extras = {k: v for k, v in category.metadata.items() if k in cls.model_fields}
        return cls(
            score=category.score,
            checks=category.checks,
            issues=category.issues,
            recommendations=category.recommendations,
            detailed_checks=[
                DetailedCheckResponse.model_validate(check) for check in category.detailed_checks
            ],
            **extras,
        )


class AIReadinessAnalysis(CategoryAnalysis):
    features: dict[str, Any] = {}
    opportunities: list[str] = []


class LLMContext(APIModel):
    would_recommend: bool
    reasoning: str
    test_query: str
    prediction: str


class AEOGEOAnalysis(CategoryAnalysis):
    llm_context: LLMContext | None = None


class SEOAnalysis(CategoryAnalysis):
    passed_checks: int = 0
    failed_checks: int = 0
    meta_tags: dict[str, str | None] = {}


class SecurityAnalysis(CategoryAnalysis):
    grade: str = "F"
    summary: str = ""
    has_https: bool = False


class AccessibilityAnalysis(CategoryAnalysis):
    lighthouse_score: int | None = None


class ScoreSummaryResponse(APIModel):
    mobile: int
    desktop: int
    ai_readiness: int
    aeo_geo: int
    seo: int
    security: int
    accessibility: int


class PerformanceMetricsResponse(APIModel):
    first_contentful_paint: str
    largest_contentful_paint: str
    total_blocking_time: str
    cumulative_layout_shift: str
    speed_index: str
    time_to_interactive: str


class AnalyzeResponse(APIModel):
    """Response for a completed analysis."""

    success: bool = True
    scores: ScoreSummaryResponse
    ai_readiness: AIReadinessAnalysis
    aeo_geo_analysis: AEOGEOAnalysis
    seo_analysis: SEOAnalysis
    security_analysis: SecurityAnalysis
    accessibility_analysis: AccessibilityAnalysis
    performance_metrics: PerformanceMetricsResponse
    ai_insights: AIInsights
    html: str | None = None


class ErrorResponse(BaseModel):
    error: str


# =============================================================================
# Health Check
# =============================================================================


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = "healthy"
    service: str = "lantern"
    version: str = "0.1.0"
