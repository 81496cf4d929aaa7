"""Analysis pipeline: fetch, extract, score, aggregate, explain."""

import logging
from dataclasses import dataclass, field

from analyzers import (
    BaseScorer,
    BusinessContext,
    CategoryScore,
    PerformanceMetrics,
    ScoringContext,
    build_score_summary,
    default_scorers,
    extract_performance_metrics,
)
from fetchers import FetchOrchestrator, normalize_url
from insights import AIInsights, InsightGenerator, build_insight_context
from signals import SignalExtractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisRequest:
    url: str
    company_name: str
    industry: str
    city: str


@dataclass
class AnalysisReport:
    """Full result of one analysis."""

    url: str
    scores: dict[str, int]
    categories: dict[str, CategoryScore]
    performance_metrics: PerformanceMetrics
    ai_insights: AIInsights
    html: str | None = None
    sources: dict[str, bool] = field(default_factory=dict)


class AnalysisService:
    """
    Runs one analysis end to end.

    Steps:
    1. Normalize the URL
    2. Fetch PageSpeed mobile/desktop and the raw page concurrently
    3. Extract the Signal Set once
    4. Run every category scorer
    5. Build the Score Summary and performance metrics
    6. Generate insights (model or fallback)
    """

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        insight_generator: InsightGenerator,
        extractor: SignalExtractor | None = None,
        scorers: list[BaseScorer] | None = None,
    ):
        self.orchestrator = orchestrator
        self.insight_generator = insight_generator
        self.extractor = extractor or SignalExtractor()
        self.scorers = scorers if scorers is not None else default_scorers()

    async def analyze(self, request: AnalysisRequest) -> AnalysisReport:
        url = normalize_url(request.url)
        logger.info(f"Starting analysis of {url} for {request.company_name}")

        fetched = await self.orchestrator.fetch_all(url)
        signals = self.extractor.extract(fetched.page)

        business = BusinessContext(
            company_name=request.company_name,
            industry=request.industry,
            city=request.city,
        )
        context = ScoringContext(
            business=business,
            mobile=fetched.mobile,
            desktop=fetched.desktop,
        )

        categories = {scorer.name: scorer.score(signals, context) for scorer in self.scorers}
        scores = build_score_summary(categories, fetched.mobile, fetched.desktop)
        logger.info(f"Scores for {url}: {scores}")

        ai_readiness = categories.get("aiReadiness")
        aeo_geo = categories.get("aeoGeo")
        insight_context = build_insight_context(
            url=url,
            business=business,
            scores=scores,
            features=ai_readiness.metadata.get("features", {}) if ai_readiness else {},
            aeo_issues=aeo_geo.issues if aeo_geo else [],
        )
        ai_insights = await self.insight_generator.generate(insight_context)

        return AnalysisReport(
            url=url,
            scores=scores,
            categories=categories,
            performance_metrics=extract_performance_metrics(fetched.mobile),
            ai_insights=ai_insights,
            sources={
                "mobile": fetched.mobile is not None,
                "desktop": fetched.desktop is not None,
                "page": fetched.page.error is None,
            },
        )
