"""Website analysis endpoint."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_analysis_service
from api.schemas import (
    AccessibilityAnalysis,
    AEOGEOAnalysis,
    AIReadinessAnalysis,
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    PerformanceMetricsResponse,
    ScoreSummaryResponse,
    SecurityAnalysis,
    SEOAnalysis,
)
from pipeline import AnalysisReport, AnalysisRequest, AnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Analyze a website",
    description="Fetch, score and explain one business website. Runs synchronously.",
)
async def analyze_website(
    request: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """
    Run a full analysis.

    Source failures degrade the affected categories instead of failing the
    request; anything else is reported as a 500 with the error message.
    """
    try:
        report = await service.analyze(
            AnalysisRequest(
                url=request.url,
                company_name=request.company_name,
                industry=request.industry,
                city=request.city,
            )
        )
    except Exception as e:
        logger.exception(f"Analysis failed for {request.url}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e) or "Internal server error"},
        )

    return build_analyze_response(report)


def build_analyze_response(report: AnalysisReport) -> AnalyzeResponse:
    """Map an AnalysisReport onto the public response shape."""
    categories = report.categories
    return AnalyzeResponse(
        scores=ScoreSummaryResponse.model_validate(report.scores),
        ai_readiness=AIReadinessAnalysis.from_category(categories["aiReadiness"]),
        aeo_geo_analysis=AEOGEOAnalysis.from_category(categories["aeoGeo"]),
        seo_analysis=SEOAnalysis.from_category(categories["seo"]),
        security_analysis=SecurityAnalysis.from_category(categories["security"]),
        accessibility_analysis=AccessibilityAnalysis.from_category(categories["accessibility"]),
        performance_metrics=PerformanceMetricsResponse.model_validate(report.performance_metrics),
        ai_insights=report.ai_insights,
        html=report.html,
    )
