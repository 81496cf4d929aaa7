"""FastAPI dependency providers."""

from fastapi import Request

from config import settings
from fetchers import FetchOrchestrator
from insights import InsightGenerator
from pipeline import AnalysisService


def get_analysis_service(request: Request) -> AnalysisService:
    """
    Build the analysis service from clients created at startup.

    The shared httpx.AsyncClient and the optional Gemini client live on
    app.state and are owned by the application lifespan.
    """
    state = request.app.state
    return AnalysisService(
        orchestrator=FetchOrchestrator(settings, client=getattr(state, "http_client", None)),
        insight_generator=InsightGenerator(
            client=getattr(state, "genai_client", None),
            model=settings.gemini_model,
            timeout=settings.insight_timeout,
        ),
    )
