"""API tests using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_analysis_service
from conftest import FULL_HTML, SECURE_HEADERS, make_page, make_report
from fetchers import FetchResult
from insights import InsightGenerator
from main import app
from pipeline import AnalysisService

VALID_BODY = {
    "url": "acme.example",
    "companyName": "Acme Plumbing",
    "industry": "Plumbing",
    "city": "Austin",
}


class StaticOrchestrator:
    async def fetch_all(self, url: str) -> FetchResult:
        return FetchResult(
            url=url,
            mobile=make_report("mobile", performance=0.72, audits={"first-contentful-paint": "1.1 s"}),
            desktop=make_report("desktop", performance=0.95),
            page=make_page(FULL_HTML, headers=SECURE_HEADERS),
        )


class BrokenOrchestrator:
    async def fetch_all(self, url: str) -> FetchResult:
        raise RuntimeError("boom")


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_orchestrator(orchestrator):
    app.dependency_overrides[get_analysis_service] = lambda: AnalysisService(orchestrator, InsightGenerator())


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "lantern", "version": "0.1.0"}


def test_analyze_success(client):
    use_orchestrator(StaticOrchestrator())

    response = client.post("/api/analyze", json=VALID_BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["html"] is None
    assert data["scores"]["mobile"] == 72
    assert data["scores"]["seo"] == 100
    assert set(data["scores"]) == {
        "mobile", "desktop", "aiReadiness", "aeoGeo", "seo", "security", "accessibility",
    }
    assert data["securityAnalysis"]["grade"] == "A"
    assert data["aiReadiness"]["features"]["chatbot"]["detected"] is False
    assert data["aeoGeoAnalysis"]["llmContext"]["wouldRecommend"] in (True, False)
    assert data["accessibilityAnalysis"]["lighthouseScore"] == 100
    assert data["seoAnalysis"]["detailedChecks"][0]["maxScore"] == 15
    assert data["performanceMetrics"]["firstContentfulPaint"] == "1.1 s"
    assert data["performanceMetrics"]["speedIndex"] == "N/A"
    assert data["aiInsights"]["source"] == "fallback"


@pytest.mark.parametrize("missing", ["url", "companyName", "industry", "city"])
def test_analyze_missing_field(client, missing):
    use_orchestrator(BrokenOrchestrator())
    body = {k: v for k, v in VALID_BODY.items() if k != missing}

    response = client.post("/api/analyze", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_analyze_blank_field(client):
    use_orchestrator(BrokenOrchestrator())

    response = client.post("/api/analyze", json=dict(VALID_BODY, city="   "))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_analyze_unexpected_error(client):
    use_orchestrator(BrokenOrchestrator())

    response = client.post("/api/analyze", json=VALID_BODY)

    assert response.status_code == 500
    assert response.json() == {"error": "boom"}
