"""Insight generator tests."""

import asyncio
import json
from types import SimpleNamespace

import pytest

from analyzers.base import BusinessContext
from insights import (
    InsightGenerator,
    InsightProducerError,
    build_default_insights,
    build_insight_context,
    parse_insights,
)

VALID_ANSWER = {
    "executiveSummary": "Acme loads slowly on phones but is easy for AI assistants to read.",
    "topIssues": [{"title": "Slow mobile", "impact": "High", "description": "Visitors leave."}],
    "quickWins": [{"title": "Compress images", "description": "Use TinyPNG.", "timeEstimate": "15 minutes"}],
    "industryInsight": "Plumbing customers in Austin ask AI assistants for referrals.",
    "llmRecommendation": "ChatGPT would probably mention Acme.",
}


class FakeModels:
    def __init__(self, text: str | None = None, delay: float = 0):
        self.text = text
        self.delay = delay
        self.calls = []

    async def generate_content(self, model: str, contents: str):
        self.calls.append((model, contents))
        if self.delay:
            await asyncio.sleep(self.delay)
        return SimpleNamespace(text=self.text)


def fake_client(models: FakeModels):
    return SimpleNamespace(aio=SimpleNamespace(models=models))


def make_context(**score_overrides) -> dict:
    scores = {
        "mobile": 80,
        "desktop": 90,
        "aiReadiness": 70,
        "aeoGeo": 75,
        "seo": 85,
        "security": 90,
        "accessibility": 95,
    }
    scores.update(score_overrides)
    return build_insight_context(
        url="https://acme.example",
        business=BusinessContext(company_name="Acme Plumbing", industry="Plumbing", city="Austin"),
        scores=scores,
        features={"chatbot": {"detected": True}, "voiceAgent": {"detected": False}},
        aeo_issues=["No FAQ content - missing opportunity for LLMs to extract Q&A"],
    )


async def test_model_answer_is_used():
    models = FakeModels(text="Here you go:\n```json\n" + json.dumps(VALID_ANSWER) + "\n```")
    generator = InsightGenerator(client=fake_client(models), model="gemini-test")

    insights = await generator.generate(make_context())

    assert insights.source == "model"
    assert insights.top_issues[0].title == "Slow mobile"
    assert insights.quick_wins[0].time_estimate == "15 minutes"
    model, prompt = models.calls[0]
    assert model == "gemini-test"
    assert "Acme Plumbing" in prompt
    assert "No FAQ content" in prompt
    assert "- Chatbot: Yes" in prompt


async def test_non_json_answer_falls_back():
    generator = InsightGenerator(client=fake_client(FakeModels(text="I cannot help with that.")))
    insights = await generator.generate(make_context())
    assert insights.source == "fallback"


async def test_schema_violation_falls_back():
    answer = dict(VALID_ANSWER)
    del answer["executiveSummary"]
    generator = InsightGenerator(client=fake_client(FakeModels(text=json.dumps(answer))))

    insights = await generator.generate(make_context())
    assert insights.source == "fallback"


async def test_timeout_falls_back():
    models = FakeModels(text=json.dumps(VALID_ANSWER), delay=1)
    generator = InsightGenerator(client=fake_client(models), timeout=0.01)

    insights = await generator.generate(make_context())
    assert insights.source == "fallback"


async def test_no_client_uses_fallback():
    insights = await InsightGenerator().generate(make_context())
    assert insights.source == "fallback"


def test_parse_insights_rejects_wrong_types():
    answer = dict(VALID_ANSWER, topIssues="none")
    with pytest.raises(InsightProducerError):
        parse_insights(json.dumps(answer))


def test_parse_insights_truncates_lists():
    answer = dict(VALID_ANSWER, topIssues=VALID_ANSWER["topIssues"] * 6)
    insights = parse_insights(json.dumps(answer))
    assert len(insights.top_issues) == 4


def test_fallback_rules_for_weak_site():
    context = make_context(mobile=20, aeoGeo=30, seo=40, security=35)
    context["features"] = {"chatbot": {"detected": False}}

    insights = build_default_insights(context)

    assert len(insights.top_issues) == 4
    assert len(insights.quick_wins) == 4
    assert insights.top_issues[0].title == "Mobile Speed Needs Improvement"
    assert "may struggle" in insights.llm_recommendation
    assert "20/100" in insights.executive_summary


def test_fallback_rules_for_strong_site():
    insights = build_default_insights(make_context())

    assert insights.top_issues == []
    assert insights.quick_wins == []
    assert "would likely mention Acme Plumbing" in insights.llm_recommendation


def test_insights_serialize_camel_case():
    data = build_default_insights(make_context(mobile=10)).model_dump(by_alias=True)

    assert set(data) == {
        "executiveSummary",
        "topIssues",
        "quickWins",
        "industryInsight",
        "llmRecommendation",
        "source",
    }
    assert "timeEstimate" in data["quickWins"][0]


async def test_unexpected_client_error_falls_back():
    class RejectingModels:
        async def generate_content(self, model: str, contents: str):
            raise ValueError("blocked by safety filter")

    generator = InsightGenerator(client=SimpleNamespace(aio=SimpleNamespace(models=RejectingModels())))

    insights = await generator.generate(make_context())
    assert insights.source == "fallback"
