"""Insight generator backed by Gemini with a rule-based fallback."""

import asyncio
import json
import logging

import httpx
from google import genai
from google.genai import errors as genai_errors
from pydantic import ValidationError

from insights.models import AIInsights
from insights.rules import FALLBACK_RULES, Rule

logger = logging.getLogger(__name__)

MAX_ITEMS = 4


class InsightProducerError(Exception):
    """The generative model did not return usable insights."""


class InsightGenerator:
    """
    Produces AIInsights for one analysis.

    The generator:
    1. Builds a prompt from the business context and scores
    2. Asks the model for a JSON answer
    3. Reduces the answer to its outermost JSON object
    4. Validates it against the AIInsights schema
    5. Falls back to deterministic rules on any failure
    """

    def __init__(
        self,
        client: genai.Client | None = None,
        model: str = "gemini-1.5-flash",
        timeout: float = 45,
    ):
        self.client = client
        self.model = model
        self.timeout = timeout

    async def generate(self, context: dict) -> AIInsights:
        """
        Generate insights, never raising for model problems.

        Args:
            context: Insight context from build_insight_context

        Returns:
            AIInsights with source "model" or "fallback"
        """
        if self.client is None:
            return build_default_insights(context)

        try:
            return await self._generate_from_model(context)
        except InsightProducerError as e:
            logger.warning(f"Insight generation failed for {context.get('url')}, using fallback: {e}")
            return build_default_insights(context)

    async def _generate_from_model(self, context: dict) -> AIInsights:
        prompt = build_prompt(context)
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(model=self.model, contents=prompt),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise InsightProducerError(f"timed out after {self.timeout}s") from e
        except (genai_errors.APIError, httpx.HTTPError) as e:
            raise InsightProducerError(f"model call failed: {e}") from e
        except Exception as e:
            logger.exception(f"Unexpected error from insight model {self.model}")
            raise InsightProducerError(f"unexpected model error: {e}") from e

        try:
            text = response.text or ""
        except Exception as e:
            raise InsightProducerError(f"unreadable model response: {e}") from e

        return parse_insights(text)


def build_insight_context(
    url: str,
    business,
    scores: dict[str, int],
    features: dict,
    aeo_issues: list[str],
) -> dict:
    """
    Build the context dict the prompt and fallback rules read.

    Args:
        url: Analyzed URL
        business: BusinessContext
        scores: Score Summary
        features: AI readiness feature detection
        aeo_issues: Issues found by the AEO/GEO scorer

    Returns:
        Plain dict context
    """
    return {
        "url": url,
        "company_name": business.company_name,
        "industry": business.industry,
        "city": business.city,
        "scores": dict(scores),
        "features": features,
        "aeo_issues": list(aeo_issues),
    }


def build_prompt(context: dict) -> str:
    """Render the model prompt."""
    scores = context["scores"]
    features = context.get("features") or {}
    industry = context["industry"]
    city = context["city"]

    def detected(name: str) -> str:
        return "Yes" if (features.get(name) or {}).get("detected") else "No"

    aeo_issues = "\n".join(context.get("aeo_issues") or []) or "None found"

    return f"""You are a website performance and AI readiness expert creating a FREE, value-first audit report. Generate helpful, actionable insights.

Business: {context["company_name"]}
Industry: {industry}
Location: {city}
Website: {context["url"]}

SCORES:
- Mobile Speed: {scores.get("mobile", 0)}/100
- Desktop Speed: {scores.get("desktop", 0)}/100
- AI Readiness: {scores.get("aiReadiness", 0)}/100
- AEO/GEO (LLM Optimization): {scores.get("aeoGeo", 0)}/100
- SEO: {scores.get("seo", 0)}/100
- Security: {scores.get("security", 0)}/100
- Accessibility: {scores.get("accessibility", 0)}/100

AI FEATURES DETECTED:
- Chatbot: {detected("chatbot")}
- Voice Agent: {detected("voiceAgent")}
- Quote Calculator: {detected("calculator")}

LLM OPTIMIZATION ISSUES:
{aeo_issues}

Respond with only a JSON object of this shape:
{{
  "executiveSummary": "2-3 sentence summary of the website's performance and AI readiness",
  "topIssues": [
    {{"title": "Issue title", "impact": "High/Medium", "description": "Plain English explanation of business impact"}}
  ],
  "quickWins": [
    {{"title": "Action item", "description": "How to do it", "timeEstimate": "X minutes"}}
  ],
  "industryInsight": "One paragraph about why this matters specifically for {industry} businesses in {city}",
  "llmRecommendation": "What would happen if someone asked ChatGPT for a {industry} recommendation in {city} - would they find this business?"
}}

Keep it friendly, helpful, and focused on business impact, not technical jargon. No sales pitch."""


def extract_json(text: str) -> dict | None:
    """Parse the outermost {...} span of a model answer."""
    if not text:
        return None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        parsed = json.loads(text[start : end + 1])
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_insights(text: str) -> AIInsights:
    """
    Validate a model answer.

    Raises:
        InsightProducerError: If the answer has no JSON object or violates the schema
    """
    parsed = extract_json(text)
    if parsed is None:
        raise InsightProducerError("response contained no JSON object")

    parsed.pop("source", None)
    try:
        insights = AIInsights.model_validate(parsed)
    except ValidationError as e:
        raise InsightProducerError(f"response failed validation: {e.error_count()} error(s)") from e

    return insights.model_copy(
        update={
            "source": "model",
            "top_issues": insights.top_issues[:MAX_ITEMS],
            "quick_wins": insights.quick_wins[:MAX_ITEMS],
        }
    )


def _triggered_rules(context: dict) -> list[Rule]:
    return [rule for rule in FALLBACK_RULES if rule.condition(context)]


def build_default_insights(context: dict) -> AIInsights:
    """
    Deterministic insights from the fallback rule table.

    Args:
        context: Insight context from build_insight_context

    Returns:
        AIInsights with source "fallback"
    """
    scores = context["scores"]
    company = context["company_name"]
    industry = context["industry"]
    city = context["city"]
    rules = _triggered_rules(context)

    if scores.get("aeoGeo", 0) >= 60:
        llm_recommendation = (
            f"ChatGPT would likely mention {company} when asked about {industry} services in {city}."
        )
    else:
        llm_recommendation = (
            f'ChatGPT may struggle to recommend {company} for "{industry} in {city}" queries '
            f"due to limited structured data and AI signals."
        )

    return AIInsights(
        executive_summary=(
            f"{company}'s website has a mobile speed score of {scores.get('mobile', 0)}/100 and "
            f"an AI readiness score of {scores.get('aiReadiness', 0)}/100. There are "
            f"opportunities to improve lead capture and visibility to AI assistants."
        ),
        top_issues=[rule.issue for rule in rules][:MAX_ITEMS],
        quick_wins=[rule.quick_win for rule in rules][:MAX_ITEMS],
        industry_insight=(
            f"{industry} businesses in {city} are competing not just on Google rankings, but on "
            f"AI recommendations. The businesses with AI chatbots, voice agents, and "
            f"LLM-optimized content are capturing leads that others miss."
        ),
        llm_recommendation=llm_recommendation,
        source="fallback",
    )
