"""AI readiness scorer."""

from analyzers.base import (
    BaseScorer,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from signals.models import DetectionResult, SignalSet


class AIReadinessScorer(BaseScorer):
    """
    Scores the AI-powered features a visitor can use on the site.

    Checks:
    - AI chatbot (30)
    - AI voice agent (25)
    - Instant quote / calculator tool (25)
    - Structured data that AI assistants can read (20)
    """

    WEIGHTS = {
        "chatbot": 30,
        "voice_agent": 25,
        "calculator": 25,
        "structured_data": 20,
    }

    @property
    def name(self) -> str:
        return "aiReadiness"

    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        if signals.is_degenerate:
            return CategoryScore.unavailable("Could not analyze website", features={})

        issues: list[str] = []
        opportunities: list[str] = []

        chatbot = self._feature_check(
            "AI Chatbot",
            self.WEIGHTS["chatbot"],
            signals.chatbot,
            why="A chatbot answers questions and qualifies leads 24/7, including after hours.",
            recommendation="Add an AI chatbot to capture and qualify leads around the clock",
        )
        if not signals.chatbot.detected:
            issues.append("No AI chatbot detected - missing 24/7 lead qualification")
            opportunities.append(chatbot.recommendation)

        voice = self._feature_check(
            "AI Voice Agent",
            self.WEIGHTS["voice_agent"],
            signals.voice_agent,
            why="An AI voice agent answers calls that would otherwise go to voicemail.",
            recommendation="Implement AI voice agent to never miss a call",
        )
        if not signals.voice_agent.detected:
            issues.append("No AI voice agent detected - after-hours calls go unanswered")
            opportunities.append(voice.recommendation)

        calculator = self._feature_check(
            "Instant Quote / Calculator",
            self.WEIGHTS["calculator"],
            signals.calculator,
            why="Visitors expect immediate pricing answers instead of waiting for a callback.",
            recommendation="Add an AI-powered quote calculator for instant estimates",
        )
        if not signals.calculator.detected:
            issues.append("No instant quote/calculator tool - visitors want immediate answers")
            opportunities.append(calculator.recommendation)

        schema = self._structured_data_check(signals)
        if not signals.schema_markup.found:
            issues.append("No schema markup - AI assistants struggle to understand your business")

        features = {
            "chatbot": _feature_summary(signals.chatbot),
            "voiceAgent": _feature_summary(signals.voice_agent),
            "calculator": _feature_summary(signals.calculator, key="types"),
        }

        return CategoryScore.from_checks(
            [chatbot, voice, calculator, schema],
            checks={
                "chatbot": signals.chatbot.detected,
                "voiceAgent": signals.voice_agent.detected,
                "calculator": signals.calculator.detected,
                "schemaMarkup": signals.schema_markup.found,
            },
            issues=issues,
            recommendations=opportunities,
            metadata={"features": features, "opportunities": opportunities},
        )

    def _feature_check(
        self,
        name: str,
        max_score: int,
        detection: DetectionResult,
        why: str,
        recommendation: str,
    ) -> DetailedCheck:
        check = DetailedCheck(name=name, max_score=max_score, why_it_matters=why)
        if detection.detected:
            check.award(max_score, f"✓ Detected: {', '.join(detection.labels)}")
            check.status = CheckStatus.GOOD
            if detection.confidence == "medium":
                check.note("⚠ Detected from page structure only")
        else:
            check.note(f"✗ No {name.lower()} detected")
            check.recommendation = recommendation
        return check

    def _structured_data_check(self, signals: SignalSet) -> DetailedCheck:
        schema = signals.schema_markup
        check = DetailedCheck(
            name="Structured Data for AI",
            max_score=self.WEIGHTS["structured_data"],
            why_it_matters="Schema markup tells AI assistants what your business is, where it operates and what it offers.",
        )
        if not schema.found:
            check.note("✗ No schema markup detected")
            check.recommendation = "Add LocalBusiness and FAQPage schema markup"
            return check

        check.award(10, f"✓ Found {schema.count} schema type(s)")
        if schema.has_local_business:
            check.award(5, "✓ LocalBusiness schema found")
        if schema.has_faq_schema:
            check.award(5, "✓ FAQ schema found")

        check.status = CheckStatus.GOOD if check.score == check.max_score else CheckStatus.PARTIAL
        if check.status == CheckStatus.PARTIAL:
            check.recommendation = "Add the missing LocalBusiness or FAQPage schema"
        return check


def _feature_summary(detection: DetectionResult, key: str = "providers") -> dict:
    return {
        "detected": detection.detected,
        key: list(detection.labels),
        "confidence": detection.confidence,
    }


def score_ai_readiness(signals: SignalSet, context: ScoringContext) -> CategoryScore:
    """Score AI readiness for the given signals."""
    return AIReadinessScorer().score(signals, context)
