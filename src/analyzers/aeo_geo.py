"""Answer-engine / generative-engine optimization (AEO/GEO) scorer."""

from analyzers.base import (
    BaseScorer,
    BusinessContext,
    CategoryScore,
    CheckStatus,
    DetailedCheck,
    ScoringContext,
)
from signals.models import SignalSet


class AEOGEOScorer(BaseScorer):
    """
    Scores how easily AI assistants can extract, trust and cite the page.

    Checks:
    - Schema markup (20)
    - FAQ content (15)
    - Local business signals (15)
    - Clear, extractable statements (20)
    - Expertise and trust signals, E-E-A-T (15)
    - Structured content format (15)
    """

    @property
    def name(self) -> str:
        return "aeoGeo"

    def score(self, signals: SignalSet, context: ScoringContext) -> CategoryScore:
        if signals.is_degenerate:
            return CategoryScore.unavailable("Could not analyze website content for AI visibility")

        business = context.business
        issues: list[str] = []
        recommendations: list[str] = []
        checks = {
            "schemaMarkup": False,
            "faqContent": False,
            "localSignals": False,
            "clearAnswers": False,
            "expertiseSignals": False,
            "structuredContent": False,
        }

        detailed_checks = [
            self._check_schema(signals, business, checks, issues, recommendations),
            self._check_faq(signals, business, checks, issues, recommendations),
            self._check_local_signals(signals, business, checks, issues, recommendations),
            self._check_clear_answers(signals, business, checks, issues, recommendations),
            self._check_expertise(signals, business, checks, issues, recommendations),
            self._check_structure(signals, checks, issues, recommendations),
        ]

        result = CategoryScore.from_checks(
            detailed_checks,
            checks=checks,
            issues=issues,
            recommendations=recommendations,
        )
        result.metadata["llm_context"] = self._llm_context(result.score, business)
        return result

    def _check_schema(self, signals, business, checks, issues, recommendations) -> DetailedCheck:
        schema = signals.schema_markup
        check = DetailedCheck(
            name="Schema Markup (Structured Data)",
            max_score=20,
            why_it_matters=(
                "Schema markup helps AI assistants like ChatGPT and Google understand your "
                "business type, services, location, and reviews in a structured way."
            ),
        )

        if not schema.found:
            check.note("No schema markup detected on the page")
            check.recommendation = (
                f"Add LocalBusiness, FAQPage, and Service schema markup. This is critical for "
                f"AI assistants to recommend {business.company_name} for "
                f'"{business.industry} in {business.city}" queries.'
            )
            issues.append("No structured data/schema markup - LLMs cannot easily parse your business info")
            recommendations.append("Add LocalBusiness and FAQPage schema markup")
            return check

        checks["schemaMarkup"] = True
        check.status = CheckStatus.PARTIAL
        check.award(10, f"Found {schema.count} schema type(s)")

        if schema.has_local_business:
            check.award(5, "✓ LocalBusiness schema found")
        else:
            check.note("✗ Missing LocalBusiness schema")
            check.recommendation = "Add LocalBusiness schema with your address, phone, hours, and service area."

        if schema.has_faq_schema:
            check.award(5, "✓ FAQ schema found")
        else:
            check.note("✗ Missing FAQPage schema")
            if not check.recommendation:
                check.recommendation = "Add FAQ schema to help AI extract your Q&A content."

        if schema.has_review_schema:
            check.note("✓ Review/Rating schema found")
        if schema.has_service_schema:
            check.note("✓ Service schema found")

        if check.score == check.max_score:
            check.status = CheckStatus.GOOD
        return check

    def _check_faq(self, signals, business, checks, issues, recommendations) -> DetailedCheck:
        has_faq_schema = signals.schema_markup.has_faq_schema
        check = DetailedCheck(
            name="FAQ Content",
            max_score=15,
            why_it_matters=(
                "FAQs are goldmines for AI. When someone asks ChatGPT a question about your "
                "industry, sites with clear Q&A content get cited and recommended."
            ),
        )

        if not (signals.has_faq or has_faq_schema):
            check.note("No FAQ section detected")
            check.recommendation = (
                f"Create an FAQ page answering common {business.industry} questions like: "
                f'"How much does [service] cost?", "How long does [service] take?", '
                f'"Do you serve {business.city}?", "What is your process?"'
            )
            issues.append("No FAQ content - missing opportunity for LLMs to extract Q&A")
            recommendations.append(f"Create FAQ section answering common {business.industry} questions")
            return check

        checks["faqContent"] = True
        check.note("✓ FAQ content detected on the page")
        if has_faq_schema:
            check.award(15, "✓ FAQ schema markup present")
            check.status = CheckStatus.GOOD
        else:
            check.award(10, "✗ FAQ content found but no FAQ schema markup")
            check.status = CheckStatus.PARTIAL
            check.recommendation = "Add FAQPage schema to your existing FAQ content for better AI visibility."
        return check

    def _check_local_signals(self, signals, business, checks, issues, recommendations) -> DetailedCheck:
        info = signals.local_business_info
        check = DetailedCheck(
            name="Local Business Signals",
            max_score=15,
            why_it_matters=(
                f'When someone asks AI "Who is the best {business.industry.lower()} in '
                f'{business.city}?", the AI looks for clear location signals to make local '
                f"recommendations."
            ),
        )

        if info.phone:
            check.award(5, "✓ Phone number visible")
        else:
            check.note("✗ Phone number not prominently displayed")

        if info.has_address:
            check.award(5, "✓ Address information found")
        else:
            check.note("✗ No clear address/location information")

        if info.has_hours:
            check.award(5, "✓ Business hours mentioned")
        else:
            check.note("✗ Business hours not displayed")

        if check.score >= 10:
            check.status = CheckStatus.GOOD if check.score == check.max_score else CheckStatus.PARTIAL
            checks["localSignals"] = True
        else:
            check.status = CheckStatus.PARTIAL if check.score > 0 else CheckStatus.MISSING
            issues.append("Weak local signals - LLMs may not recommend you for local searches")
            recommendations.append(f"Prominently display {business.city} address, phone, and business hours")

        if check.score < check.max_score:
            check.recommendation = (
                f"Add a clear footer or contact section with your full {business.city} address, "
                f"phone number (with click-to-call), and business hours. This helps AI recommend "
                f"you for local queries."
            )
        return check

    def _check_clear_answers(self, signals, business, checks, issues, recommendations) -> DetailedCheck:
        aeo = signals.aeo_indicators
        check = DetailedCheck(
            name="Clear, Extractable Content",
            max_score=20,
            why_it_matters=(
                "AI assistants extract direct statements from websites. Content like "
                '"We are a [industry] company serving [city]" and "Our services include..." '
                "gets pulled directly into AI responses."
            ),
        )

        if aeo.has_definitive_statements:
            check.award(8, '✓ Clear "We are/We provide/We specialize" statements found')
        else:
            check.note("✗ Missing clear definitive statements about your business")

        if aeo.has_service_descriptions:
            check.award(7, "✓ Service descriptions found")
            checks["clearAnswers"] = True
        else:
            check.note("✗ No clear service descriptions")

        if aeo.has_process_description:
            check.award(5, "✓ Process/methodology described")
        else:
            check.note('✗ No process or "how we work" description')

        check.status = _tier(check.score, good=15, partial=8)

        if check.score < check.max_score:
            check.recommendation = (
                f'Add clear statements like: "{business.company_name} is a '
                f"{business.industry.lower()} company serving {business.city} and surrounding "
                f"areas. We specialize in [services]. Our process includes: 1) [step], "
                f'2) [step], 3) [step]."'
            )
            if check.score < 8:
                issues.append("Content lacks clear, direct statements LLMs can extract")
                recommendations.append(
                    'Write clear "We are...", "We specialize in...", "Our process is..." statements'
                )
        return check

    def _check_expertise(self, signals, business, checks, issues, recommendations) -> DetailedCheck:
        aeo = signals.aeo_indicators
        check = DetailedCheck(
            name="Expertise & Trust Signals (E-E-A-T)",
            max_score=15,
            why_it_matters=(
                "Google and AI systems prioritize content from experts. Showing credentials, "
                "experience, and real data builds trust with both AI and potential customers."
            ),
        )

        if aeo.has_expertise_indicators:
            check.award(10, "✓ Expertise indicators found (years, certifications, etc.)")
            checks["expertiseSignals"] = True
        else:
            check.note("✗ No expertise credentials visible")

        if aeo.has_statistics:
            check.award(5, "✓ Statistics/numbers found (projects completed, years, etc.)")
        else:
            check.note("✗ No statistics or concrete numbers")

        if aeo.has_author_attribution:
            check.note("✓ Author/expert attribution found")

        if signals.reviews.detected:
            check.note("✓ Reviews/testimonials section found")
        else:
            check.note("✗ No reviews or testimonials visible")

        check.status = _tier(check.score, good=10, partial=5)

        if check.score < check.max_score:
            check.recommendation = (
                f'Add credibility signals: "Serving {business.city} for X years", '
                f'"X+ projects completed", "Licensed & Insured", "5-star rated on Google". '
                f"Include customer testimonials with names and specific results."
            )
            if check.score < 10:
                issues.append("Missing expertise indicators that build LLM trust")
                recommendations.append(
                    "Add credentials, years of experience, certifications, and client statistics"
                )
        return check

    def _check_structure(self, signals, checks, issues, recommendations) -> DetailedCheck:
        aeo = signals.aeo_indicators
        check = DetailedCheck(
            name="Structured Content Format",
            max_score=15,
            why_it_matters=(
                "AI systems parse bullet points, numbered lists, and clear headings more easily "
                "than dense paragraphs. Structured content gets extracted and cited more often."
            ),
        )

        if aeo.has_structured_lists:
            check.note("✓ Structured lists (bullet points/numbered) found")
        else:
            check.note("✗ No structured lists detected")

        if aeo.has_qa_format:
            check.note("✓ Q&A format content found")
            checks["structuredContent"] = True
        else:
            check.note("✗ No Q&A format content")

        if aeo.has_structured_lists and aeo.has_qa_format:
            check.award(15)
        elif aeo.has_structured_lists or aeo.has_qa_format:
            check.award(8)

        if aeo.has_comparison_content:
            check.note("✓ Comparison content found (vs, compared to)")

        check.status = _tier(check.score, good=12, partial=5)

        if check.score < check.max_score:
            check.recommendation = (
                "Format your content with: bullet point lists for services, numbered steps for "
                "processes, Q&A sections, and comparison tables. AI loves to extract and cite "
                "well-structured content."
            )
            if check.score < 8:
                issues.append("Content not structured for LLM parsing")
                recommendations.append("Use bullet points, numbered lists, and clear headings")
        return check

    def _llm_context(self, score: int, business: BusinessContext) -> dict:
        """Would an assistant recommend this business for a local query?"""
        if score >= 70:
            prediction = "HIGH likelihood of being recommended - strong AI signals"
        elif score >= 50:
            prediction = "MEDIUM likelihood - some improvements needed"
        else:
            prediction = "LOW likelihood - significant improvements needed for AI visibility"

        would_recommend = score >= 60
        if would_recommend:
            reasoning = (
                f"Site has sufficient signals for LLMs to understand and recommend "
                f"{business.company_name}"
            )
        else:
            reasoning = (
                f"LLMs like ChatGPT may struggle to recommend {business.company_name} for "
                f'"{business.industry} in {business.city}" queries'
            )

        return {
            "would_recommend": would_recommend,
            "reasoning": reasoning,
            "test_query": f'"Best {business.industry.lower()} in {business.city}"',
            "prediction": prediction,
        }


def _tier(score: int, good: int, partial: int) -> CheckStatus:
    if score >= good:
        return CheckStatus.GOOD
    if score >= partial:
        return CheckStatus.PARTIAL
    return CheckStatus.MISSING


def score_aeo_geo(signals: SignalSet, context: ScoringContext) -> CategoryScore:
    """Score AEO/GEO readiness for the given signals."""
    return AEOGEOScorer().score(signals, context)
