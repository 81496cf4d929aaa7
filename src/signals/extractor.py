"""Signal extraction: RawPageData -> SignalSet."""

import json
import logging
import re
from collections.abc import Iterable, Iterator
from typing import Any

from fetchers.base import RawPageData
from signals.document import PageDocument
from signals.models import (
    AccessibilitySignals,
    AEOIndicators,
    ContactInfo,
    DetectionResult,
    Headings,
    LocalBusinessInfo,
    MetaTags,
    Reviews,
    SchemaEntry,
    SchemaMarkup,
    SignalSet,
    TransportSignals,
)
from signals.registry import (
    AEO_INDICATOR_PATTERNS,
    CALCULATOR_DETECTORS,
    CHATBOT_DETECTORS,
    FAQ_KEYWORDS,
    FAQ_TYPES,
    HOURS_KEYWORDS,
    LOCAL_BUSINESS_TYPES,
    REVIEW_KEYWORDS,
    REVIEW_TYPES,
    SERVICE_TYPES,
    VOICE_AGENT_DETECTORS,
    Detector,
)

logger = logging.getLogger(__name__)

# North-American phone number
PHONE_PATTERN = r"(\+?1?[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})"
STREET_PATTERN = r"\d+\s+[\w\s]{1,60}?(?:street|st|avenue|ave|road|rd|drive|dr|boulevard|blvd)\b"
EMAIL_PATTERN = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
CONTACT_FORM_PATTERN = r"contact|inquiry|message"

SKIP_LINK_PATTERNS = (
    r"skip[- ]?(?:to[- ]?)?(?:main|content|nav)",
    r"#(?:main|content|maincontent)\b",
)
LANDMARK_PATTERNS = (
    r"""role\s*=\s*["'](?:main|navigation|banner|contentinfo|search)["']""",
    r"<(?:main|nav|header|footer|aside)[\s>]",
)
LIGHT_TEXT_PATTERNS = (
    r"(?<![-\w])color\s*:\s*#[ef]{3,6}\b",
    r"(?<![-\w])color\s*:\s*rgb\s*\(\s*(?:2[3-5]\d)\s*,\s*(?:2[3-5]\d)\s*,\s*(?:2[3-5]\d)\s*\)",
)
FOCUS_PATTERNS = (r":focus", r"outline")

MIXED_CONTENT_PATTERNS = (
    r"http://[^\"'\s]+\.(?:js|css|png|jpg|jpeg|gif|svg|woff|woff2)",
    r"""src=["']http://""",
    r"""href=["']http://[^"']*\.(?:css|js)""",
)


def run_detectors(document: PageDocument, registry: Iterable[Detector]) -> DetectionResult:
    """
    Run a detector registry against a page.

    Labels are collected in registry order. Confidence is "high" when any
    fingerprint entry matched and "medium" when only structural ones did.
    """
    matched = [d for d in registry if d.matches(document.html)]
    primary = [d for d in matched if not d.fallback]
    if primary:
        matched = primary

    if not matched:
        return DetectionResult()

    confidence = "high" if any(d.kind == "fingerprint" for d in matched) else "medium"
    return DetectionResult(
        detected=True,
        labels=tuple(d.label for d in matched),
        confidence=confidence,
    )


class SignalExtractor:
    """
    Deterministic, side-effect-free transformation of a fetched page into a SignalSet.

    A page carrying an error marker yields the empty SignalSet rather than raising.
    """

    def extract(self, page: RawPageData) -> SignalSet:
        if page.error is not None:
            return SignalSet(
                transport=TransportSignals(
                    is_secure=page.is_secure_transport,
                    headers=dict(page.headers),
                ),
                error=page.error,
            )

        document = PageDocument(page.html)

        return SignalSet(
            chatbot=run_detectors(document, CHATBOT_DETECTORS),
            voice_agent=run_detectors(document, VOICE_AGENT_DETECTORS),
            calculator=run_detectors(document, CALCULATOR_DETECTORS),
            schema_markup=self._extract_schema_markup(document),
            meta_tags=self._extract_meta_tags(document),
            headings=self._extract_headings(document),
            has_faq=document.contains_any(FAQ_KEYWORDS),
            local_business_info=self._extract_local_business_info(document),
            reviews=self._extract_reviews(document),
            contact_info=self._extract_contact_info(document),
            aeo_indicators=self._extract_aeo_indicators(document),
            accessibility=self._extract_accessibility(document),
            transport=self._extract_transport(page, document),
        )

    def _extract_schema_markup(self, document: PageDocument) -> SchemaMarkup:
        """Parse every JSON-LD block independently; malformed blocks are skipped."""
        schemas = []

        for index, block in enumerate(document.json_ld_blocks()):
            try:
                parsed = json.loads(block)
            except ValueError as e:
                logger.debug(f"Skipping malformed JSON-LD block {index}: {e}")
                continue

            for entity in _iter_entities(parsed):
                schemas.append(
                    SchemaEntry(schema_type=_declared_type(entity), data=entity)
                )

        types = {s.schema_type for s in schemas}
        return SchemaMarkup(
            schemas=tuple(schemas),
            has_local_business=bool(types & LOCAL_BUSINESS_TYPES),
            has_faq_schema=bool(types & FAQ_TYPES),
            has_review_schema=bool(types & REVIEW_TYPES),
            has_service_schema=bool(types & SERVICE_TYPES),
        )

    def _extract_meta_tags(self, document: PageDocument) -> MetaTags:
        return MetaTags(
            title=document.title(),
            description=document.meta_content(name="description"),
            og_title=document.meta_content(prop="og:title"),
            og_description=document.meta_content(prop="og:description"),
            canonical=document.link_href("canonical"),
            robots=document.meta_content(name="robots"),
            og_image=document.meta_content(prop="og:image"),
            has_viewport=document.has_meta(name="viewport"),
        )

    def _extract_headings(self, document: PageDocument) -> Headings:
        return Headings(
            h1=document.heading_texts(1),
            h2=document.heading_texts(2),
            h3=document.heading_texts(3),
        )

    def _extract_local_business_info(self, document: PageDocument) -> LocalBusinessInfo:
        return LocalBusinessInfo(
            phone=document.first_match(PHONE_PATTERN),
            has_address=document.contains("address") or document.search(STREET_PATTERN),
            has_hours=document.contains_any(HOURS_KEYWORDS),
        )

    def _extract_reviews(self, document: PageDocument) -> Reviews:
        return Reviews(
            detected=document.contains_any(REVIEW_KEYWORDS),
            has_star_rating="★" in document.html or document.contains("star-rating"),
        )

    def _extract_contact_info(self, document: PageDocument) -> ContactInfo:
        headers = document.elements_markup("header")
        forms = document.elements_markup("form")
        return ContactInfo(
            has_phone_in_header=any(_search(PHONE_PATTERN, h) for h in headers),
            has_click_to_call=document.search(r"""href=["']tel:"""),
            has_contact_form=any(_search(CONTACT_FORM_PATTERN, f) for f in forms),
            has_email=document.search(EMAIL_PATTERN),
        )

    def _extract_aeo_indicators(self, document: PageDocument) -> AEOIndicators:
        return AEOIndicators(
            **{
                name: document.search(pattern)
                for name, pattern in AEO_INDICATOR_PATTERNS.items()
            }
        )

    def _extract_accessibility(self, document: PageDocument) -> AccessibilitySignals:
        image_count, images_with_alt = document.image_alt_counts()
        return AccessibilitySignals(
            image_count=image_count,
            images_with_alt=images_with_alt,
            h1_count=document.heading_count(1),
            input_count=document.text_input_count(),
            has_labels=document.has_element("label") or document.search(r"aria-label\s*="),
            has_skip_link=any(document.search(p) for p in SKIP_LINK_PATTERNS),
            has_landmarks=any(document.search(p) for p in LANDMARK_PATTERNS),
            has_light_text=any(document.search(p) for p in LIGHT_TEXT_PATTERNS),
            has_focus_styles=any(document.search(p) for p in FOCUS_PATTERNS),
            has_lang_attribute=document.html_lang() is not None,
        )

    def _extract_transport(self, page: RawPageData, document: PageDocument) -> TransportSignals:
        return TransportSignals(
            is_secure=page.is_secure_transport,
            headers=dict(page.headers),
            mixed_content_count=sum(document.count(p) for p in MIXED_CONTENT_PATTERNS),
        )


def _iter_entities(parsed: Any) -> Iterator[dict]:
    """Yield every typed entity in a JSON-LD document (object, list or @graph)."""
    if isinstance(parsed, list):
        for item in parsed:
            yield from _iter_entities(item)
    elif isinstance(parsed, dict):
        if "@type" in parsed or "@graph" not in parsed:
            yield parsed
        graph = parsed.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                yield from _iter_entities(item)


def _declared_type(entity: dict) -> str:
    declared = entity.get("@type")
    if isinstance(declared, list):
        declared = declared[0] if declared else None
    return declared if isinstance(declared, str) and declared else "Unknown"


def _search(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def extract_signals(page: RawPageData) -> SignalSet:
    """Extract the SignalSet for a fetched page."""
    return SignalExtractor().extract(page)
