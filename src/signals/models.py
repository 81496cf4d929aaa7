"""Signal Set: everything detected on one page."""

from dataclasses import dataclass, field
from typing import Any, Literal

Confidence = Literal["high", "medium", "none"]


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of running one detector registry against a page."""

    detected: bool = False
    labels: tuple[str, ...] = ()
    confidence: Confidence = "none"

    @property
    def providers(self) -> tuple[str, ...]:
        return self.labels

    @property
    def types(self) -> tuple[str, ...]:
        return self.labels


@dataclass(frozen=True)
class SchemaEntry:
    """One JSON-LD entity."""

    schema_type: str
    data: Any
    format: str = "JSON-LD"


@dataclass(frozen=True)
class SchemaMarkup:
    schemas: tuple[SchemaEntry, ...] = ()
    has_local_business: bool = False
    has_faq_schema: bool = False
    has_review_schema: bool = False
    has_service_schema: bool = False

    @property
    def found(self) -> bool:
        return len(self.schemas) > 0

    @property
    def count(self) -> int:
        return len(self.schemas)

    @property
    def types(self) -> list[str]:
        return [s.schema_type for s in self.schemas]


@dataclass(frozen=True)
class MetaTags:
    title: str | None = None
    description: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    canonical: str | None = None
    robots: str | None = None
    og_image: str | None = None
    has_viewport: bool = False


@dataclass(frozen=True)
class Headings:
    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()


@dataclass(frozen=True)
class LocalBusinessInfo:
    phone: str | None = None
    has_address: bool = False
    has_hours: bool = False


@dataclass(frozen=True)
class Reviews:
    detected: bool = False
    has_star_rating: bool = False


@dataclass(frozen=True)
class ContactInfo:
    has_phone_in_header: bool = False
    has_click_to_call: bool = False
    has_contact_form: bool = False
    has_email: bool = False


@dataclass(frozen=True)
class AEOIndicators:
    """Content patterns that make a page easy for answer engines to quote."""

    has_definitive_statements: bool = False
    has_qa_format: bool = False
    has_structured_lists: bool = False
    has_service_descriptions: bool = False
    has_local_keywords: bool = False
    has_expertise_indicators: bool = False
    has_process_description: bool = False
    has_comparison_content: bool = False
    has_statistics: bool = False
    has_author_attribution: bool = False


@dataclass(frozen=True)
class AccessibilitySignals:
    image_count: int = 0
    images_with_alt: int = 0
    h1_count: int = 0
    input_count: int = 0
    has_labels: bool = False
    has_skip_link: bool = False
    has_landmarks: bool = False
    has_light_text: bool = False
    has_focus_styles: bool = False
    has_lang_attribute: bool = False

    @property
    def alt_ratio(self) -> float:
        # No images means nothing to penalize
        if self.image_count == 0:
            return 1.0
        return self.images_with_alt / self.image_count


@dataclass(frozen=True)
class TransportSignals:
    is_secure: bool = False
    headers: dict[str, str] = field(default_factory=dict)  # lower-cased names
    mixed_content_count: int = 0

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


@dataclass(frozen=True)
class SignalSet:
    """Immutable summary of one page, the only input the scorers read besides lab data."""

    chatbot: DetectionResult = DetectionResult()
    voice_agent: DetectionResult = DetectionResult()
    calculator: DetectionResult = DetectionResult()
    schema_markup: SchemaMarkup = SchemaMarkup()
    meta_tags: MetaTags = MetaTags()
    headings: Headings = Headings()
    has_faq: bool = False
    local_business_info: LocalBusinessInfo = LocalBusinessInfo()
    reviews: Reviews = Reviews()
    contact_info: ContactInfo = ContactInfo()
    aeo_indicators: AEOIndicators = AEOIndicators()
    accessibility: AccessibilitySignals = AccessibilitySignals()
    transport: TransportSignals = TransportSignals()
    error: str | None = None

    @property
    def is_degenerate(self) -> bool:
        return self.error is not None
