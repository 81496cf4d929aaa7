"""
Detector registries.

Adding a vendor is a data change: append a Detector to the relevant table.
Patterns are matched case-insensitively against the raw HTML.
"""

import re
from dataclasses import dataclass, field
from typing import Literal

DetectorKind = Literal["fingerprint", "structural"]


@dataclass(frozen=True)
class Detector:
    """A labelled set of patterns. Matches when any pattern matches."""

    label: str
    patterns: tuple[str, ...]
    kind: DetectorKind = "fingerprint"
    # Only reported when no other entry in the registry matched
    fallback: bool = False
    compiled: tuple[re.Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self,
            "compiled",
            tuple(re.compile(p, re.IGNORECASE) for p in self.patterns),
        )

    def matches(self, html: str) -> bool:
        return any(p.search(html) for p in self.compiled)


# =============================================================================
# Chatbots (loader scripts and global objects only)
# =============================================================================

CHATBOT_DETECTORS = (
    Detector("Intercom", (r"intercom\.com/widget", r"window\.Intercom", r"intercomSettings")),
    Detector("Drift", (r"js\.driftt\.com", r"drift\.com", r"window\.drift", r"drift\s*=\s*window\.drift")),
    Detector("HubSpot Chat", (r"js\.hs-scripts\.com", r"hs-script-loader", r"hubspot.*conversations", r"HubSpotConversations")),
    Detector("Zendesk Chat", (r"static\.zdassets\.com", r"zopim", r"zendesk.*chat", r"(?<![\w.$])(?-i:zE)\s*\(", r"zESettings")),
    Detector("LiveChat", (r"cdn\.livechatinc\.com", r"__lc\s*=", r"livechatinc\.com/tracking")),
    Detector("Tidio", (r"code\.tidio\.co", r"tidioChatCode", r"tidio_chat")),
    Detector("Crisp", (r"client\.crisp\.chat", r"window\.\$crisp", r"CRISP_WEBSITE_ID")),
    Detector("Freshchat", (r"wchat\.freshchat\.com", r"freshchat\.min\.js", r"fcWidget")),
    Detector("Tawk.to", (r"embed\.tawk\.to", r"Tawk_API", r"tawk\.to")),
    Detector("Olark", (r"static\.olark\.com", r"olark\.identify", r"olark\s*\(")),
    Detector("Chatra", (r"call\.chatra\.io", r"ChatraID", r"window\.ChatraSetup")),
    Detector("JivoChat", (r"code\.jivosite\.com", r"jivo_api", r"jivosite")),
    Detector("Smartsupp", (r"smartsupp\.com/loader", r"smartsupp\s*\(", r"_smartsupp")),
    Detector("Zoho SalesIQ", (r"salesiq\.zoho\.com", r"zoho.*salesiq")),
    Detector("Facebook Messenger", (r"connect\.facebook\.net.*customerchat", r"fb-customerchat", r"MessengerExtensions")),
    Detector("Chatbot.com", (r"cdn\.chatbot\.com", r"chatbot\.com/widget")),
    Detector("Voiceflow", (r"cdn\.voiceflow\.com", r"voiceflow.*widget")),
    Detector("Botpress", (r"cdn\.botpress\.cloud", r"botpress.*webchat")),
    Detector("Landbot", (r"cdn\.landbot\.io", r"landbot.*widget")),
)

# =============================================================================
# AI voice agents (VoIP / call tracking vendors are deliberately absent)
# =============================================================================

VOICE_AGENT_DETECTORS = (
    Detector("Vapi.ai", (r"vapi\.ai", r"vapiSDK", r"vapi-widget")),
    Detector("Bland.ai", (r"bland\.ai", r"bland-widget")),
    Detector("Retell AI", (r"retell\.ai", r"retellai", r"retell-widget")),
    Detector("Synthflow", (r"synthflow\.ai", r"synthflow-widget")),
    Detector("Vocode", (r"vocode\.dev", r"vocode-widget")),
    Detector("PlayHT", (r"\bplay\.ht\b", r"playht.*widget")),
    Detector("ElevenLabs", (r"elevenlabs\.io", r"elevenlabs-widget", r"elevenlabs-convai")),
    Detector("Air AI", (r"\bair\.ai", r"airai-widget")),
)

# =============================================================================
# Calculators and instant quote tools
# =============================================================================

CALCULATOR_DETECTORS = (
    Detector(
        "Third-party Calculator Tool",
        (r"calconic\.com", r"outgrow\.co", r"calculoid\.com", r"ucalc\.pro"),
    ),
    Detector(
        "Custom Calculator",
        (r"""id=["'][^"']*(?:calculator|quote-form|pricing-calculator|cost-estimate)[^"']*["']""",),
        kind="structural",
    ),
    Detector(
        "Interactive Quote Form",
        (r"typeform\.com", r"jotform\.com.*(?:quote|estimate|calculator)"),
    ),
    Detector(
        "Calculator/Quote Tool",
        (
            r"<form[^>]*(?:calculator|quote|estimate|pricing)[^>]*>[\s\S]*?<input[\s\S]*?</form>",
            r"""class=["'][^"']*(?:calculator-widget|quote-calculator|price-calculator|cost-calculator|roi-calculator)[^"']*["']""",
            r"(?:calculator|calcWidget|quoteCalculator|pricingCalculator)\.(?:js|min\.js)",
        ),
        kind="structural",
        fallback=True,
    ),
)

# =============================================================================
# Answer-engine content indicators, keyed by AEOIndicators field name
# =============================================================================

AEO_INDICATOR_PATTERNS = {
    "has_definitive_statements": r"we (?:are|specialize|provide|offer|help)",
    "has_qa_format": r"""<(?:dt|dd)\b|class=["'][^"']*faq|question.*answer""",
    "has_structured_lists": r"<(?:ul|ol)[^>]*>[\s\S]*?<li",
    "has_service_descriptions": r"our services|what we (?:do|offer)|how we help",
    "has_local_keywords": r"serving|located in|based in|\bnear\b|\blocal\b",
    "has_expertise_indicators": r"years of experience|certified|licensed|award|expert|specialist",
    "has_process_description": r"our process|how (?:it|we) work|\bsteps?\b|approach",
    "has_comparison_content": r"\bvs\.?\b|versus|compared to|difference between|why choose",
    "has_statistics": r"\d+%|\d+\+? (?:years|clients|projects|customers)",
    "has_author_attribution": r"written by|\bauthor\b|expert|founder|\bceo\b|\bowner\b",
}

# =============================================================================
# Keyword lists
# =============================================================================

FAQ_KEYWORDS = (
    "faq",
    "frequently asked",
    "common questions",
    "questions and answers",
    "q&a",
    "help center",
)

REVIEW_KEYWORDS = (
    "testimonial",
    "review",
    "rating",
    "stars",
    "customer-feedback",
    "what our clients say",
    "google-reviews",
    "yelp",
    "trust-pilot",
)

HOURS_KEYWORDS = ("hours", "open", "schedule")

# =============================================================================
# Schema.org type sets
# =============================================================================

LOCAL_BUSINESS_TYPES = frozenset({
    "LocalBusiness",
    "Organization",
    "ProfessionalService",
    "HomeAndConstructionBusiness",
    "Plumber",
    "Electrician",
    "HVACBusiness",
    "RoofingContractor",
    "GeneralContractor",
    "LegalService",
    "Dentist",
    "MedicalBusiness",
    "AutoRepair",
    "RealEstateAgent",
    "Restaurant",
})
FAQ_TYPES = frozenset({"FAQPage"})
REVIEW_TYPES = frozenset({"Review", "AggregateRating"})
SERVICE_TYPES = frozenset({"Service", "Product"})
