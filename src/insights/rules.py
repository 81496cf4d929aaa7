"""Fallback insight rules."""

from dataclasses import dataclass
from typing import Any, Callable

from insights.models import QuickWin, TopIssue


@dataclass
class Rule:
    """A single fallback insight rule."""

    id: str
    issue: TopIssue
    quick_win: QuickWin
    condition: Callable[[dict], bool]


def _get_nested(data: dict, path: str, default: Any = None) -> Any:
    """Get a nested value from a dict using dot notation."""
    value = data
    for key in path.split("."):
        if isinstance(value, dict):
            value = value.get(key, default)
        else:
            return default
    return value


def _score(ctx: dict, key: str) -> int:
    value = _get_nested(ctx, f"scores.{key}")
    return value if value is not None else 100


FALLBACK_RULES = [
    Rule(
        id="slow-mobile",
        issue=TopIssue(
            title="Mobile Speed Needs Improvement",
            impact="High",
            description="53% of mobile visitors leave if a page takes more than 3 seconds to load.",
        ),
        quick_win=QuickWin(
            title="Compress Images",
            description="Use TinyPNG.com to compress images without losing quality.",
            time_estimate="15 minutes",
        ),
        condition=lambda ctx: _score(ctx, "mobile") < 50,
    ),
    Rule(
        id="no-chatbot",
        issue=TopIssue(
            title="No 24/7 Lead Capture",
            impact="High",
            description="When visitors arrive after hours, they have no way to get immediate answers.",
        ),
        quick_win=QuickWin(
            title="Add AI Chatbot",
            description="Install a chatbot like Tidio or Drift to qualify leads around the clock.",
            time_estimate="30 minutes",
        ),
        condition=lambda ctx: not _get_nested(ctx, "features.chatbot.detected", False),
    ),
    Rule(
        id="weak-aeo",
        issue=TopIssue(
            title="Not Optimized for AI Search",
            impact="Medium",
            description="When people ask ChatGPT for recommendations, your business may not appear.",
        ),
        quick_win=QuickWin(
            title="Add FAQ Schema",
            description="Create FAQ content with proper schema markup for LLM visibility.",
            time_estimate="45 minutes",
        ),
        condition=lambda ctx: _score(ctx, "aeoGeo") < 50,
    ),
    Rule(
        id="weak-seo",
        issue=TopIssue(
            title="Search Engines Miss Key Details",
            impact="Medium",
            description="Missing titles, descriptions or headings make it harder for customers to find you on Google.",
        ),
        quick_win=QuickWin(
            title="Fix Title and Meta Description",
            description="Write a unique title (30-60 characters) and description (120-160 characters) naming your service and city.",
            time_estimate="20 minutes",
        ),
        condition=lambda ctx: _score(ctx, "seo") < 60,
    ),
    Rule(
        id="weak-security",
        issue=TopIssue(
            title="Security Headers Missing",
            impact="Medium",
            description="Browsers and visitors trust sites less when basic protections are not switched on.",
        ),
        quick_win=QuickWin(
            title="Enable Security Headers",
            description="Turn on HSTS, X-Content-Type-Options and X-Frame-Options in your host or CDN settings.",
            time_estimate="30 minutes",
        ),
        condition=lambda ctx: _score(ctx, "security") < 55,
    ),
]
