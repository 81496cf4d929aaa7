"""Pydantic models for generated insights."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InsightModel(BaseModel):
    """Base model: camelCase on the wire, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class TopIssue(InsightModel):
    title: str = Field(min_length=1)
    impact: str = Field(min_length=1)
    description: str = Field(min_length=1)


class QuickWin(InsightModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    time_estimate: str = Field(min_length=1)


class AIInsights(InsightModel):
    """Executive-level findings for one analysis."""

    executive_summary: str = Field(min_length=1)
    top_issues: list[TopIssue] = Field(default_factory=list, max_length=10)
    quick_wins: list[QuickWin] = Field(default_factory=list, max_length=10)
    industry_insight: str = Field(min_length=1)
    llm_recommendation: str = Field(min_length=1)
    source: Literal["model", "fallback"] = "fallback"
