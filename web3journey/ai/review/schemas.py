"""Schemas for AI code review."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialized with camelCase keys, as the review prompt asks the model to answer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReviewRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=50_000)
    language: str = Field("solidity", min_length=1, max_length=40)
    context: str | None = Field(None, max_length=2000)


class ReviewScore(CamelModel):
    security: int = 0
    gas_efficiency: int = 0
    code_quality: int = 0
    overall: int = 0

    @field_validator("security", "gas_efficiency", "code_quality", "overall", mode="before")
    @classmethod
    def clamp(cls, v: Any) -> int:
        return max(0, min(100, round(float(v))))


class ReviewIssue(CamelModel):
    severity: Literal["critical", "high", "medium", "low", "info"] = "info"
    category: str = "quality"
    title: str
    description: str = ""
    line: str | None = None
    suggestion: str | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def lower_severity(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("line", mode="before")
    @classmethod
    def line_as_text(cls, v: Any) -> str | None:
        return None if v is None else str(v)


class CodeReview(CamelModel):
    summary: str
    score: ReviewScore = Field(default_factory=ReviewScore)
    issues: list[ReviewIssue] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    raw_response: bool = False

    @classmethod
    def from_raw_text(cls, text: str) -> "CodeReview":
        """Fallback for a reply that is not a usable JSON review."""
        return cls(summary=text, raw_response=True)
