"""Request/result models and the output schema sent upstream."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

InputKind = Literal["tree", "description"]

SUMMARY_MAX_CHARS = 700
PATTERNS_MAX_ITEMS = 10
PATTERN_MAX_CHARS = 80
STRENGTHS_MIN_ITEMS = 1
STRENGTHS_MAX_ITEMS = 3
STRENGTH_MAX_CHARS = 140
FINDING_MAX_CHARS = 220

SCHEMA_NAME = "architecture_snapshot"


class AnalysisRequest(BaseModel):
    """Normalized input for one analysis call."""

    model_config = ConfigDict(frozen=True)

    kind: InputKind = Field(description="Inferred input kind")
    content: str = Field(min_length=1, description="Trimmed user content")


class AnalysisResult(BaseModel):
    """Architecture verdict handed back to the caller."""

    model_config = ConfigDict(extra="forbid")

    summary: str = Field(default="", description="Concise architecture summary")
    patterns: list[str] = Field(default_factory=list, description="Detected architectural patterns")
    strengths: list[str] = Field(default_factory=list, description="Concrete strengths")
    risk: str = Field(default="", description="Primary architectural risk")
    improvement: str = Field(default="", description="One realistic improvement")


class ErrorResponse(BaseModel):
    """Error body returned by the proxy."""

    error: str = Field(description="Human-readable error message")


def _string(max_length: int) -> dict[str, Any]:
    return {"type": "string", "minLength": 1, "maxLength": max_length}


def analysis_result_json_schema() -> dict[str, Any]:
    """Build the strict JSON schema describing AnalysisResult for structured generation."""
    return {
        "type": "object",
        "additionalProperties": False,
        "required": ["summary", "patterns", "strengths", "risk", "improvement"],
        "properties": {
            "summary": _string(SUMMARY_MAX_CHARS),
            "patterns": {
                "type": "array",
                "minItems": 0,
                "maxItems": PATTERNS_MAX_ITEMS,
                "items": _string(PATTERN_MAX_CHARS),
            },
            "strengths": {
                "type": "array",
                "minItems": STRENGTHS_MIN_ITEMS,
                "maxItems": STRENGTHS_MAX_ITEMS,
                "items": _string(STRENGTH_MAX_CHARS),
            },
            "risk": _string(FINDING_MAX_CHARS),
            "improvement": _string(FINDING_MAX_CHARS),
        },
    }
