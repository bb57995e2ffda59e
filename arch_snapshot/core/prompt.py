"""Prompt and payload construction for the structured generation call."""

from typing import Any

from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.schemas import SCHEMA_NAME, AnalysisRequest, analysis_result_json_schema

INPUT_START = "=== INPUT START ==="
INPUT_END = "=== INPUT END ==="

SYSTEM_PROMPT = "\n".join(
    [
        "You are a senior software architect reviewing a codebase snapshot.",
        "",
        "Input represents a project structure or high-level description.",
        "Do NOT speculate beyond the provided input.",
        "Do NOT suggest rewrites or trendy tools.",
        "",
        "Return:",
        "- A concise architecture summary (max 3 sentences)",
        "- Detected architectural patterns (list)",
        "- 1–3 concrete strengths",
        "- Exactly ONE primary architectural risk",
        "- Exactly ONE realistic improvement",
        "",
        "Be neutral, precise, and practical.",
    ]
)


def build_user_prompt(request: AnalysisRequest) -> str:
    """Echo the input kind and fence the raw content between delimiters."""
    return "\n".join(
        [
            f"Input type: {request.kind}",
            "",
            INPUT_START,
            request.content,
            INPUT_END,
        ]
    )


def build_payload(request: AnalysisRequest, config: SnapshotConfig) -> dict[str, Any]:
    """
    Build the Responses API request body for one analysis.

    Args:
        request: Validated analysis request
        config: Snapshot configuration (model, sampling and size settings)

    Returns:
        JSON-serializable request body
    """
    return {
        "model": config.model,
        "input": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(request)},
        ],
        "text": {
            "format": {
                "type": "json_schema",
                "name": SCHEMA_NAME,
                "strict": True,
                "schema": analysis_result_json_schema(),
            },
        },
        "max_output_tokens": config.max_output_tokens,
        "temperature": config.temperature,
        "store": config.store,
    }
