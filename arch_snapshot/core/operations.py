"""High-level operations API for the architecture snapshot library."""

import json
import logging
from typing import Any

from arch_snapshot.core.classifier import build_request
from arch_snapshot.core.client import post_response
from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.envelope import extract_output_text, upstream_error_message
from arch_snapshot.core.exceptions import UpstreamProtocolError
from arch_snapshot.core.logging import analysis_context
from arch_snapshot.core.prompt import build_payload
from arch_snapshot.core.schemas import (
    FINDING_MAX_CHARS,
    PATTERN_MAX_CHARS,
    PATTERNS_MAX_ITEMS,
    STRENGTH_MAX_CHARS,
    STRENGTHS_MAX_ITEMS,
    SUMMARY_MAX_CHARS,
    AnalysisRequest,
    AnalysisResult,
)

logger = logging.getLogger(__name__)


def _text(value: Any, max_chars: int) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_chars]


def _items(value: Any, max_items: int, max_chars: int) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [item.strip()[:max_chars] for item in value if isinstance(item, str)]
    return [item for item in items if item][:max_items]


def normalize_result(parsed: dict[str, Any]) -> AnalysisResult:
    """
    Re-coerce a decoded upstream result into a well-formed AnalysisResult.

    Missing or wrong-typed strings become "", missing or wrong-typed arrays
    become [], and everything is clamped to the output schema bounds.
    """
    return AnalysisResult(
        summary=_text(parsed.get("summary"), SUMMARY_MAX_CHARS),
        patterns=_items(parsed.get("patterns"), PATTERNS_MAX_ITEMS, PATTERN_MAX_CHARS),
        strengths=_items(parsed.get("strengths"), STRENGTHS_MAX_ITEMS, STRENGTH_MAX_CHARS),
        risk=_text(parsed.get("risk"), FINDING_MAX_CHARS),
        improvement=_text(parsed.get("improvement"), FINDING_MAX_CHARS),
    )


def parse_result_text(text: str, upstream: str | None = None) -> AnalysisResult:
    """
    Decode the extracted generation text and normalize it.

    Raises:
        UpstreamProtocolError: If the text is not JSON or not a JSON object
    """
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Upstream returned non-JSON output: {e}")
        raise UpstreamProtocolError("OpenAI returned non-JSON output", upstream=upstream) from e

    if not isinstance(parsed, dict):
        raise UpstreamProtocolError("OpenAI output invalid", upstream=upstream)

    return normalize_result(parsed)


async def analyze_request(request: AnalysisRequest, config: SnapshotConfig) -> AnalysisResult:
    """
    Run one structured generation call for a validated request.

    Args:
        request: Validated analysis request
        config: Snapshot configuration

    Returns:
        Normalized AnalysisResult

    Raises:
        ConfigurationError: If no credential is configured
        UpstreamProtocolError: On non-2xx status or an unusable response
        UpstreamUnreachableError: If the provider cannot be reached
        UpstreamTimeoutError: If the provider does not answer in time
    """
    with analysis_context(request):
        return await _run_analysis(request, config)


async def _run_analysis(request: AnalysisRequest, config: SnapshotConfig) -> AnalysisResult:
    payload = build_payload(request, config)
    logger.info("Requesting analysis from %s", config.model)

    upstream_response = await post_response(payload, config)

    try:
        resp_json = upstream_response.json()
    except (json.JSONDecodeError, ValueError):
        resp_json = None

    if not upstream_response.is_success:
        message = upstream_error_message(resp_json, upstream_response.status_code)
        logger.warning("Upstream returned %d: %s", upstream_response.status_code, message)
        raise UpstreamProtocolError(
            message,
            upstream=config.base_url,
            upstream_status=upstream_response.status_code,
        )

    text = extract_output_text(resp_json)
    if not text:
        raise UpstreamProtocolError("OpenAI response missing output_text", upstream=config.base_url)

    return parse_result_text(text, upstream=config.base_url)


async def analyze_architecture(
    raw_text: str,
    config: SnapshotConfig,
) -> AnalysisResult:
    """Validate free text, infer its kind and analyze it."""
    request = build_request(raw_text, config.max_content_chars)
    return await analyze_request(request, config)
