"""Stateless request handler for the architecture analysis proxy."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from arch_snapshot.core.classifier import normalize_kind
from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.exceptions import (
    ConfigurationError,
    ContentRequiredError,
    ContentTooLargeError,
    InvalidBodyError,
    SnapshotError,
)
from arch_snapshot.core.logging import analysis_var, bind_analysis
from arch_snapshot.core.operations import analyze_request
from arch_snapshot.core.schemas import AnalysisRequest, ErrorResponse

logger = logging.getLogger(__name__)

ALLOWED_METHOD = "POST"


@dataclass
class ProxyResponse:
    """Status, JSON body and extra headers for exactly one reply."""

    status: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


def _error(status: int, message: str, headers: dict[str, str] | None = None) -> ProxyResponse:
    return ProxyResponse(
        status=status,
        body=ErrorResponse(error=message).model_dump(),
        headers=headers or {},
    )


def _coerce_str(value: Any) -> str:
    # Falsy scalars count as absent; 1.0 is "1" and True is "true" as a JSON client wrote them
    if isinstance(value, str):
        return value
    if value is None or value is False or (isinstance(value, (int, float)) and value == 0):
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_body(body: bytes | str) -> dict[str, Any]:
    """
    Parse a raw request body as a JSON object.

    An empty body is treated as an empty object.

    Raises:
        InvalidBodyError: If the body is not valid JSON or not a JSON object
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidBodyError("Invalid JSON body") from e

    if not body.strip():
        return {}

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise InvalidBodyError("Invalid JSON body") from e

    if not isinstance(parsed, dict):
        raise InvalidBodyError("Request body must be a JSON object")
    return parsed


def validate_fields(data: dict[str, Any], config: SnapshotConfig) -> AnalysisRequest:
    """
    Coerce and bound the inbound fields into an AnalysisRequest.

    Raises:
        ContentRequiredError: If content is empty after trimming
        ContentTooLargeError: If content exceeds the configured limit
    """
    content = _coerce_str(data.get("content")).strip()
    if not content:
        raise ContentRequiredError()
    if len(content) > config.max_content_chars:
        raise ContentTooLargeError()
    return AnalysisRequest(kind=normalize_kind(data.get("type"), content), content=content)


async def handle(method: str, body: bytes | str, config: SnapshotConfig | None) -> ProxyResponse:
    """
    Answer one analysis call.

    Checks the method and configuration, validates the body, calls the
    provider once and maps every failure to a status code. Never raises.

    Args:
        method: HTTP method of the inbound call
        body: Raw request body
        config: Snapshot configuration, or None if it could not be loaded

    Returns:
        ProxyResponse with either an AnalysisResult body or {"error": ...}
    """
    if method.upper() != ALLOWED_METHOD:
        return _error(405, "Method not allowed", headers={"Allow": ALLOWED_METHOD})

    token = None
    try:
        if config is None:
            raise ConfigurationError("Server configuration is invalid")
        if not config.api_key:
            raise ConfigurationError("Missing OPENAI_API_KEY env var")

        request = validate_fields(parse_body(body), config)
        token = bind_analysis(request)
        result = await analyze_request(request, config)
        logger.info("Analysis complete (%d patterns)", len(result.patterns))
        return ProxyResponse(status=200, body=result.model_dump())

    except SnapshotError as e:
        logger.warning("Analysis rejected (%s, %d): %s", e.error_type, e.status_code, e.message)
        return _error(e.status_code, e.message)
    except Exception as e:
        logger.exception(f"Unexpected error in analysis proxy: {e}")
        return _error(500, str(e) or "Server error")
    finally:
        if token is not None:
            analysis_var.reset(token)
