"""Client for a deployed analysis proxy."""

import json
import logging

import httpx

from arch_snapshot.core.classifier import build_request
from arch_snapshot.core.config import MAX_CONTENT_CHARS
from arch_snapshot.core.exceptions import (
    AnalysisFailedError,
    ClientInputError,
    MissingEndpointError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)
from arch_snapshot.core.operations import normalize_result
from arch_snapshot.core.schemas import AnalysisResult

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_PATH = "/api/architecture"


async def submit_analysis(
    raw_text: str,
    proxy_url: str,
    max_chars: int = MAX_CONTENT_CHARS,
    timeout_s: float = 90.0,
) -> AnalysisResult:
    """
    Validate text locally, then submit it to an analysis proxy.

    Nothing is sent when local validation fails.

    Args:
        raw_text: Text as typed by the user
        proxy_url: Full URL of the proxy endpoint
        max_chars: Client-side bound, kept equal to the proxy's
        timeout_s: Total timeout for the round trip in seconds

    Returns:
        Normalized AnalysisResult

    Raises:
        InputTooVagueError: If the text is empty after trimming
        InputTooLargeError: If the text exceeds max_chars
        MissingEndpointError: If the proxy answers 404
        AnalysisFailedError: If the proxy answers with any other error status
        UpstreamUnreachableError: If the proxy cannot be reached
        UpstreamTimeoutError: If the proxy does not answer in time
    """
    request = build_request(raw_text, max_chars)
    payload = {"type": request.kind, "content": request.content}

    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_s)) as client:
            logger.debug(f"Submitting {request.kind} input to {proxy_url}")
            response = await client.post(proxy_url, json=payload)
    except httpx.TimeoutException as e:
        raise UpstreamTimeoutError("Analysis proxy did not respond in time", upstream=proxy_url) from e
    except (httpx.ConnectError, httpx.NetworkError) as e:
        raise UpstreamUnreachableError(f"Connection to analysis proxy failed: {str(e)}", upstream=proxy_url) from e

    if response.status_code == 404:
        raise MissingEndpointError()

    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError):
        data = None

    if not response.is_success:
        message = None
        if isinstance(data, dict):
            message = data.get("error") or data.get("message")
        if not isinstance(message, str) or not message:
            message = f"Request failed ({response.status_code})"
        raise AnalysisFailedError(message, status=response.status_code)

    if not isinstance(data, dict):
        raise AnalysisFailedError("Analysis proxy returned an invalid response", status=response.status_code)

    return normalize_result(data)


def describe_failure(exc: Exception) -> str:
    """Turn a submission failure into a short message for display."""
    if isinstance(exc, ClientInputError):
        return exc.message
    if isinstance(exc, MissingEndpointError):
        return "Analysis failed. Backend endpoint not found. This demo needs the analysis proxy deployed."
    message = getattr(exc, "message", None) or str(exc)
    if not message:
        message = "The input couldn't be parsed as a system boundary."
    return f"Analysis failed. {message}"
