"""Request forwarding to the structured generation provider."""

import logging
from typing import Any

import httpx

from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.exceptions import ConfigurationError, UpstreamTimeoutError, UpstreamUnreachableError

logger = logging.getLogger(__name__)


async def post_response(
    payload: dict[str, Any],
    config: SnapshotConfig,
) -> httpx.Response:
    """
    Send a structured generation request to the provider.

    Args:
        payload: The Responses API request body
        config: Snapshot configuration for credential, URL and timeout settings

    Returns:
        httpx.Response object from upstream, whatever its status

    Raises:
        ConfigurationError: If no credential is configured
        UpstreamUnreachableError: If connection to upstream fails
        UpstreamTimeoutError: If upstream request times out
    """
    if not config.api_key:
        raise ConfigurationError("Missing OPENAI_API_KEY env var")

    url = config.responses_url

    timeout = httpx.Timeout(
        config.timeout_s,
        connect=config.connect_timeout_s,
    )

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            logger.debug(f"Requesting structured generation from {url}")
            response = await client.post(
                url,
                json=payload,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {config.api_key}",
                },
            )
            return response

    except httpx.TimeoutException as e:
        logger.error(f"Timeout error to upstream {url}: {e}")
        raise UpstreamTimeoutError(
            "Upstream did not respond in time",
            upstream=config.base_url,
        ) from e

    except (httpx.ConnectError, httpx.NetworkError) as e:
        logger.error(f"Connection error to upstream {url}: {e}")
        raise UpstreamUnreachableError(
            f"Connection to upstream failed: {str(e)}",
            upstream=config.base_url,
        ) from e
