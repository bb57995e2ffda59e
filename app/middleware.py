"""Request ID and access-log middleware."""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from arch_snapshot.core.logging import request_id_var, resolve_request_id

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers; logged at DEBUG only
QUIET_PATHS = frozenset({"/health"})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the call and log one access line per response.

    A well-formed inbound X-Request-ID is reused so a caller can correlate
    its own logs with the proxy's; anything else is replaced.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        start = time.perf_counter()
        try:
            response = await call_next(request)
            logger.log(
                level,
                "%s %s -> %s (%.0f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            request_id_var.reset(token)
