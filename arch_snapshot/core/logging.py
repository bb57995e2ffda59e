"""Logging with per-request and per-analysis context for the proxy."""

import logging
import re
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator

from arch_snapshot.core.schemas import AnalysisRequest

# ID of the inbound call currently being handled
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# "<kind>/<chars>" of the analysis in flight; never the content itself
analysis_var: ContextVar[str] = ContextVar("analysis", default="-")

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s %(analysis)s] %(name)s - %(message)s"

_REQUEST_ID = re.compile(r"[A-Za-z0-9_-]{1,64}")


class AnalysisContextFilter(logging.Filter):
    """Stamp every record with the request ID and the analysis descriptor."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        record.analysis = analysis_var.get()  # type: ignore[attr-defined]
        return True


def describe_analysis(request: AnalysisRequest) -> str:
    """Loggable descriptor of a request: kind and content length."""
    return f"{request.kind}/{len(request.content)}"


def bind_analysis(request: AnalysisRequest) -> Token:
    """Set the analysis descriptor; the caller resets the returned token."""
    return analysis_var.set(describe_analysis(request))


@contextmanager
def analysis_context(request: AnalysisRequest) -> Iterator[None]:
    """Scope log records to one analysis."""
    token = bind_analysis(request)
    try:
        yield
    finally:
        analysis_var.reset(token)


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a caller-supplied X-Request-ID when it is safe to log, else mint one."""
    if incoming and _REQUEST_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:12]


def setup_logging(level: str = "INFO") -> None:
    """Route all logging to stderr with request and analysis context.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(AnalysisContextFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    # Upstream client chatter would repeat the provider URL on every call
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
