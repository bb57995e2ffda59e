"""Architecture Snapshot - schema-constrained architecture reviews.

A Python library that validates a directory tree or architecture
description, asks a structured generation provider for a strict JSON
verdict, and hands back a normalized result or a typed error.

Usage:
    >>> from arch_snapshot import SnapshotConfig, analyze_architecture
    >>>
    >>> config = SnapshotConfig(api_key="sk-...")
    >>> result = await analyze_architecture("src/\\n  api/\\n  lib/\\n", config)
    >>> print(result.summary)
"""

__version__ = "0.1.0"

# Public library API exports
from arch_snapshot.core.classifier import build_request, detect_type
from arch_snapshot.core.config import SnapshotConfig
from arch_snapshot.core.operations import analyze_architecture, analyze_request
from arch_snapshot.core.proxy import ProxyResponse, handle
from arch_snapshot.core.proxy_client import describe_failure, submit_analysis
from arch_snapshot.core.schemas import AnalysisRequest, AnalysisResult

# Export exceptions for library users
from arch_snapshot.core.exceptions import (
    AnalysisFailedError,
    ClientInputError,
    ConfigurationError,
    InputTooLargeError,
    InputTooVagueError,
    MissingEndpointError,
    SnapshotError,
    UpstreamError,
    UpstreamProtocolError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

__all__ = [
    "__version__",
    # Configuration
    "SnapshotConfig",
    # Models
    "AnalysisRequest",
    "AnalysisResult",
    "ProxyResponse",
    # Operations
    "detect_type",
    "build_request",
    "analyze_request",
    "analyze_architecture",
    "handle",
    "submit_analysis",
    "describe_failure",
    # Exceptions
    "SnapshotError",
    "ClientInputError",
    "InputTooVagueError",
    "InputTooLargeError",
    "ConfigurationError",
    "UpstreamError",
    "UpstreamProtocolError",
    "UpstreamTimeoutError",
    "UpstreamUnreachableError",
    "MissingEndpointError",
    "AnalysisFailedError",
]
