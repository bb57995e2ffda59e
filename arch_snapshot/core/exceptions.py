"""Custom exceptions for the architecture snapshot core library."""


class SnapshotError(Exception):
    """Base exception for all snapshot errors."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ClientInputError(SnapshotError):
    """Raised when the caller's input must be fixed before retrying."""

    status_code = 400
    error_type = "invalid_request"


class InvalidBodyError(ClientInputError):
    """Raised when the request body is not a JSON object."""

    error_type = "invalid_json"


class ContentRequiredError(ClientInputError):
    """Raised when content is empty after trimming."""

    error_type = "content_required"

    def __init__(self, message: str = "content is required"):
        super().__init__(message)


class ContentTooLargeError(ClientInputError):
    """Raised when content exceeds the proxy's size limit."""

    status_code = 413
    error_type = "content_too_large"

    def __init__(self, message: str = "content too large"):
        super().__init__(message)


class InputTooVagueError(ClientInputError):
    """Raised client-side when there is nothing to analyze."""

    error_type = "input_too_vague"

    def __init__(
        self,
        message: str = "Input is too vague to analyze meaningfully. Provide structure, not intentions.",
    ):
        super().__init__(message)


class InputTooLargeError(ClientInputError):
    """Raised client-side when input is over the limit, before any network call."""

    status_code = 413
    error_type = "input_too_large"

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(f"Input is too large ({length} chars). Trim it under {limit}.")


class ConfigurationError(SnapshotError):
    """Raised when there is a configuration problem."""

    error_type = "configuration_error"


class UpstreamError(SnapshotError):
    """Base class for upstream-related errors."""

    def __init__(self, message: str, upstream: str | None = None):
        self.upstream = upstream
        super().__init__(message)


class UpstreamProtocolError(UpstreamError):
    """Raised when the provider fails or answers with an unusable shape."""

    status_code = 502
    error_type = "upstream_invalid_response"

    def __init__(self, message: str, upstream: str | None = None, upstream_status: int | None = None):
        self.upstream_status = upstream_status
        super().__init__(message, upstream=upstream)


class UpstreamUnreachableError(UpstreamError):
    """Raised when the upstream server is unreachable."""

    error_type = "upstream_unreachable"


class UpstreamTimeoutError(UpstreamError):
    """Raised when a request to the upstream server times out."""

    status_code = 504
    error_type = "upstream_timeout"


class MissingEndpointError(SnapshotError):
    """Raised by the proxy client when the analysis endpoint does not exist."""

    status_code = 404
    error_type = "missing_endpoint"

    def __init__(self, message: str = "missing-endpoint"):
        super().__init__(message)


class AnalysisFailedError(SnapshotError):
    """Raised by the proxy client when the endpoint exists but the analysis failed."""

    error_type = "analysis_failed"

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)
