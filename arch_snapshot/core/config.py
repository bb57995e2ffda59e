"""Simple configuration for core library usage."""

from dataclasses import dataclass

MAX_CONTENT_CHARS = 9000


@dataclass
class SnapshotConfig:
    """Configuration for the architecture snapshot core library.

    This is a simplified config suitable for library usage without
    environment variable loading.

    Args:
        api_key: Secret credential for the generation provider (None = not configured)
        base_url: Base URL of the provider's Responses API
        model: Model name requested for structured generation
        max_output_tokens: Response size ceiling passed upstream
        temperature: Sampling temperature passed upstream
        store: Whether the provider may persist the interaction
        timeout_s: Total timeout for the upstream request in seconds
        connect_timeout_s: Connection timeout for the upstream request in seconds
        max_content_chars: Largest accepted content length after trimming
    """

    api_key: str | None = None
    base_url: str = "https://api.openai.com"
    model: str = "gpt-4o-mini"
    max_output_tokens: int = 450
    temperature: float = 0.2
    store: bool = False
    timeout_s: float = 60.0
    connect_timeout_s: float = 10.0
    max_content_chars: int = MAX_CONTENT_CHARS

    @property
    def responses_url(self) -> str:
        """Full URL of the structured generation endpoint."""
        return f"{self.base_url.rstrip('/')}/v1/responses"
