"""Configuration management - loads environment variables into typed settings."""

import logging
from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arch_snapshot.core.config import MAX_CONTENT_CHARS, SnapshotConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    gateway_host: str = Field(default="127.0.0.1", description="Host for the proxy to listen on")
    gateway_port: int = Field(default=8090, description="Port for the proxy to listen on")

    # Provider Configuration
    openai_api_key: str | None = Field(
        default=None,
        description="Secret credential for the generation provider. Checked per request, never logged",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com",
        description="Base URL of the provider's Responses API",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for structured generation",
    )
    max_output_tokens: int = Field(
        default=450,
        description="Response size ceiling passed upstream",
    )
    temperature: float = Field(
        default=0.2,
        description="Sampling temperature passed upstream",
    )

    # Input Limits
    max_content_chars: int = Field(
        default=MAX_CONTENT_CHARS,
        description="Largest accepted content length (characters, after trimming)",
    )

    # Timeout Configuration
    upstream_timeout_s: float = Field(
        default=60.0,
        description="Total timeout for the provider request (seconds)",
    )
    upstream_connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for the provider request (seconds)",
    )

    # Security Configuration
    allow_origins: str = Field(
        default="",
        description="CORS allowed origins (comma-separated list, empty = no CORS)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("gateway_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"gateway_port must be between 1 and 65535, got {v}")
        return v

    @field_validator("upstream_timeout_s", "upstream_connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("max_output_tokens", "max_content_chars")
    @classmethod
    def validate_positive_limit(cls, v: int) -> int:
        """Validate size limits are positive."""
        if v <= 0:
            raise ValueError(f"Limit must be positive, got {v}")
        return v

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, v: float) -> float:
        """Validate sampling temperature is in the provider's range."""
        if not (0.0 <= v <= 2.0):
            raise ValueError(f"temperature must be between 0 and 2, got {v}")
        return v

    @field_validator("openai_base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme, got {v}")
        if not parsed.netloc:
            raise ValueError(f"URL must have a valid host, got {v}")
        return v

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: str | None) -> str | None:
        """Treat a blank credential as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.allow_origins:
            return []
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    def snapshot_config(self) -> SnapshotConfig:
        """Build the core library configuration from these settings."""
        return SnapshotConfig(
            api_key=self.openai_api_key,
            base_url=self.openai_base_url,
            model=self.openai_model,
            max_output_tokens=self.max_output_tokens,
            temperature=self.temperature,
            timeout_s=self.upstream_timeout_s,
            connect_timeout_s=self.upstream_connect_timeout_s,
            max_content_chars=self.max_content_chars,
        )

    def get_log_level(self) -> int:
        """Convert log level string to logging constant."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and ensure all settings are valid."
        ) from e
