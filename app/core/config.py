"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SOAP_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except soap_key, which is
    validated in validate_required.
    """

    # App
    app_name: str = "subscription-bridge"
    app_version: str = "1.0.0"
    debug: bool = False

    # Remote subscription service (SOAP over HTTP)
    soap_base_host: str = "localhost"
    soap_base_port: int = 8001
    soap_service_path: str = "/api/subscribe"
    soap_key: SecretStr = SecretStr("")
    soap_timeout_seconds: float = 5.0
    soap_connect_timeout_seconds: float = 2.0
    # Reads (validate, list) only; approve/reject are always a single attempt.
    soap_read_max_attempts: int = 3
    soap_retry_backoff_seconds: float = 0.25
    soap_retry_max_backoff_seconds: float = 2.0

    # Validate operation: tag and literal table are not published by the remote
    # service; an empty table classifies every result as unclassified (deny).
    soap_validate_operation: str = "validateSubscribe"
    soap_validate_approved_literals: list[str] = []
    soap_validate_rejected_literals: list[str] = []
    soap_validate_not_found_literals: list[str] = []
    soap_validate_already_processed_literals: list[str] = []

    # Authorization gate (request-scoped decision cache)
    authorization_cache_ttl_seconds: float = 30.0

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def soap_service_url(self) -> str:
        """Full URL of the remote subscription endpoint."""
        return f"http://{self.soap_base_host}:{self.soap_base_port}{self.soap_service_path}"

    @property
    def soap_validate_literals_configured(self) -> bool:
        return bool(self.soap_validate_approved_literals)

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and numeric bounds.

        - SOAP_KEY is required (sent as the last argument of every operation).
        - Timeouts, attempts, and cache TTL must be positive.
        """
        if not self.soap_key.get_secret_value():
            raise ValueError(
                "SOAP_KEY is required. Set it to the shared key configured "
                "on the remote subscription service."
            )
        if self.soap_timeout_seconds <= 0 or self.soap_connect_timeout_seconds <= 0:
            raise ValueError("SOAP timeouts must be positive")
        if self.soap_read_max_attempts < 1:
            raise ValueError("soap_read_max_attempts must be at least 1")
        if self.soap_retry_backoff_seconds < 0:
            raise ValueError("soap_retry_backoff_seconds must not be negative")
        if self.authorization_cache_ttl_seconds <= 0:
            raise ValueError("authorization_cache_ttl_seconds must be positive")
        if not self.soap_service_path.startswith("/"):
            raise ValueError(
                f"soap_service_path must start with '/', got: {self.soap_service_path!r}"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
