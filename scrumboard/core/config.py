"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values that would break the Kanban client or the
notification publisher (timeouts, API base URL) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every field has a default so the domain core can run without any
    environment; validate_client_and_limits rejects unusable values.
    """

    # App
    app_name: str = "scrumboard"
    app_version: str = "1.0.0"
    debug: bool = False

    # Task / notification rules
    title_max_length: int = 255
    notification_message_max_length: int = 500
    notification_retention_days: int = 30

    # Kanban client (task status gateway)
    api_base_url: str = "http://localhost:3001/api"
    request_timeout_seconds: float = 10.0
    access_token: SecretStr | None = None

    # Redis (notification publisher)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    notification_channel_prefix: str = "notifications"

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

    @model_validator(mode="after")
    def validate_client_and_limits(self) -> "Settings":
        """Validate the Kanban client endpoint and the numeric limits.

        - API_BASE_URL must be an http(s) URL.
        - REQUEST_TIMEOUT_SECONDS and the length/retention limits must be positive.
        """
        if not self.api_base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"api_base_url must start with http:// or https://, got: {self.api_base_url!r}"
            )
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be greater than 0")
        for name in (
            "title_max_length",
            "notification_message_max_length",
            "notification_retention_days",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be greater than 0")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("telemetry_sample_rate must be between 0.0 and 1.0")
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
