"""Application configuration via environment variables with Pydantic validation.

All configuration is loaded from environment variables (with .env file support).
Invalid values fail loudly when settings are loaded.
"""

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """mwsync settings. All values sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Monitoring server gateway
    kuma_url: AnyHttpUrl = AnyHttpUrl("http://localhost:3001/api")
    kuma_token: str | None = None

    # Per-call timeout for the server client and lifecycle operations
    request_timeout_seconds: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("kuma_url", mode="before")
    @classmethod
    def kuma_url_not_empty(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("KUMA_URL must not be empty")
        return v

    @field_validator("request_timeout_seconds")
    @classmethod
    def timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_SECONDS must be positive")
        return v

    @field_validator("log_format")
    @classmethod
    def log_format_known(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v


def get_settings() -> Settings:
    """Create and return a validated Settings instance.

    Raises ValidationError with clear messages if env vars are invalid.
    """
    return Settings()
