"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Cross-field rules (upload limits, storage backend,
CORS origins) are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Nothing is strictly required: without DATABASE_URL the app still starts
    and DB-backed endpoints answer 503 (see persistence.database).
    """

    # App
    app_name: str = "sikap"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (PostgreSQL via asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Storage
    storage_backend: str = "local"
    # Relative paths ("uploads/document/...") resolve under this directory.
    storage_root: str = "./storage"
    max_file_size: int = 5 * MIB
    # Transport-level cap; leaves room for multipart framing around max_file_size.
    max_request_size: int = 6 * MIB

    # Content scanning
    scanner_backend: str = "pattern"
    scan_timeout_seconds: float = 30.0
    scan_simulated_delay_seconds: float = 0.1

    # Identity attributed to anonymous public submissions.
    system_username: str = "system"

    # Request / middleware
    request_timeout_seconds: int = 60
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

    @model_validator(mode="after")
    def validate_limits_and_storage(self) -> "Settings":
        """Validate upload limits, storage backend and CORS origins."""
        if self.max_file_size <= 0:
            raise ValueError("max_file_size must be a positive number of bytes")
        if self.max_request_size < self.max_file_size:
            raise ValueError(
                "max_request_size must be at least max_file_size "
                f"({self.max_request_size} < {self.max_file_size})"
            )
        if self.scan_timeout_seconds <= 0:
            raise ValueError("scan_timeout_seconds must be greater than zero")
        if self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. Must be: 'local'"
            )
        if not self.storage_root:
            raise ValueError("STORAGE_ROOT is required for the local storage backend")
        origins = [o.strip() for o in self.allowed_origins.split(",") if o.strip()]
        if "*" in origins:
            raise ValueError(
                "allowed_origins must list explicit origins; '*' is not allowed "
                "together with credentialed CORS"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
