"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Provider credentials are read once here; the
composition root turns them into HostingProviderConfig / EmailProviderConfig
and injects those into the provider clients.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Everything has a default so the app can start (and tests can run)
    without provider credentials; missing credentials are reported when
    a provider client is built.
    """

    # App
    app_name: str = "custom-domains"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000"

    # Tenant
    tenant_header_name: str = "X-Tenant-ID"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    domain_configs_collection: str = "domain_configs"

    # Hosting provider (Vercel project domains API)
    hosting_api_base_url: str = "https://api.vercel.com"
    hosting_api_token: SecretStr | None = None
    hosting_project_id: str | None = None
    hosting_team_id: str | None = None
    hosting_anycast_ip: str = "76.76.21.21"
    hosting_edge_hostname: str = "cname.vercel-dns.com"

    # Email provider (Resend sending domains API)
    email_api_base_url: str = "https://api.resend.com"
    email_api_key: SecretStr | None = None

    # Bounded timeout for every provider round trip
    provider_timeout_seconds: float = 15.0

    # Reconciliation sweep cadence (the sweep itself is scheduled externally, e.g. cron every 5 min)
    reconcile_batch_size: int = 200
    reconcile_active_interval_seconds: int = 6 * 60 * 60

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
    def validate_limits(self) -> "Settings":
        """Reject non-positive timeouts and sweep sizes."""
        if self.provider_timeout_seconds <= 0:
            raise ValueError("PROVIDER_TIMEOUT_SECONDS must be greater than 0")
        if self.reconcile_batch_size < 1:
            raise ValueError("RECONCILE_BATCH_SIZE must be at least 1")
        if self.reconcile_active_interval_seconds < 0:
            raise ValueError("RECONCILE_ACTIVE_INTERVAL_SECONDS must not be negative")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError("TELEMETRY_SAMPLE_RATE must be between 0.0 and 1.0")
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
