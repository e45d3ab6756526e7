from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PERSISTENCE_BACKENDS = ("relational", "document")


class Settings(BaseSettings):
    # App
    app_name: str = "SaaS Admin"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = ""  # Loaded from environment, validated in model_validator
    database_echo: bool = False

    # Persistence adapter for aggregates: "relational" (SQLAlchemy) or "document" (Redis JSON)
    persistence_backend: str = "relational"
    document_key_prefix: str = "saas_admin"

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Redis (cache, document store, read models, pub/sub, rate-limit counters)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str | None = None
    redis_max_connections: int = 10

    # Cache TTL (Time-To-Live) in seconds
    cache_ttl_tenants: int = 900  # 15 minutes

    # Domain event fan-out to Redis channels domain_events:{aggregate_type}
    event_publishing_enabled: bool = False

    # Fixed-window rate limiting
    rate_limit_enabled: bool = True
    rate_limit_per_window: int = 100
    rate_limit_window_seconds: int = 60

    # Notifications
    notification_max_retries: int = 3

    # OpenTelemetry Distributed Tracing
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"  # Options: "console", "otlp", "none"
    telemetry_otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"

    @model_validator(mode="after")
    def validate_backends(self) -> "Settings":
        """Validate required fields and backend combinations"""
        if not self.database_url:
            raise ValueError("DATABASE_URL is required. Set in environment or .env file.")

        if self.persistence_backend not in PERSISTENCE_BACKENDS:
            raise ValueError(
                f"Invalid persistence_backend '{self.persistence_backend}'. "
                f"Must be one of: {', '.join(PERSISTENCE_BACKENDS)}"
            )
        if self.persistence_backend == "document" and not self.redis_enabled:
            raise ValueError(
                "persistence_backend 'document' stores aggregates in Redis; "
                "set REDIS_ENABLED=true or use the relational backend."
            )
        if self.rate_limit_per_window <= 0 or self.rate_limit_window_seconds <= 0:
            raise ValueError("Rate limit window and request budget must be positive")
        if self.notification_max_retries < 0:
            raise ValueError("notification_max_retries must not be negative")
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
