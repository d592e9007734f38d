"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults suitable for local development and tests

Collaborators:
  - api/main.py: reads settings for CORS, pool init and startup validation
  - container.py: decides in-memory vs PostgreSQL adapters
  - crosscutting/rate_limit.py: window/limit per guarded endpoint
  - identity/auth.py: JWT secret, TTL and cookie name

Constraints:
  - No business logic - pure configuration

Notes:
  - Singleton via lru_cache
  - Empty DATABASE_URL means "no PostgreSQL": in-memory adapters are used
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Application environment (development/test/production)
        allowed_origins: Comma-separated CORS origins
        log_level: Root log level (default: INFO)
        log_json: Emit JSON logs (default: True)
        database_url: PostgreSQL connection string (empty = in-memory)
        public_base_url: Base URL used to build shareable CV links
        jwt_secret: Secret for verifying/signing JWT access tokens
        jwt_access_ttl_minutes: Access token TTL in minutes
        jwt_cookie_name: Cookie name for access token
        rate_limit_enabled: Toggle for the fixed-window limiter
        trusted_proxies: Comma-separated proxy IPs allowed to set X-Forwarded-For
        access_rate_limit_window_ms: Window for CV access checks
        access_rate_limit_max_requests: Max access checks per window
        privacy_rate_limit_window_ms: Window for privacy updates
        privacy_rate_limit_max_requests: Max privacy updates per window
    """

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:3000"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Database
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000

    # Sharing
    public_base_url: str = "http://localhost:3000"

    # Security - JWT Auth
    jwt_secret: str = "dev-secret"
    jwt_access_ttl_minutes: int = 30
    jwt_cookie_name: str = "access_token"

    # Security - Rate Limiting (fixed window, por endpoint)
    rate_limit_enabled: bool = True
    access_rate_limit_window_ms: int = 60_000
    access_rate_limit_max_requests: int = 10
    privacy_rate_limit_window_ms: int = 60_000
    privacy_rate_limit_max_requests: int = 5
    trusted_proxies: str = ""

    @field_validator(
        "access_rate_limit_window_ms",
        "access_rate_limit_max_requests",
        "privacy_rate_limit_window_ms",
        "privacy_rate_limit_max_requests",
    )
    @classmethod
    def rate_limit_values_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("rate limit window/max_requests must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size < 0 or self.db_pool_max_size < 1:
            raise ValueError("db pool sizes must be min >= 0 and max >= 1")
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        insecure_secrets = {"dev-secret", "changeme", "change-me", "password"}
        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in insecure_secrets:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def get_trusted_proxies(self) -> frozenset[str]:
        """Parse comma-separated proxy addresses."""
        return frozenset(
            proxy.strip() for proxy in self.trusted_proxies.split(",") if proxy.strip()
        )

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    def uses_postgres(self) -> bool:
        """True si hay DATABASE_URL y no estamos en tests."""
        return bool(self.database_url.strip()) and not self.is_test()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()
