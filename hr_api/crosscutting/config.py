"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match current behavior (24h sessions, page size 10)

Collaborators:
  - api/main.py: reads settings for CORS, pool and startup validation
  - container.py: builds the immutable AuthConfig and wires repositories
  - identity/tokens.py: receives AuthConfig (never reads Settings directly)

Constraints:
  - Lives in API/infrastructure layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Singleton via lru_cache for performance
  - ALLOW_EXIT_OVERWRITE_VIA_UPDATE decides whether a generic attendance update
    may rewrite an exit time that was already registered
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_SECRETS = {"dev-secret", "changeme", "change-me", "password", "secret"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/production/test/local)
        allowed_origins: Comma-separated CORS origins (frontend URLs)
        cors_allow_credentials: Allow cookies cross-origin (session cookie)
        jwt_secret: Secret for signing session tokens
        jwt_expires_minutes: Session token TTL in minutes (default: 24h)
        auth_cookie_name: Session cookie name (default: token)
        auth_cookie_secure: Secure flag; None means "only in production"
        auth_cookie_samesite: SameSite attribute for the session cookie
        db_pool_min_size / db_pool_max_size: Connection pool bounds
        db_statement_timeout_ms: Per-connection statement_timeout guardrail
        default_page_size / max_page_size: Pagination limits
        allow_exit_overwrite_via_update: Generic update may rewrite exit_time
        expose_internal_errors: Include raw error text in 500 responses
        log_level / log_json: Logger configuration
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # CORS configuration
    allowed_origins: str = "http://localhost:5173"
    cors_allow_credentials: bool = True

    # Security - JWT session
    jwt_secret: str = "dev-secret"
    jwt_expires_minutes: int = 24 * 60
    auth_cookie_name: str = "token"
    auth_cookie_secure: bool | None = None
    auth_cookie_samesite: str = "none"

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Attendance policy
    allow_exit_overwrite_via_update: bool = True

    # Errors / Logging
    expose_internal_errors: bool = True
    log_level: str = "INFO"
    log_json: bool = True

    # Dev Tools (Backend Safe)
    dev_seed_admin: bool = False
    dev_seed_admin_name: str = "Administrador"
    dev_seed_admin_email: str = "admin@local"
    dev_seed_admin_password: str = "admin123"
    dev_seed_admin_force_reset: bool = False

    @field_validator("jwt_expires_minutes")
    @classmethod
    def jwt_expires_minutes_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("jwt_expires_minutes must be greater than 0")
        return v

    @field_validator("default_page_size", "max_page_size")
    @classmethod
    def page_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("page sizes must be greater than 0")
        return v

    @field_validator("auth_cookie_samesite")
    @classmethod
    def samesite_valid(cls, v: str) -> str:
        value = (v or "none").strip().lower()
        if value not in {"lax", "strict", "none"}:
            raise ValueError("auth_cookie_samesite must be lax, strict, or none")
        return value

    @model_validator(mode="after")
    def validate_page_bounds(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) must not exceed "
                f"max_page_size ({self.max_page_size})"
            )
        return self

    @model_validator(mode="after")
    def validate_security_requirements(self):
        if not self.is_production():
            return self

        jwt_secret = (self.jwt_secret or "").strip()
        if not jwt_secret or jwt_secret in _INSECURE_SECRETS:
            raise ValueError(
                "JWT_SECRET must be set to a strong, non-default value in production"
            )
        if len(jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be at least 32 characters in production")
        return self

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    def cookie_secure(self) -> bool:
        """Secure flag efectivo: explícito si se configuró, sino solo en producción."""
        if self.auth_cookie_secure is not None:
            return self.auth_cookie_secure
        return self.is_production()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
