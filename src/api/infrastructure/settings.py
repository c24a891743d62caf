"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings for the hosted PostgreSQL backend.

    Environment variables:
        LMS_DB_HOST: Database host (default: localhost)
        LMS_DB_PORT: Database port (default: 5432)
        LMS_DB_DATABASE: Database name (default: postgres)
        LMS_DB_USERNAME: Database user (default: postgres)
        LMS_DB_PASSWORD: Database password (required in production)
        LMS_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 1)
        LMS_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="LMS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="postgres", description="Database name")
    username: str = Field(default="postgres", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=1,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=5,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self


class IdentityProviderSettings(BaseSettings):
    """Settings for the GoTrue-compatible identity provider.

    Environment variables:
        LMS_AUTH_URL: Base URL of the hosted backend (e.g. https://xyz.supabase.co)
        LMS_AUTH_ANON_KEY: Public API key, sent when resolving callers
        LMS_AUTH_SERVICE_ROLE_KEY: Privileged key for admin user operations
        LMS_AUTH_REQUEST_TIMEOUT_SECONDS: HTTP timeout per call (default: 10)
        LMS_AUTH_VERIFY_TOKENS_LOCALLY: Validate caller JWTs against JWKS
            instead of asking the provider (default: false)
        LMS_AUTH_JWT_AUDIENCE: Expected audience claim (default: authenticated)
        LMS_AUTH_JWKS_CACHE_TTL_SECONDS: JWKS cache lifetime (default: 3600)
    """

    model_config = SettingsConfigDict(
        env_prefix="LMS_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:54321",
        description="Base URL of the identity provider",
    )
    anon_key: SecretStr = Field(
        default=SecretStr(""),
        description="Public (anon) API key",
    )
    service_role_key: SecretStr = Field(
        default=SecretStr(""),
        description="Service-role API key for admin operations",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        description="HTTP timeout for identity provider calls",
        gt=0,
    )
    verify_tokens_locally: bool = Field(
        default=False,
        description="Validate bearer tokens against the provider's JWKS",
    )
    jwt_audience: str = Field(
        default="authenticated",
        description="Expected audience claim of caller tokens",
    )
    jwks_cache_ttl_seconds: int = Field(
        default=3600,
        description="How long fetched JWKS keys are cached",
        ge=0,
    )

    @property
    def issuer_url(self) -> str:
        """Issuer URL of tokens minted by the identity provider."""
        return f"{self.url.rstrip('/')}/auth/v1"


class ImportSettings(BaseSettings):
    """Limits applied to bulk user imports.

    Environment variables:
        LMS_IMPORT_ROW_TIMEOUT_SECONDS: Per-row time limit (default: 30)
        LMS_IMPORT_BATCH_TIMEOUT_SECONDS: Whole-batch time limit (default: 300)

    Either limit may be unset to disable it.
    """

    model_config = SettingsConfigDict(
        env_prefix="LMS_IMPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    row_timeout_seconds: float | None = Field(
        default=30.0,
        description="Maximum time spent provisioning a single row",
        gt=0,
    )
    batch_timeout_seconds: float | None = Field(
        default=300.0,
        description="Maximum time spent on one batch before remaining rows are skipped",
        gt=0,
    )

    @model_validator(mode="after")
    def validate_timeouts(self) -> "ImportSettings":
        """Validate batch timeout >= row timeout."""
        if (
            self.row_timeout_seconds is not None
            and self.batch_timeout_seconds is not None
            and self.batch_timeout_seconds < self.row_timeout_seconds
        ):
            raise ValueError(
                f"batch_timeout_seconds ({self.batch_timeout_seconds}) must be >= "
                f"row_timeout_seconds ({self.row_timeout_seconds})"
            )
        return self


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_identity_provider_settings() -> IdentityProviderSettings:
    """Get cached identity provider settings."""
    return IdentityProviderSettings()


@lru_cache
def get_import_settings() -> ImportSettings:
    """Get cached bulk import settings."""
    return ImportSettings()
