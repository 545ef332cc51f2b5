"""Application settings and configuration.

This module defines all configuration options for the forum stage service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SetupSettings(BaseModel):
    """First-run configuration used to bootstrap the admin account and site."""

    admin_username: str = Field(..., min_length=1, max_length=20)
    admin_password: str = Field(..., min_length=1)
    admin_email: str | None = None
    site_name: str = Field(..., min_length=1, max_length=20)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    Nested first-run setup values use a double underscore, for example
    ``SETUP__ADMIN_USERNAME``.
    """

    # Application metadata
    app_name: str = Field(default="Forum Stage", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    hostname: str = Field(default="localhost", alias="SITE_HOSTNAME")
    debug: bool = Field(default=False, alias="DEBUG")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 30,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./forum.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Content policy
    slur_filter: list[str] = Field(default_factory=list, alias="SLUR_FILTER")
    enable_registration: bool = Field(default=True, alias="ENABLE_REGISTRATION")

    # Listing pagination
    fetch_limit_default: int = Field(default=10, ge=1, alias="FETCH_LIMIT_DEFAULT")
    fetch_limit_max: int = Field(default=50, ge=1, alias="FETCH_LIMIT_MAX")

    # First-run bootstrap; absent unless SETUP__* variables are provided
    setup: SetupSettings | None = Field(default=None, alias="SETUP")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
