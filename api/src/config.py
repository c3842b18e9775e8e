"""
FastAPI application configuration using Pydantic Settings.

Provides centralized configuration for:
- Database connections (SQLite through SQLAlchemy, sync and async drivers)
- Movie validation limits
- CORS settings
- Logging, metrics and tracing

All settings support environment variable overrides and .env file loading.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables with the
    prefix "MOVIES_API_" (e.g., MOVIES_API_DATABASE_URL).

    Environment variables are loaded from:
    1. System environment
    2. .env file in the current directory
    3. Default values defined below
    """

    # =========================================================================
    # API Settings
    # =========================================================================

    app_name: str = Field(
        default="Onion Movies API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="API version"
    )
    api_prefix: str = Field(
        default="/api",
        description="API URL prefix"
    )

    debug: bool = Field(
        default=False,
        description="Debug mode - enables verbose logging and error traces"
    )
    environment: str = Field(
        default="development",
        description="Environment: development|staging|production"
    )

    host: str = Field(
        default="0.0.0.0",
        description="API bind host"
    )
    port: int = Field(
        default=5284,
        description="API bind port",
        gt=0,
        lt=65536
    )

    # =========================================================================
    # Database Settings (SQLite)
    # =========================================================================

    database_url: str = Field(
        default="sqlite:///moviedatabase.db",
        description="SQLAlchemy URL used by the synchronous repository operations"
    )
    async_database_url: str = Field(
        default="",
        description="SQLAlchemy URL used by async operations (derived from database_url when empty)"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL queries to logs (useful for debugging)"
    )
    database_reset_on_startup: bool = Field(
        default=True,
        description="Drop and recreate the schema when the application starts"
    )

    # =========================================================================
    # Validation Settings
    # =========================================================================

    title_max_length: int = Field(
        default=100,
        description="Maximum movie title length",
        gt=0
    )
    director_max_length: int = Field(
        default=100,
        description="Maximum director name length",
        gt=0
    )
    min_release_year: int = Field(
        default=1900,
        description="Earliest accepted release year (the latest is the current year)"
    )

    # =========================================================================
    # CORS Settings
    # =========================================================================

    cors_enabled: bool = Field(
        default=False,
        description="Enable CORS middleware"
    )
    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # =========================================================================
    # Monitoring and Observability
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG|INFO|WARNING|ERROR|CRITICAL"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json|text"
    )
    metrics_enabled: bool = Field(
        default=True,
        description="Enable Prometheus metrics"
    )
    metrics_endpoint: str = Field(
        default="/metrics",
        description="Prometheus metrics endpoint path"
    )
    tracing_enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing (spans exported to the console)"
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got: {v}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        allowed = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got: {v}")
        return v_lower

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Only SQLite URLs are supported."""
        if not v.startswith("sqlite"):
            raise ValueError(f"database_url must be a SQLite URL, got: {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def database_url_async(self) -> str:
        """Get async database URL (with aiosqlite driver)."""
        if self.async_database_url:
            return self.async_database_url
        if self.database_url.startswith("sqlite://"):
            return self.database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return self.database_url

    # =========================================================================
    # Model Config
    # =========================================================================

    model_config = SettingsConfigDict(
        env_prefix="MOVIES_API_",  # Environment variable prefix
        env_file=".env",           # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",            # Ignore extra environment variables
        validate_default=True,     # Validate default values
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once and shared
    across the application. Settings are loaded from:
    1. Environment variables with MOVIES_API_ prefix
    2. .env file in the current directory
    3. Default values

    Returns:
        Settings: Cached settings instance

    Example:
        >>> from api.src.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.database_url)
        sqlite:///moviedatabase.db
    """
    return Settings()


# Convenience function to clear settings cache (useful for testing)
def clear_settings_cache():
    """
    Clear the settings cache.

    Useful for testing when you need to reload settings with different
    environment variables.
    """
    get_settings.cache_clear()
