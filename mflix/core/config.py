"""
mflix/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, write/read durability, report size)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, validator
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="sample_mflix",
        description="MongoDB database name"
    )
    MONGODB_MAX_POOL_SIZE: int = Field(
        default=50,
        description="Maximum connections kept in the client pool"
    )
    MONGODB_CONNECT_TIMEOUT_MS: int = Field(
        default=2000,
        description="Socket connect timeout in milliseconds"
    )
    MONGODB_SERVER_SELECTION_TIMEOUT_MS: int = Field(
        default=5000,
        description="Server selection timeout in milliseconds"
    )

    # Durability
    WRITE_CONCERN_TIMEOUT_MS: int = Field(
        default=2500,
        description="wtimeout applied to majority-acknowledged writes"
    )

    # Reporting
    CRITICS_LIMIT: int = Field(
        default=20,
        description="Number of users returned by the most active commenters report"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    @validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        """Reject unknown logging levels."""
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v.upper()

    @validator("CRITICS_LIMIT")
    def validate_critics_limit(cls, v):
        """The report must return at least one critic."""
        if v < 1:
            raise ValueError("CRITICS_LIMIT must be a positive integer")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"


# Default settings used by scripts and logging setup
settings = Settings()


def validate_settings(config: Settings = settings):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not config.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not config.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if config.WRITE_CONCERN_TIMEOUT_MS <= 0:
        errors.append("WRITE_CONCERN_TIMEOUT_MS must be positive")

    # Production-specific validations
    if config.is_production and config.DEBUG:
        errors.append("DEBUG must be disabled in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
