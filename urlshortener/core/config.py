"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
import string
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from urlshortener.models.url import CODE_COLUMN_LENGTH

logger = logging.getLogger(__name__)

DEFAULT_CODE_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Single-node URL shortening service"

    # API Configuration
    BASE_URL: str = "http://localhost:8080"  # Used for generating short URLs
    API_PREFIX: str = ""
    DEBUG: bool = False
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8080

    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code configuration
    URL_CODE_LENGTH: int = 6
    URL_CODE_CHARS: str = DEFAULT_CODE_CHARS
    URL_CODE_MAX_ATTEMPTS: int = 5  # Insert attempts before giving up on a request
    URL_CODE_MAX_LENGTH: int = 32  # Upper bound on codes accepted by the resolver
    URL_BLOCKED_HOSTS: Union[List[str], str] = []

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./urlshortener.db"
    DB_POOL_SIZE: int = 5
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_ECHO: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Metrics configuration
    METRICS_ENABLED: bool = True
    OTEL_SERVICE_NAME: str = "url-shortener"
    OTEL_EXPORTER_OTLP_METRICS_ENDPOINT: Optional[str] = None  # e.g. http://localhost:4318/v1/metrics
    OTEL_METRICS_EXPORT_INTERVAL_MILLIS: int = 60000

    @field_validator("CORS_ORIGINS", "URL_BLOCKED_HOSTS", mode="before")
    @classmethod
    def validate_list_or_string(cls, v: Union[List[str], str]) -> List[str]:
        """Convert comma-separated string to list if needed."""
        if isinstance(v, str):
            if not v.strip():
                return []
            if v == "*":
                return ["*"]
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("URL_BLOCKED_HOSTS")
    @classmethod
    def normalize_blocked_hosts(cls, v: List[str]) -> List[str]:
        return [host.lower().strip(".") for host in v]

    @field_validator("URL_CODE_LENGTH", "URL_CODE_MAX_ATTEMPTS", "URL_CODE_MAX_LENGTH")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("URL_CODE_LENGTH", "URL_CODE_MAX_LENGTH")
    @classmethod
    def validate_fits_code_column(cls, v: int) -> int:
        if v > CODE_COLUMN_LENGTH:
            raise ValueError(f"must be at most {CODE_COLUMN_LENGTH}, the width of the code column")
        return v

    @field_validator("URL_CODE_CHARS")
    @classmethod
    def validate_code_chars(cls, v: str) -> str:
        if not v:
            raise ValueError("short code alphabet cannot be empty")
        if len(set(v)) != len(v):
            logger.warning("URL_CODE_CHARS contains duplicate characters; code distribution will be skewed")
        return v

    def public_settings(self) -> dict[str, Any]:
        """Settings that are safe to log at startup."""
        return {
            "environment": self.ENVIRONMENT.value,
            "base_url": self.BASE_URL,
            "database_url": self.DATABASE_URL.split("@")[-1],
            "code_length": self.URL_CODE_LENGTH,
            "max_attempts": self.URL_CODE_MAX_ATTEMPTS,
        }


# Create a singleton instance of the settings
settings = Settings()
