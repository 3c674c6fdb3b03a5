"""Configuration management using Pydantic Settings.

This module provides centralized configuration management for the entire application,
loading settings from environment variables with validation and type safety.
"""

import json
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All configuration parameters are defined here with type hints, default values,
    and validation. Settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Portal Configuration
    suzhou_root_url: str = Field(
        default="https://www.suzhou.gov.cn",
        description="Root URL of the Suzhou government portal",
    )

    # HTTP Configuration
    http_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    http_user_agent: str = Field(
        default="Mozilla/5.0 (compatible; govfeed/1.0)",
        description="User-Agent header sent to the portal",
    )
    http_max_connections: int = Field(
        default=20,
        description="Maximum concurrent connections in the shared HTTP client",
    )

    # Fetch Cache Configuration
    cache_ttl_seconds: int = Field(
        default=3600,
        ge=0,
        description="How long a fetched detail page stays cached",
    )
    cache_max_entries: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of cached detail pages",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format (json or text)")
    log_file: str = Field(
        default="logs/govfeed.log",
        description="Log file path",
    )
    log_max_bytes: int = Field(
        default=10485760,
        description="Maximum log file size in bytes",
    )
    log_backup_count: int = Field(default=5, description="Number of log backup files")

    # API Configuration
    api_title: str = Field(
        default="Suzhou Government News Feed",
        description="API title",
    )
    api_version: str = Field(default="1.0.0", description="API version")
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    api_cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="CORS allowed origins",
    )

    # Environment
    environment: str = Field(default="development", description="Environment name")

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """Parse CORS origins from JSON string or list."""
        if isinstance(v, str):
            return json.loads(v)  # type: ignore[no-any-return]
        return v  # type: ignore[no-any-return]

    @field_validator("suzhou_root_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Store the root URL without a trailing slash."""
        return v.rstrip("/")


# Global settings instance
settings = Settings()
