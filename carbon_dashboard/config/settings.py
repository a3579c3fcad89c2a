"""
Configuration settings for the carbon dashboard.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Dashboard configuration settings.

    All settings can be overridden via environment variables.
    """

    # Carbon Tracker API Configuration
    api_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL for the carbon tracker API"
    )
    api_timeout: int = Field(
        default=30,
        description="Timeout in seconds for API requests"
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Pre-issued session token; skips the sign-in form when set"
    )

    # Dashboard Configuration
    default_period: str = Field(
        default="month",
        description="Period selected on first load (week, month or all)"
    )
    debug_mode: bool = Field(
        default=True,
        description="Enable debug mode"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Logging format (json or text)"
    )
    log_file: str = Field(
        default="logs/carbon_dashboard.log",
        description="Log file used outside debug mode"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
