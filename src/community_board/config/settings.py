"""
Configuration settings for the community board client.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import SortMode


class Settings(BaseSettings):
    """
    Community board client configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Board API Configuration
    board_api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL for the community board API"
    )
    board_api_timeout: int = Field(
        default=30,
        description="Timeout in seconds for API requests"
    )

    # Presentation
    toast_duration_seconds: float = Field(
        default=5.0,
        description="How long a notification stays visible"
    )
    default_sort: SortMode = Field(
        default=SortMode.NEW,
        description="Initial sort mode (new or top)"
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


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
