"""Configuration module for the community board client."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
