"""Configuration module for the carbon dashboard."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
