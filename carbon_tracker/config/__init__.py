"""Configuration module for the carbon tracker service."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
