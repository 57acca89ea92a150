"""Configuration module for groupbot."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
