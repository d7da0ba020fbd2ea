"""
Configuration settings for Marmoraria Control

The settings implementation lives in settings.py using pydantic-settings.

Usage:
    from marmoraria.core.config import settings
    # or
    from marmoraria.core.settings import get_settings
    settings = get_settings()
"""
from marmoraria.core.settings import Settings, get_settings, settings

__all__ = ["Settings", "get_settings", "settings"]
