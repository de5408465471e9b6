"""
Configuration loaded from environment variables via Pydantic settings.
"""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
