"""Utility modules for the SEO intelligence engine."""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
