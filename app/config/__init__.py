"""
==============================================================================
Configuration Package
==============================================================================

Environment-driven settings for the shop order API.

Usage:
------
    from app.config import get_settings

    settings = get_settings()
    print(settings.database_url)

==============================================================================
"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
