"""Configuration module for MemeLaunch.

Usage:
    from memelaunch.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.manager_address)
"""

from memelaunch.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
