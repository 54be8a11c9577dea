"""Configuration module for DexCache.

Usage:
    from dexcache.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.redis_host)
"""

from dexcache.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
