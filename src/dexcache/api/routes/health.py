"""Health check endpoint with cache status."""

from typing import Any

from fastapi import APIRouter

from dexcache.api.dependencies import RedisDep, SettingsDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: SettingsDep, redis: RedisDep) -> dict[str, Any]:
    """
    Health check endpoint with cache status.

    Returns:
        dict with overall status, version and Redis health.
    """
    cache_health = await redis.health_check()

    return {
        "status": "ok" if cache_health["healthy"] else "degraded",
        "version": settings.app_version,
        "cache": cache_health,
    }
