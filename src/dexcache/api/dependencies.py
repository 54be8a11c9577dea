"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from dexcache.config.settings import Settings, get_settings
from dexcache.data.redis.client import RedisClient
from dexcache.services.pairs.lookup import PairLookupService

SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_lookup_service(request: Request) -> PairLookupService:
    """Get the application's pair lookup service."""
    service: PairLookupService = request.app.state.lookup_service
    return service


def get_redis_client(request: Request) -> RedisClient:
    """Get the application's Redis connection handle."""
    client: RedisClient = request.app.state.redis
    return client


LookupServiceDep = Annotated[PairLookupService, Depends(get_lookup_service)]
RedisDep = Annotated[RedisClient, Depends(get_redis_client)]
