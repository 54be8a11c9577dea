"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from dexcache.api.routes import health, search
from dexcache.config.logging import configure_logging
from dexcache.config.settings import get_settings
from dexcache.core.exceptions import (
    CacheStoreError,
    ExternalServiceError,
    ValidationError,
)
from dexcache.data.redis.client import RedisClient
from dexcache.data.redis.pair_cache import PairCacheStore
from dexcache.services.dexscreener.client import DexScreenerClient
from dexcache.services.pairs.lookup import PairLookupService

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    On startup: connect to Redis (requests reconnect lazily if this fails).
    On shutdown: close Redis and the upstream HTTP client.
    """
    log.info("application_starting")
    configure_logging()

    redis: RedisClient = app.state.redis
    try:
        await redis.connect_with_retry()
    except CacheStoreError as e:
        log.warning("redis_connection_skipped", error=str(e))

    log.info("application_started")

    yield

    log.info("application_stopping")
    await redis.disconnect()
    await app.state.dexscreener.close()
    log.info("application_stopped")


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.info("request_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def _upstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("upstream_failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Upstream data provider request failed"},
    )


async def _cache_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("cache_store_failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Cache store unavailable"},
    )


def create_app(
    redis: RedisClient | None = None,
    dexscreener: DexScreenerClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        redis: Redis connection handle; created from settings if omitted.
        dexscreener: Upstream client; created from settings if omitted.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Read-through cache for DexScreener trading pair data",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    redis = redis or RedisClient(settings)
    dexscreener = dexscreener or DexScreenerClient(settings)
    app.state.redis = redis
    app.state.dexscreener = dexscreener
    app.state.lookup_service = PairLookupService(PairCacheStore(redis), dexscreener)

    # Error mapping
    app.add_exception_handler(ValidationError, _validation_error_handler)
    app.add_exception_handler(ExternalServiceError, _upstream_error_handler)
    app.add_exception_handler(CacheStoreError, _cache_error_handler)

    # Routes
    app.include_router(health.router)
    app.include_router(search.router)

    return app
