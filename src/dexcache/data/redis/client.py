"""Async Redis client with lazy connection management."""

import asyncio
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dexcache.config.settings import Settings, get_settings
from dexcache.core.exceptions import CacheStoreError

log = structlog.get_logger(__name__)


class RedisClient:
    """Owned handle to the Redis connection.

    One instance is shared by every request. The connection is opened on
    first use and reopened after ``disconnect``; concurrent callers of
    ``ensure_connected`` never open more than one connection.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._client: Redis | None = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Establish connection to Redis with a single attempt.

        Raises:
            CacheStoreError: If the connection or the initial PING fails.
        """
        if self._client is not None:
            return

        async with self._lock:
            if self._client is not None:
                return

            password = self._settings.redis_password
            client = Redis(
                host=self._settings.redis_host,
                port=self._settings.redis_port,
                db=self._settings.redis_db,
                password=password.get_secret_value() if password else None,
                socket_timeout=self._settings.redis_socket_timeout,
                socket_connect_timeout=self._settings.redis_socket_timeout,
                decode_responses=True,
            )
            try:
                await client.ping()
            except (RedisError, OSError) as e:
                await client.aclose()
                log.error(
                    "redis_connection_failed",
                    host=self._settings.redis_host,
                    port=self._settings.redis_port,
                    error=str(e),
                )
                raise CacheStoreError(f"Redis: {e}", operation="connect") from e

            self._client = client
            log.info(
                "redis_connected",
                host=self._settings.redis_host,
                port=self._settings.redis_port,
                db=self._settings.redis_db,
            )

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=1),
        retry=retry_if_exception_type(CacheStoreError),
        reraise=True,
    )
    async def connect_with_retry(self) -> None:
        """Connect at startup, retrying briefly while Redis comes up.

        Request paths use ``ensure_connected`` instead, which fails fast.

        Raises:
            CacheStoreError: If every attempt fails.
        """
        await self.connect()

    async def ensure_connected(self) -> Redis:
        """Return the live client, connecting first if needed.

        Raises:
            CacheStoreError: If the connection cannot be established.
        """
        await self.connect()
        if self._client is None:
            raise CacheStoreError("Redis: Client not connected", operation="connect")
        return self._client

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("redis_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check Redis connection health.

        Returns:
            Dict with status, healthy flag, and optional error.
        """
        if self._client is None:
            return {"status": "disconnected", "healthy": False}

        try:
            await self._client.ping()
            return {"status": "connected", "healthy": True}
        except RedisError as e:
            log.error("redis_health_check_failed", error=str(e))
            return {"status": "error", "healthy": False, "error": str(e)}
