"""Redis-backed pair cache with query and token indexes.

Key layout (shared with any other process using the same Redis):

    pair:<address>   -> NormalizedPair JSON          (SET ... EX ttl)
    query:<query>    -> set of pair addresses        (SADD + EXPIRE)
    token:<address>  -> set of pair addresses        (SADD + EXPIRE)

Key material is lowercased and trimmed. Index sets get their TTL reset on
every write that touches them. Nothing is ever deleted explicitly.
"""

from collections.abc import Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

from dexcache.constants.cache import (
    CACHE_TTL_SECONDS,
    PAIR_KEY_PREFIX,
    QUERY_KEY_PREFIX,
    TOKEN_KEY_PREFIX,
)
from dexcache.core.exceptions import CacheStoreError
from dexcache.data.redis.client import RedisClient
from dexcache.models.pair import NormalizedPair

log = structlog.get_logger(__name__)


def _key(prefix: str, value: str) -> str:
    return f"{prefix}:{value.strip().lower()}"


class PairCacheStore:
    """Cache adapter for normalized pairs."""

    def __init__(self, redis: RedisClient, ttl_seconds: int = CACHE_TTL_SECONDS) -> None:
        self._redis = redis
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def key_for_pair(address: str) -> str:
        return _key(PAIR_KEY_PREFIX, address)

    @staticmethod
    def key_for_query(query: str) -> str:
        return _key(QUERY_KEY_PREFIX, query)

    @staticmethod
    def key_for_token(token_address: str) -> str:
        return _key(TOKEN_KEY_PREFIX, token_address)

    async def get_pair(self, address: str) -> NormalizedPair | None:
        """Get a cached pair by address, or None on miss."""
        key = self.key_for_pair(address)
        client = await self._redis.ensure_connected()
        try:
            raw = await client.get(key)
        except RedisError as e:
            raise self._store_error("get_pair", key, e) from e

        if raw is None:
            return None
        return self._decode(key, raw)

    async def get_by_query(self, query: str) -> list[NormalizedPair]:
        """Get cached pairs indexed under a search query."""
        return await self._get_indexed(self.key_for_query(query), "get_by_query")

    async def get_by_token(self, token_address: str) -> list[NormalizedPair]:
        """Get cached pairs indexed under a token address."""
        return await self._get_indexed(self.key_for_token(token_address), "get_by_token")

    async def save(
        self,
        pairs: Sequence[NormalizedPair],
        query: str | None = None,
        token: str | None = None,
    ) -> None:
        """Write pairs and link them to the query/token indexes.

        All commands go out in one non-transactional pipeline. A failure
        mid-batch may leave some keys written; every entry can be rebuilt
        from the upstream.

        Args:
            pairs: Pairs to store; each pair entry gets a fresh TTL.
            query: Search query whose index set should include the pairs.
            token: Token address whose index set should include the pairs.

        Raises:
            CacheStoreError: If Redis is unreachable or the batch fails.
        """
        if not pairs:
            return

        query_key = self.key_for_query(query) if query else None
        token_key = self.key_for_token(token) if token else None

        client = await self._redis.ensure_connected()
        try:
            async with client.pipeline(transaction=False) as pipe:
                for pair in pairs:
                    pipe.set(
                        self.key_for_pair(pair.pair_address),
                        pair.model_dump_json(by_alias=True),
                        ex=self.ttl_seconds,
                    )
                    for index_key in (query_key, token_key):
                        if index_key is not None:
                            pipe.sadd(index_key, pair.pair_address)
                            pipe.expire(index_key, self.ttl_seconds)
                await pipe.execute()
        except RedisError as e:
            raise self._store_error("save", query_key or token_key, e) from e

        log.info(
            "pairs_saved",
            count=len(pairs),
            query_key=query_key,
            token_key=token_key,
        )

    async def _get_indexed(self, index_key: str, operation: str) -> list[NormalizedPair]:
        client: Redis = await self._redis.ensure_connected()
        try:
            addresses = await client.smembers(index_key)
            if not addresses:
                return []
            pair_keys = [self.key_for_pair(address) for address in sorted(addresses)]
            values = await client.mget(pair_keys)
        except RedisError as e:
            raise self._store_error(operation, index_key, e) from e

        # Pair entries may expire before their index set does
        pairs = []
        for key, raw in zip(pair_keys, values, strict=True):
            if raw is None:
                continue
            pair = self._decode(key, raw)
            if pair is not None:
                pairs.append(pair)

        log.debug(
            "index_resolved",
            index_key=index_key,
            members=len(pair_keys),
            found=len(pairs),
        )
        return pairs

    @staticmethod
    def _decode(key: str, raw: str) -> NormalizedPair | None:
        try:
            return NormalizedPair.model_validate_json(raw)
        except PydanticValidationError as e:
            log.warning("cache_entry_unreadable", key=key, error=str(e))
            return None

    @staticmethod
    def _store_error(operation: str, key: str | None, error: Exception) -> CacheStoreError:
        log.error("cache_store_failed", operation=operation, key=key, error=str(error))
        return CacheStoreError(f"Redis: {error}", operation=operation)
