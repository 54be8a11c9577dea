"""Read-through pair lookups: cache first, DexScreener on miss.

Each public method follows the same flow:

    1. read the cache
    2. on miss, fetch from DexScreener
    3. normalize and write the result through to the cache
    4. return the normalized pairs

Cache hits never touch the upstream and never refresh TTLs. Failures from
either side are logged and re-raised; there is no stale fallback.
"""

import structlog

from dexcache.core.exceptions import DexCacheError
from dexcache.data.redis.pair_cache import PairCacheStore
from dexcache.models.pair import NormalizedPair
from dexcache.services.dexscreener.client import DexScreenerClient
from dexcache.services.pairs.normalizer import normalize_pairs

log = structlog.get_logger(__name__)


class PairLookupService:
    """Serves pair queries from the cache, falling back to DexScreener."""

    def __init__(self, store: PairCacheStore, upstream: DexScreenerClient) -> None:
        self._store = store
        self._upstream = upstream

    async def search_by_query(self, query: str) -> list[NormalizedPair]:
        """Search pairs by free text.

        Empty upstream results are returned as-is and not cached, so a
        transient "no results" cannot hide real results for a full TTL.

        Args:
            query: Raw search string (token name, symbol, address or pair).

        Raises:
            ExternalServiceError: If the upstream call fails.
            CacheStoreError: If the cache is unreachable.
        """
        try:
            cached = await self._store.get_by_query(query)
            if cached:
                log.info(
                    "pairs_cache_hit",
                    operation="search_by_query",
                    query=query,
                    count=len(cached),
                )
                return cached

            upstream_pairs = await self._upstream.search_pairs(query)
            if not upstream_pairs:
                log.info("search_no_results", query=query)
                return []

            pairs = normalize_pairs(upstream_pairs)
            await self._store.save(pairs, query=query)
        except DexCacheError as e:
            log.error("search_by_query_failed", query=query, error=str(e))
            raise

        log.info("pairs_fetched", operation="search_by_query", query=query, count=len(pairs))
        return pairs

    async def get_by_address(self, chain_id: str, pair_id: str) -> list[NormalizedPair]:
        """Get a pair by chain and address.

        The chain is only part of the upstream path; the cache is keyed by
        pair address alone.

        Returns:
            Zero or one pair.
        """
        try:
            cached = await self._store.get_pair(pair_id)
            if cached is not None:
                log.info("pairs_cache_hit", operation="get_by_address", pair_id=pair_id, count=1)
                return [cached]

            upstream_pairs = await self._upstream.get_pair(chain_id, pair_id)
            pairs = normalize_pairs(upstream_pairs)
            await self._store.save(pairs)
        except DexCacheError as e:
            log.error(
                "get_by_address_failed",
                chain_id=chain_id,
                pair_id=pair_id,
                error=str(e),
            )
            raise

        log.info("pairs_fetched", operation="get_by_address", pair_id=pair_id, count=len(pairs))
        return pairs

    async def get_by_token(self, chain_id: str, token_address: str) -> list[NormalizedPair]:
        """Get all pairs involving a token on a chain.

        The chain is only part of the upstream path; the token index is
        keyed by token address alone.
        """
        try:
            cached = await self._store.get_by_token(token_address)
            if cached:
                log.info(
                    "pairs_cache_hit",
                    operation="get_by_token",
                    token_address=token_address,
                    count=len(cached),
                )
                return cached

            upstream_pairs = await self._upstream.get_token_pairs(chain_id, token_address)
            pairs = normalize_pairs(upstream_pairs)
            await self._store.save(pairs, token=token_address)
        except DexCacheError as e:
            log.error(
                "get_by_token_failed",
                chain_id=chain_id,
                token_address=token_address,
                error=str(e),
            )
            raise

        log.info(
            "pairs_fetched",
            operation="get_by_token",
            token_address=token_address,
            count=len(pairs),
        )
        return pairs
