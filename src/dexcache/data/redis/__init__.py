"""Redis connection and pair cache store."""

from dexcache.data.redis.client import RedisClient
from dexcache.data.redis.pair_cache import PairCacheStore

__all__ = ["PairCacheStore", "RedisClient"]
