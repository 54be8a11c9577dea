"""Shared pytest fixtures for DexCache tests.

This module provides fixtures for:
- Test environment and settings cache isolation
- An in-memory Redis wired into RedisClient / PairCacheStore
- DexScreener payloads as raw dicts and parsed models
- DexScreener API mocking (re-exported from tests.fixtures)
"""

import os
from collections.abc import Generator
from typing import Any

import pytest

from dexcache.config.settings import get_settings
from dexcache.data.redis.client import RedisClient
from dexcache.data.redis.pair_cache import PairCacheStore
from dexcache.models.pair import NormalizedPair
from dexcache.services.dexscreener.models import UpstreamPair
from dexcache.services.pairs.normalizer import normalize_pair
from tests.fixtures.dexscreener_mock import (  # noqa: F401
    MOCK_BARE_PAIR,
    make_pair,
    mock_dexscreener,
    mock_dexscreener_empty,
    mock_dexscreener_error,
)
from tests.fixtures.redis_mock import FakeRedis

# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Pin settings that a local .env could otherwise override."""
    original_env = os.environ.copy()

    os.environ["DEXSCREENER_BASE_URL"] = "https://api.dexscreener.com"
    os.environ["REDIS_HOST"] = "localhost"
    os.environ["DEBUG"] = "false"

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Make every test read settings fresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# Redis Fixtures
# =============================================================================


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Provide an empty in-memory Redis."""
    return FakeRedis()


@pytest.fixture
def redis_client(fake_redis: FakeRedis) -> RedisClient:
    """Provide a RedisClient already connected to the in-memory Redis."""
    client = RedisClient()
    client._client = fake_redis  # type: ignore[assignment]
    return client


@pytest.fixture
def cache_store(redis_client: RedisClient) -> PairCacheStore:
    """Provide a PairCacheStore backed by the in-memory Redis."""
    return PairCacheStore(redis_client)


# =============================================================================
# Pair Fixtures
# =============================================================================


@pytest.fixture
def upstream_pair_payload() -> dict[str, Any]:
    """Raw SOL/USDC pair as DexScreener returns it."""
    return make_pair()


@pytest.fixture
def upstream_pair(upstream_pair_payload: dict[str, Any]) -> UpstreamPair:
    """Parsed SOL/USDC pair."""
    return UpstreamPair.model_validate(upstream_pair_payload)


@pytest.fixture
def bare_upstream_pair() -> UpstreamPair:
    """Parsed pair with every optional field missing."""
    return UpstreamPair.model_validate(MOCK_BARE_PAIR)


@pytest.fixture
def normalized_pair(upstream_pair: UpstreamPair) -> NormalizedPair:
    """Normalized SOL/USDC pair."""
    return normalize_pair(upstream_pair)
