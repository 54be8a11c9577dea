"""Mock responses for DexScreener API.

Provides payloads and pytest fixtures to intercept DexScreener API calls.
Uses respx library for httpx mocking.

Usage:
    def test_something(mock_dexscreener):
        # DexScreener API calls are now mocked
        ...
        assert mock_dexscreener["search"].call_count == 1
"""

import copy
from collections.abc import Generator
from typing import Any

import pytest
import respx
from httpx import Response

BASE_URL = "https://api.dexscreener.com"
SEARCH_URL = f"{BASE_URL}/latest/dex/search"
PAIR_URL_REGEX = r"https://api\.dexscreener\.com/latest/dex/pairs/[^/]+/[^/?]+"
TOKENS_URL_REGEX = r"https://api\.dexscreener\.com/tokens/v1/[^/]+/[^/?]+"

SOL_USDC_PAIR_ADDRESS = "58oQChx4yWmvKdwLLZzBi4ChoCc2fqCUWBkwMihLYQo2"
SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

# =============================================================================
# Mock Response Data
# =============================================================================

# Fully populated pair, as returned by every endpoint
MOCK_SOL_USDC_PAIR: dict[str, Any] = {
    "chainId": "solana",
    "dexId": "raydium",
    "url": f"https://dexscreener.com/solana/{SOL_USDC_PAIR_ADDRESS.lower()}",
    "pairAddress": SOL_USDC_PAIR_ADDRESS,
    "labels": ["v4"],
    "baseToken": {"address": SOL_MINT, "name": "Wrapped SOL", "symbol": "SOL"},
    "quoteToken": {"address": USDC_MINT, "name": "USD Coin", "symbol": "USDC"},
    "priceNative": "180.5012",
    "priceUsd": "180.50120000000000000001",
    "txns": {
        "m5": {"buys": 40, "sells": 35},
        "h1": {"buys": 510, "sells": 480},
        "h6": {"buys": 3100, "sells": 2950},
        "h24": {"buys": 12000, "sells": 11500},
    },
    "volume": {"h24": 150_000_000.5, "h6": 35_000_000, "h1": 8_000_000, "m5": 600_000},
    "priceChange": {"m5": 0.1, "h1": -0.4, "h6": 1.2, "h24": 3.25},
    "liquidity": {"usd": 50_000_000.0, "base": 140_000, "quote": 25_000_000},
    "fdv": 95_000_000_000,
    "marketCap": 85_000_000_000,
    "pairCreatedAt": 1640000000000,
    "info": {
        "imageUrl": "https://cdn.dexscreener.com/sol.png",
        "websites": [{"label": "Website", "url": "https://solana.com"}],
        "socials": [
            {"type": "twitter", "url": "https://x.com/solana"},
            {"type": "telegram", "url": "https://t.me/solana"},
        ],
    },
}

# Freshly created pair: no liquidity, no profile, no price change yet
MOCK_BARE_PAIR: dict[str, Any] = {
    "chainId": "solana",
    "dexId": "pumpswap",
    "pairAddress": "BareP4irAddre55xxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    "baseToken": {
        "address": "Bare7okenMintxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
        "name": "Bare Token",
        "symbol": "BARE",
    },
    "quoteToken": {"address": SOL_MINT, "name": "Wrapped SOL", "symbol": "SOL"},
    "priceNative": "0.000000012",
    "priceUsd": "0.0000021",
    "txns": {"h24": {"buys": 3, "sells": 1}},
    "volume": {"h24": 42.0},
    "marketCap": 2100,
    "pairCreatedAt": 1700000000000,
}


def make_pair(**overrides: Any) -> dict[str, Any]:
    """Return a deep copy of the SOL/USDC pair with top-level overrides.

    Keys set to None are removed, to model fields the upstream omits.
    """
    pair = copy.deepcopy(MOCK_SOL_USDC_PAIR)
    for key, value in overrides.items():
        if value is None:
            pair.pop(key, None)
        else:
            pair[key] = value
    return pair


def search_response(*pairs: dict[str, Any]) -> dict[str, Any]:
    """Envelope used by /latest/dex/search."""
    return {"schemaVersion": "1.0.0", "pairs": list(pairs)}


def pair_response(*pairs: dict[str, Any]) -> dict[str, Any]:
    """Envelope used by /latest/dex/pairs/{chainId}/{pairId}."""
    return {"schemaVersion": "1.0.0", "pairs": list(pairs) or None}


# =============================================================================
# Pytest Fixtures
# =============================================================================


@pytest.fixture
def mock_dexscreener() -> Generator[respx.MockRouter, None, None]:
    """Mock the three DexScreener endpoints with the SOL/USDC pair.

    Named routes:
        - "search": GET /latest/dex/search
        - "pair":   GET /latest/dex/pairs/{chainId}/{pairId}
        - "tokens": GET /tokens/v1/{chainId}/{tokenAddress}

    Yields:
        respx.MockRouter: The mock router for call assertions.
    """
    with respx.mock(assert_all_called=False) as router:
        router.get(SEARCH_URL, name="search").mock(
            return_value=Response(200, json=search_response(MOCK_SOL_USDC_PAIR))
        )
        router.get(url__regex=PAIR_URL_REGEX, name="pair").mock(
            return_value=Response(200, json=pair_response(MOCK_SOL_USDC_PAIR))
        )
        router.get(url__regex=TOKENS_URL_REGEX, name="tokens").mock(
            return_value=Response(200, json=[MOCK_SOL_USDC_PAIR, MOCK_BARE_PAIR])
        )

        yield router


@pytest.fixture
def mock_dexscreener_empty() -> Generator[respx.MockRouter, None, None]:
    """Mock DexScreener API with empty responses (null/[] pairs)."""
    with respx.mock(assert_all_called=False) as router:
        router.get(SEARCH_URL, name="search").mock(
            return_value=Response(200, json={"schemaVersion": "1.0.0", "pairs": []})
        )
        router.get(url__regex=PAIR_URL_REGEX, name="pair").mock(
            return_value=Response(200, json={"schemaVersion": "1.0.0", "pairs": None})
        )
        router.get(url__regex=TOKENS_URL_REGEX, name="tokens").mock(
            return_value=Response(200, json=[])
        )

        yield router


@pytest.fixture
def mock_dexscreener_error() -> Generator[respx.MockRouter, None, None]:
    """Mock DexScreener API with 500 responses on every endpoint."""
    with respx.mock(assert_all_called=False) as router:
        error = Response(500, json={"error": "Internal Server Error"})
        router.get(SEARCH_URL, name="search").mock(return_value=error)
        router.get(url__regex=PAIR_URL_REGEX, name="pair").mock(return_value=error)
        router.get(url__regex=TOKENS_URL_REGEX, name="tokens").mock(return_value=error)

        yield router
