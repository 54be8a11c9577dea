"""DexScreener API constants."""

from typing import Final

SERVICE_NAME: Final[str] = "dexscreener"

# Endpoint paths
SEARCH_PATH: Final[str] = "/latest/dex/search"
PAIR_PATH: Final[str] = "/latest/dex/pairs/{chain_id}/{pair_id}"
TOKEN_PAIRS_PATH: Final[str] = "/tokens/v1/{chain_id}/{token_address}"
