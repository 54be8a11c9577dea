"""Cache key and expiry constants.

Key formats and TTL are shared with every process using the same Redis
instance and must not change between releases.
"""

from typing import Final

PAIR_KEY_PREFIX: Final[str] = "pair"
QUERY_KEY_PREFIX: Final[str] = "query"
TOKEN_KEY_PREFIX: Final[str] = "token"

CACHE_TTL_SECONDS: Final[int] = 60 * 60  # 1 hour
