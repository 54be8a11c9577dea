"""DexScreener API client for pair lookups.

Each endpoint has its own response envelope, so each method decodes its
own payload rather than sharing a generic decoder:

    - GET /latest/dex/search?q=...            -> {schemaVersion, pairs}
    - GET /latest/dex/pairs/{chain}/{pair}    -> {schemaVersion, pairs}
    - GET /tokens/v1/{chain}/{tokenAddresses} -> bare list of pairs

API Documentation: https://docs.dexscreener.com/api/reference
Rate Limits: ~300 requests/minute (no auth required)
"""

from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from dexcache.config.settings import Settings, get_settings
from dexcache.constants.dexscreener import (
    PAIR_PATH,
    SEARCH_PATH,
    SERVICE_NAME,
    TOKEN_PAIRS_PATH,
)
from dexcache.core.exceptions import ExternalServiceError
from dexcache.services.base import BaseAPIClient
from dexcache.services.dexscreener.models import (
    PairResponse,
    SearchResponse,
    TokenPairsResponse,
    UpstreamPair,
)

log = structlog.get_logger(__name__)


class DexScreenerClient(BaseAPIClient):
    """DexScreener API client.

    Example:
        client = DexScreenerClient()
        try:
            pairs = await client.search_pairs("SOL/USDC")
        finally:
            await client.close()
    """

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        super().__init__(
            service=SERVICE_NAME,
            base_url=settings.dexscreener_base_url,
            timeout=settings.dexscreener_timeout,
            circuit_breaker_threshold=settings.circuit_breaker_threshold,
            circuit_breaker_cooldown=settings.circuit_breaker_cooldown,
        )
        log.info("dexscreener_client_initialized", base_url=self.base_url)

    async def search_pairs(self, query: str) -> list[UpstreamPair]:
        """Search pairs by free text (token name, symbol, address or pair).

        Args:
            query: Raw search string, passed through unchanged.

        Returns:
            Matching pairs, empty when the upstream reports none.

        Raises:
            ExternalServiceError: On transport failure or malformed body.
        """
        response = await self.get(SEARCH_PATH, params={"q": query})
        payload = _json_body(response, SEARCH_PATH)
        try:
            envelope = SearchResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise _malformed(SEARCH_PATH, e) from e

        pairs = envelope.pairs or []
        log.debug("search_pairs_fetched", query=query, count=len(pairs))
        return pairs

    async def get_pair(self, chain_id: str, pair_id: str) -> list[UpstreamPair]:
        """Fetch a single pair by chain and pair address.

        Returns:
            Zero or one pair (the upstream wraps it in a list).
        """
        path = PAIR_PATH.format(chain_id=_segment(chain_id), pair_id=_segment(pair_id))
        response = await self.get(path)
        payload = _json_body(response, path)
        try:
            envelope = PairResponse.model_validate(payload)
        except PydanticValidationError as e:
            raise _malformed(path, e) from e

        pairs = envelope.pairs or []
        log.debug("pair_fetched", chain_id=chain_id, pair_id=pair_id, count=len(pairs))
        return pairs

    async def get_token_pairs(self, chain_id: str, token_address: str) -> list[UpstreamPair]:
        """Fetch all pairs involving a token.

        Args:
            chain_id: Chain identifier (e.g. "solana").
            token_address: Token address.

        Returns:
            Pairs for the token(s); empty when the upstream has none.
        """
        path = TOKEN_PAIRS_PATH.format(
            chain_id=_segment(chain_id),
            token_address=_segment(token_address),
        )
        response = await self.get(path)
        payload = _json_body(response, path)
        try:
            pairs = TokenPairsResponse.validate_python(payload)
        except PydanticValidationError as e:
            raise _malformed(path, e) from e

        pairs = pairs or []
        log.debug(
            "token_pairs_fetched",
            chain_id=chain_id,
            token_address=token_address,
            count=len(pairs),
        )
        return pairs


def _segment(value: str) -> str:
    """Percent-encode one path segment so it cannot alter the upstream URL."""
    return quote(value, safe="")


def _json_body(response: httpx.Response, path: str) -> Any:
    """Decode a JSON body, reporting invalid JSON as an upstream failure."""
    try:
        return response.json()
    except ValueError as e:
        raise _malformed(path, e) from e


def _malformed(path: str, error: Exception) -> ExternalServiceError:
    log.warning("dexscreener_malformed_response", path=path, error=str(error))
    return ExternalServiceError(
        service=SERVICE_NAME,
        message=f"Malformed response from {path}: {error}",
    )
