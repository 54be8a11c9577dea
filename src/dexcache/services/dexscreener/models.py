"""Pydantic models for DexScreener API responses.

This module defines data models for parsing DexScreener API responses.
Only the fields the gateway reads are declared; unknown keys are ignored,
so malformed values in fields nobody reads cannot reject a response.
Everything the upstream may omit is Optional and defaulted later by the
normalizer.

API Documentation: https://docs.dexscreener.com/api/reference
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TokenInfo(BaseModel):
    """Base or quote token of a trading pair.

    Attributes:
        address: Token contract/mint address.
        name: Token name.
        symbol: Token ticker symbol.
    """

    address: str
    name: str
    symbol: str


class TransactionStats(BaseModel):
    """Buy and sell counts for one time window."""

    buys: int
    sells: int


class TransactionWindows(BaseModel):
    """Transaction counts. Only the 24h window is read."""

    h24: TransactionStats


class VolumeWindows(BaseModel):
    """Trading volume in USD. Only the 24h window is read."""

    h24: float


class PriceChangeWindows(BaseModel):
    """Price change percentage. The 24h window may be missing."""

    h24: float | None = None


class LiquidityInfo(BaseModel):
    """Liquidity information.

    Attributes:
        usd: Total liquidity in USD.
        base: Liquidity in base token.
        quote: Liquidity in quote token.
    """

    usd: float | None = None
    base: float | None = None
    quote: float | None = None


class SocialLink(BaseModel):
    """Project social link (e.g. twitter, telegram)."""

    type: str
    url: str


class PairInfo(BaseModel):
    """Optional project metadata attached to a pair."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str | None = Field(default=None, alias="imageUrl")
    socials: list[SocialLink] | None = None


class UpstreamPair(BaseModel):
    """Trading pair as returned by DexScreener, limited to the fields read.

    Attributes:
        chain_id: Blockchain identifier (e.g., "solana", "ethereum").
        dex_id: DEX identifier (e.g., "raydium", "orca").
        pair_address: Trading pair contract address.
        base_token: Base token information.
        quote_token: Quote token information.
        price_native: Price in quote token, decimal string.
        price_usd: Price in USD, decimal string.
        txns: Buy/sell counts per window.
        volume: Trading volume per window.
        price_change: Price change percentage per window, if reported.
        liquidity: Pool liquidity, if reported.
        market_cap: Market capitalization in USD.
        pair_created_at: Pair creation timestamp (Unix milliseconds).
        info: Project metadata, if the pair has a profile.
    """

    model_config = ConfigDict(populate_by_name=True)

    chain_id: str = Field(alias="chainId")
    dex_id: str = Field(alias="dexId")
    pair_address: str = Field(alias="pairAddress")
    base_token: TokenInfo = Field(alias="baseToken")
    quote_token: TokenInfo = Field(alias="quoteToken")
    price_native: str = Field(alias="priceNative")
    price_usd: str = Field(alias="priceUsd")
    txns: TransactionWindows
    volume: VolumeWindows
    price_change: PriceChangeWindows | None = Field(default=None, alias="priceChange")
    liquidity: LiquidityInfo | None = None
    market_cap: float = Field(alias="marketCap")
    pair_created_at: int = Field(alias="pairCreatedAt")
    info: PairInfo | None = None


class SearchResponse(BaseModel):
    """Response from GET /latest/dex/search."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str | None = Field(default=None, alias="schemaVersion")
    pairs: list[UpstreamPair] | None = None


class PairResponse(BaseModel):
    """Response from GET /latest/dex/pairs/{chainId}/{pairId}."""

    model_config = ConfigDict(populate_by_name=True)

    schema_version: str | None = Field(default=None, alias="schemaVersion")
    pairs: list[UpstreamPair] | None = None


# GET /tokens/v1/{chainId}/{tokenAddresses} returns a bare array
TokenPairsResponse = TypeAdapter(list[UpstreamPair] | None)
