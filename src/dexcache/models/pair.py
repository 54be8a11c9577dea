"""Normalized pair model served to clients and stored in the cache.

Serialized with camelCase keys (``model_dump(by_alias=True)``); the same
JSON is written to Redis and returned by the API.
"""

from pydantic import BaseModel, ConfigDict, Field


class TokenRef(BaseModel):
    """Token identity within a pair."""

    address: str
    name: str
    symbol: str


class Liquidity(BaseModel):
    """Pool liquidity. All amounts are zero when the upstream omits them."""

    usd: float = 0
    base: float = 0
    quote: float = 0


class Social(BaseModel):
    """Social link of the pair's project."""

    type: str
    url: str


class NormalizedPair(BaseModel):
    """Stable representation of a DEX trading pair.

    Attributes:
        blockchain: Chain identifier (e.g. "solana").
        dex: DEX identifier (e.g. "raydium").
        pair_address: Pair address, also the cache key material.
        base_token: Base token.
        quote_token: Quote token.
        liquidity: Pool liquidity.
        volume24h: 24h trading volume in USD.
        mcap: Market capitalization in USD.
        pair_created_at: Creation timestamp (Unix milliseconds).
        trades24h: 24h buys plus 24h sells.
        usd_price: USD price, decimal string kept verbatim.
        price_in_base_token: Native price, decimal string kept verbatim.
        price_change_percent24h: 24h price change percent.
        logo: Image URL, empty when unknown.
        socials: Social links, empty when unknown.
    """

    model_config = ConfigDict(populate_by_name=True)

    blockchain: str
    dex: str
    pair_address: str = Field(alias="pairAddress")
    base_token: TokenRef = Field(alias="baseToken")
    quote_token: TokenRef = Field(alias="quoteToken")
    liquidity: Liquidity = Field(default_factory=Liquidity)
    volume24h: float
    mcap: float
    pair_created_at: int = Field(alias="pairCreatedAt")
    trades24h: int
    usd_price: str = Field(alias="usdPrice")
    price_in_base_token: str = Field(alias="priceInBaseToken")
    price_change_percent24h: float = Field(default=0, alias="priceChangePercent24h")
    logo: str = ""
    socials: list[Social] = Field(default_factory=list)
