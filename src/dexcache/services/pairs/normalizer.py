"""Transform DexScreener pairs into NormalizedPair records.

Pure functions: no I/O, no state. Every optional upstream field is
defaulted here and nowhere else.
"""

from collections.abc import Sequence

from dexcache.models.pair import Liquidity, NormalizedPair, Social, TokenRef
from dexcache.services.dexscreener.models import (
    LiquidityInfo,
    PairInfo,
    PriceChangeWindows,
    TokenInfo,
    UpstreamPair,
)


def normalize_pairs(pairs: Sequence[UpstreamPair]) -> list[NormalizedPair]:
    """Normalize upstream pairs, preserving order and length."""
    return [normalize_pair(pair) for pair in pairs]


def normalize_pair(pair: UpstreamPair) -> NormalizedPair:
    """Normalize a single upstream pair."""
    h24 = pair.txns.h24

    return NormalizedPair(
        blockchain=pair.chain_id,
        dex=pair.dex_id,
        pair_address=pair.pair_address,
        base_token=_token(pair.base_token),
        quote_token=_token(pair.quote_token),
        liquidity=_liquidity(pair.liquidity),
        volume24h=pair.volume.h24,
        mcap=pair.market_cap,
        pair_created_at=pair.pair_created_at,
        trades24h=h24.buys + h24.sells,
        usd_price=pair.price_usd,
        price_in_base_token=pair.price_native,
        price_change_percent24h=_price_change_24h(pair.price_change),
        logo=_logo(pair.info),
        socials=_socials(pair.info),
    )


def _token(token: TokenInfo) -> TokenRef:
    return TokenRef(address=token.address, name=token.name, symbol=token.symbol)


def _liquidity(liquidity: LiquidityInfo | None) -> Liquidity:
    match liquidity:
        case LiquidityInfo(usd=usd, base=base, quote=quote):
            return Liquidity(usd=usd or 0, base=base or 0, quote=quote or 0)
        case _:
            return Liquidity()


def _price_change_24h(price_change: PriceChangeWindows | None) -> float:
    match price_change:
        case PriceChangeWindows(h24=float() as change):
            return change
        case _:
            return 0


def _logo(info: PairInfo | None) -> str:
    match info:
        case PairInfo(image_url=str() as image_url):
            return image_url
        case _:
            return ""


def _socials(info: PairInfo | None) -> list[Social]:
    match info:
        case PairInfo(socials=list() as socials):
            return [Social(type=s.type, url=s.url) for s in socials]
        case _:
            return []
