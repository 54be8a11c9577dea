"""Pair search API endpoints."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Path, Query

from dexcache.api.dependencies import LookupServiceDep
from dexcache.core.exceptions import ValidationError
from dexcache.models.pair import NormalizedPair

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

ChainIdParam = Annotated[
    str,
    Path(
        description="Chain identifier (e.g. solana, ethereum)",
        examples=["solana"],
    ),
]


@router.get(
    "",
    response_model=list[NormalizedPair],
    summary="Search for pairs matching query",
    response_description="List of pairs",
)
async def search_pairs(
    service: LookupServiceDep,
    q: Annotated[
        str | None,
        Query(description="Token name, symbol or address", examples=["SOL/USDC", "XRP"]),
    ] = None,
) -> list[NormalizedPair]:
    """Search pairs by free text. Responds 400 when `q` is missing or blank."""
    if q is None or not q.strip():
        raise ValidationError('Query parameter "q" is required')

    log.info("search_pairs_requested", query=q)
    return await service.search_by_query(q)


@router.get(
    "/pair/{chain_id}/{pair_id}",
    response_model=list[NormalizedPair],
    summary="Get detailed pair info",
    response_description="Pair details",
)
async def get_pair_by_address(
    service: LookupServiceDep,
    chain_id: ChainIdParam,
    pair_id: Annotated[
        str,
        Path(
            description="Pair address",
            examples=["2uf4xh61rdwxng9woyxsvqp7zua6klfpb3nvnrqeoisd"],
        ),
    ],
) -> list[NormalizedPair]:
    """Get a pair by chain and address (zero or one element)."""
    log.info("pair_requested", chain_id=chain_id, pair_id=pair_id)
    return await service.get_by_address(chain_id, pair_id)


@router.get(
    "/tokens/{chain_id}/{token_address}",
    response_model=list[NormalizedPair],
    summary="Search trading pairs by token address",
    response_description="List of pairs",
)
async def get_pairs_by_token(
    service: LookupServiceDep,
    chain_id: ChainIdParam,
    token_address: Annotated[
        str,
        Path(
            description="Token address",
            examples=["0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270"],
        ),
    ],
) -> list[NormalizedPair]:
    """Get all pairs that involve a token."""
    log.info("token_pairs_requested", chain_id=chain_id, token_address=token_address)
    return await service.get_by_token(chain_id, token_address)
