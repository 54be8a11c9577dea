"""DexScreener upstream API client and response models."""

from dexcache.services.dexscreener.client import DexScreenerClient
from dexcache.services.dexscreener.models import UpstreamPair

__all__ = ["DexScreenerClient", "UpstreamPair"]
