"""Pair normalization and cached lookups."""

from dexcache.services.pairs.lookup import PairLookupService
from dexcache.services.pairs.normalizer import normalize_pair, normalize_pairs

__all__ = ["PairLookupService", "normalize_pair", "normalize_pairs"]
