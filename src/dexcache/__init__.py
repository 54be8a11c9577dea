"""DexCache - read-through caching gateway for DexScreener pair data."""

__version__ = "0.1.0"
