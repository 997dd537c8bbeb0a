"""State stores used during a link check run."""

from .result_cache import CacheHit, ResultCache, shared_cache

__all__ = ["CacheHit", "ResultCache", "shared_cache"]
