from __future__ import annotations

from typing import TypeVar

# type for cache keys
KeyT = TypeVar('KeyT')

# type for wrapped function inputs and outputs
ArgT = TypeVar('ArgT')
ValueT = TypeVar('ValueT')

CACHE_MISS = object()  # Sentinel value for cache misses

class CacheNotFound(KeyError):
    """Exception raised when a cache key is not found."""
    def __init__(self, key: KeyT):
        super().__init__(f"Cache key '{key}' not found")
        self.key = key
