"""A memoizing cache around a single-argument function.

The `Cacher` holds the function and a dict from keys to previously computed results. Calling
`value(arg)` (or the cacher itself) returns the stored result if we've seen the argument before,
and otherwise calls the function, stores the result and returns it. Entries are never removed.

Note that this is NOT thread-safe: the lookup and the insert are separate steps, so if you share a
cacher between threads, hold a lock around each call.
"""

from __future__ import annotations

import logging

from functools import update_wrapper
from typing import Any, Callable, Generic, Iterator

from memocache.constants import ArgT, ValueT, CACHE_MISS, CacheNotFound
from memocache.keyers import Keyer, IdentityKeyer


logger = logging.getLogger(__name__)

class Cacher(Generic[ArgT, ValueT]):
    """Memoizes a single-argument function in memory.

    Once `value(arg)` has returned, every later call with an equal argument returns the very same
    stored object without calling the function again, even if the function is non-deterministic.
    If the function raises, the exception propagates and nothing is stored, so the next call for
    that argument tries again.
    """
    def __init__(self,
                 fn: Callable[[ArgT], ValueT],
                 *,
                 keyer: Keyer|None = None,
                 name: str|None = None):
        if not callable(fn):
            raise TypeError(f"Cacher needs a callable, not {type(fn).__name__}")
        self.fn = fn
        self.keyer = keyer or IdentityKeyer()
        self.name = name or getattr(fn, '__qualname__', None) or repr(fn)
        self._cache: dict[Any, ValueT] = {}
        self.stats: dict[str, int] = {
            'hits': 0,
            'misses': 0,
            'errors': 0,
        }

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} {self.name} ({len(self)} entries)>'

    def _to_key(self, arg: ArgT) -> Any:
        """Convert the function argument to a cache key using the keyer."""
        return self.keyer.make_key(arg)

    def value(self, arg: ArgT) -> ValueT:
        """Returns the result of our function on `arg`, computing and storing it on first use."""
        key = self._to_key(arg)
        result = self._cache.get(key, CACHE_MISS)
        if result is not CACHE_MISS:
            self.stats['hits'] += 1
            return result
        # Not in cache, call function
        self.stats['misses'] += 1
        logger.debug(f'{self.name}: cache miss for {key!r}, computing')
        try:
            result = self.fn(arg)
        except Exception as e:
            self.stats['errors'] += 1
            logger.debug(f'{self.name}: not caching {key!r} since fn raised {e!r}')
            raise
        self._cache[key] = result
        return result

    def __call__(self, arg: ArgT) -> ValueT:
        """Call our cached function with the given argument."""
        return self.value(arg)

    def get(self, arg: ArgT) -> ValueT:
        """Returns the stored value for `arg` without computing it.

        Raises `CacheNotFound` if `arg` hasn't been computed yet.
        """
        key = self._to_key(arg)
        result = self._cache.get(key, CACHE_MISS)
        if result is CACHE_MISS:
            raise CacheNotFound(key)
        return result

    def __contains__(self, arg: ArgT) -> bool:
        return self._to_key(arg) in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def iter_keys(self) -> Iterator[Any]:
        """Iterate over all keys in the cache."""
        yield from self._cache.keys()

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        `misses` is the number of times the function was called, and `errors` the number of
        those calls that raised.
        """
        return self.stats.copy()


def cached(keyer: Keyer|None = None) -> Callable[[Callable[[ArgT], ValueT]], Cacher[ArgT, ValueT]]:
    """Returns a decorator that wraps a single-argument function in a `Cacher`.

    The returned cacher keeps the function's name, docstring, etc.

        @cached()
        def slow_square(x):
            ...
    """
    def decorator(func: Callable[[ArgT], ValueT]) -> Cacher[ArgT, ValueT]:
        cacher = Cacher(func, keyer=keyer)
        update_wrapper(cacher, func)
        return cacher
    return decorator
