from .cacher import Cacher, cached
from .constants import CACHE_MISS, CacheNotFound
from .keyers import Keyer, IdentityKeyer, HashableKeyer, StringKeyer

__all__ = [
    'Cacher',
    'cached',
    'CACHE_MISS',
    'CacheNotFound',
    'Keyer',
    'IdentityKeyer',
    'HashableKeyer',
    'StringKeyer',
]
