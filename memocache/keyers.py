from __future__ import annotations

import json

from abc import ABC, abstractmethod
from typing import Any, Generic

from memocache.constants import KeyT
from memocache.stringutils import GeneralJSONEncoder

def _check_hashable(obj: Any) -> None:
    """Raises TypeError if `obj` can't be used as a dict key."""
    try:
        hash(obj)
    except TypeError:
        raise TypeError(f"Cannot use unhashable {type(obj).__name__} as a cache key") from None

class Keyer(ABC, Generic[KeyT]):
    """Base class for converting the cached function's argument into a cache key."""
    @abstractmethod
    def make_key(self, arg: Any) -> KeyT:
        """Convert the function argument into a cache key.

        Args:
            arg: The single argument the cached function is called with

        Returns:
            A hashable key suitable for use in a dict
        """
        pass


class IdentityKeyer(Keyer[Any]):
    """Uses the argument itself as the key, so it must be hashable."""
    def make_key(self, arg: Any) -> Any:
        _check_hashable(arg)
        return arg


class HashableKeyer(Keyer[Any]):
    """Converts the argument into an immutable, hashable key.

    Handles nested data structures by converting:
    - lists/tuples → tuples
    - sets → frozensets
    - dicts → (dict, frozenset of (key, value) items), with keys converted like values
    - other objects → themselves, if hashable

    Dict keys keep their type, so `{1: 'a'}` and `{'1': 'a'}` get different keys. The `dict` tag
    keeps a dict apart from a set of pairs.
    """
    def make_key(self, arg: Any) -> Any:
        return self._make_hashable(arg)

    def _make_hashable(self, obj: Any) -> Any:
        """Recursively convert an object into a hashable form."""
        # Already hashable types
        if isinstance(obj, (str, int, float, bool, bytes, type(None))):
            return obj
        # Convert sequences
        if isinstance(obj, (list, tuple)):
            return tuple(self._make_hashable(x) for x in obj)
        # Convert mappings
        if isinstance(obj, dict):
            return (dict, frozenset(
                (self._make_hashable(k), self._make_hashable(v)) for k, v in obj.items()
            ))
        # Convert sets
        if isinstance(obj, (set, frozenset)):
            return frozenset(self._make_hashable(x) for x in obj)
        _check_hashable(obj)
        return obj


def _has_non_str_keys(obj: Any) -> bool:
    """Whether `obj` contains a dict (at any depth) with a key that isn't a string.

    `json` silently stringifies such keys, so they'd collide with their string forms.
    """
    if isinstance(obj, dict):
        return any(not isinstance(k, str) or _has_non_str_keys(v) for k, v in obj.items())
    if isinstance(obj, (list, tuple, set, frozenset)):
        return any(_has_non_str_keys(x) for x in obj)
    return False

def _stable_str(key: Any) -> str:
    """String form of a `HashableKeyer` key, with set items sorted so equal keys match."""
    if isinstance(key, tuple):
        return '(' + ', '.join(_stable_str(x) for x in key) + ')'
    if isinstance(key, frozenset):
        return '{' + ', '.join(sorted(_stable_str(x) for x in key)) + '}'
    if isinstance(key, type):
        return key.__name__
    return repr(key)


class StringKeyer(Keyer[str]):
    """Converts the argument into a string key.

    This uses `json.dumps(arg, sort_keys=True)` with `GeneralJSONEncoder`, so numpy arrays,
    dataclasses, datetimes, etc. all work. Arguments are keyed by their JSON form, so e.g. a list
    and a tuple with the same items share a key.

    If the argument is not JSON serializable, or has dicts with non-string keys, we fall back to
    a sorted string form of `HashableKeyer`'s key.
    """
    def __init__(self):
        self._tuple_maker = HashableKeyer()

    def make_key(self, arg: Any) -> str:
        if not _has_non_str_keys(arg):
            try:
                return json.dumps(arg, sort_keys=True, cls=GeneralJSONEncoder, ensure_ascii=False)
            except TypeError:
                pass
        return _stable_str(self._tuple_maker.make_key(arg))
