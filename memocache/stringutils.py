"""String and JSON helpers."""

from __future__ import annotations

import json

from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum


class GeneralJSONEncoder(json.JSONEncoder):
    """A JSON encoder for the non-json-able types we want to use in cache keys.

    - date/datetime: isoformat string
    - numpy.ndarray: list, with float or int items
    - numpy scalars: the matching python scalar
    - dataclasses: dict, using `asdict()`
    - set/frozenset: list, sorted by repr so equal sets encode the same
    - Enum: its value
    """
    def default(self, obj):
        import numpy as np
        if isinstance(obj, date):
            return obj.isoformat()
        elif isinstance(obj, np.ndarray):
            dtype = float if np.issubdtype(obj.dtype, np.floating) else int
            return obj.astype(dtype).tolist()
        elif isinstance(obj, np.generic):
            return obj.item()
        elif is_dataclass(obj) and not isinstance(obj, type):
            return asdict(obj)
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj, key=repr)
        elif isinstance(obj, Enum):
            return obj.value
        return super().default(obj)
