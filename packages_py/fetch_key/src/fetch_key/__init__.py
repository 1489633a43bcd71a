"""
Canonical fetch key normalization for cache indexing and change detection.
"""
from .errors import SerializationError
from .normalizer import (
    FetchKey,
    CanonicalKey,
    canonicalize,
    keys_equal,
)


__all__ = [
    "SerializationError",
    "FetchKey",
    "CanonicalKey",
    "canonicalize",
    "keys_equal",
]

__version__ = "1.0.0"
