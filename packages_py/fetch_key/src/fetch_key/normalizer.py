"""
Fetch key normalization.

A fetch key is an ordered sequence of parts that together identify the data
being requested, e.g. ``["posts", {"_page": 1, "_limit": 10}]``. The canonical
form is a compact JSON string with mapping keys sorted, so structurally equal
keys produce identical strings regardless of field insertion order.
"""
import dataclasses
import json
import logging
from collections.abc import Mapping
from datetime import date, datetime, time as dt_time
from enum import Enum
from typing import Any, Dict, List, Sequence, Set

from pydantic import BaseModel

from .errors import SerializationError

logger = logging.getLogger(__name__)

LOG_PREFIX = "[fetch_key]"

FetchKey = Sequence[Any]
"""Ordered sequence of key parts."""

CanonicalKey = str
"""Deterministic string form of a fetch key."""

_PRIMITIVES = (str, int, bool, type(None))


def _mapping_key(key: Any) -> str:
    """Convert a mapping key to a string the way JSON does."""
    if isinstance(key, Enum):
        return _mapping_key(key.value)
    if isinstance(key, str):
        return key
    if isinstance(key, bool) or key is None:
        return json.dumps(key)
    if isinstance(key, (int, float)):
        return json.dumps(_normalize(key, set()))
    raise SerializationError(
        f"Unsupported mapping key of type {type(key).__name__}", key
    )


def _normalize(part: Any, seen: Set[int]) -> Any:
    """Reduce a key part to JSON-compatible primitives."""
    if isinstance(part, Enum):
        return _normalize(part.value, seen)

    if isinstance(part, float):
        # 1.0 and 1 denote the same value
        return int(part) if part.is_integer() else part

    if isinstance(part, _PRIMITIVES):
        return part

    if isinstance(part, (datetime, date, dt_time)):
        return part.isoformat()

    marker = id(part)
    if marker in seen:
        raise SerializationError("Circular reference in fetch key", part)
    seen.add(marker)
    try:
        if isinstance(part, BaseModel):
            return _normalize(part.model_dump(), seen)

        if dataclasses.is_dataclass(part) and not isinstance(part, type):
            return _normalize(
                {f.name: getattr(part, f.name) for f in dataclasses.fields(part)},
                seen,
            )

        if isinstance(part, Mapping):
            normalized: Dict[str, Any] = {}
            for key, value in part.items():
                name = _mapping_key(key)
                if name in normalized:
                    raise SerializationError(
                        f"Mapping keys collide after conversion: {name!r}", part
                    )
                normalized[name] = _normalize(value, seen)
            return normalized

        if isinstance(part, (list, tuple)):
            return [_normalize(item, seen) for item in part]

        if isinstance(part, (set, frozenset)):
            items = [_normalize(item, seen) for item in part]
            return sorted(items, key=_dumps)
    finally:
        seen.discard(marker)

    raise SerializationError(
        f"Unsupported fetch key part of type {type(part).__name__}", part
    )


def _dumps(value: Any) -> str:
    return json.dumps(
        value, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )


def canonicalize(fetch_key: FetchKey) -> CanonicalKey:
    """
    Convert a fetch key into its canonical string.

    Args:
        fetch_key: Ordered list or tuple of key parts

    Returns:
        Compact JSON string, stable for structurally equal keys

    Raises:
        SerializationError: If the key is not a list/tuple, contains a cycle,
            or holds a part that has no canonical form (functions, sockets...)

    Example:
        canonicalize(["posts", {"y": 2, "x": 1}])
        # '["posts",{"x":1,"y":2}]'
    """
    if not isinstance(fetch_key, (list, tuple)):
        raise SerializationError(
            f"Fetch key must be a list or tuple, got {type(fetch_key).__name__}",
            fetch_key,
        )

    parts: List[Any] = _normalize(fetch_key, set())
    canonical = _dumps(parts)
    logger.debug(f"{LOG_PREFIX} canonicalize: {canonical}")
    return canonical


def keys_equal(left: FetchKey, right: FetchKey) -> bool:
    """Check whether two fetch keys denote the same request."""
    return canonicalize(left) == canonicalize(right)
