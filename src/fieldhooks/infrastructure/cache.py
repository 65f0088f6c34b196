"""In-process memo cache.

Scoped to the lifetime of the owning :class:`Site`. Writes are
idempotent for the callers that use it (every worker computes the same
value for the same key), so last-writer-wins is fine.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any


class MemoryCache:
    """Dict-backed cache with explicit miss detection."""

    def __init__(self) -> None:
        self._data: dict[Hashable, Any] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._data

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: Hashable, value: Any) -> Any:
        """Store *value* under *key* and return it."""
        self._data[key] = value
        return value

    def __len__(self) -> int:
        return len(self._data)
