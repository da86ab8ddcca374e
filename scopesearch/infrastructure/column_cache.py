"""Column Cache — process-wide get-or-compute store for searchable column sets.

Invariants:
    - remember_forever computes at most once per key until forget()/flush()
    - The stored object is returned as-is: repeated reads are reference-identical
    - No expiration policy

Design Decisions:
    - Plain dict, no lock: values are deterministic for a given schema, so a
      racing first write stores an identical result
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryColumnCache:
    """Dict-backed implementation of the ColumnCache protocol."""

    def __init__(self):
        self._store: dict[str, Any] = {}

    def remember_forever(self, key: str, compute: Callable[[], T]) -> T:
        try:
            return self._store[key]
        except KeyError:
            pass
        logger.debug("Column cache miss", extra={"cache_key": key})
        value = compute()
        self._store[key] = value
        return value

    def forget(self, key: str) -> bool:
        """Drop one entry; True when something was stored under key."""
        removed = self._store.pop(key, None) is not None
        if removed:
            logger.info("Column cache entry forgotten", extra={"cache_key": key})
        return removed

    def flush(self) -> None:
        self._store.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._store
