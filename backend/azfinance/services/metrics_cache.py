from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar


logger = logging.getLogger("azfinance.cache")

T = TypeVar("T")


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    max_entries: int


def fingerprint(*parts: Any) -> str:
    """Stable key for a set of input collections.

    Inputs are frozen dataclasses whose reprs cover every field, so two
    snapshots with equal content share a key regardless of object identity.
    """
    digest = hashlib.sha256()
    for part in parts:
        digest.update(repr(part).encode("utf-8"))
        digest.update(b"\x1f")
    return digest.hexdigest()


class MetricsCache:
    """LRU memo for computed snapshots, invalidated by the caller on data changes."""

    def __init__(self, max_entries: int = 128) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1.")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self._hits += 1
                logger.debug("Cache hit %s", key[:12])
                return self._entries[key]
            self._misses += 1

        value = compute()

        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        logger.debug("Cached snapshot %s", key[:12])
        return value

    def invalidate(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
        logger.info("Metrics cache invalidated (%d entries dropped)", dropped)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                size=len(self._entries),
                max_entries=self.max_entries,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
