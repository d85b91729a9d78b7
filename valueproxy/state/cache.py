from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from ..models import CacheEntry


def cache_key(user_id: str) -> str:
    return f"u:{user_id}"


class ValueCache:
    """
    In-memory TTL store for finished estimates. Staleness is checked on read,
    writes simply overwrite; there is no lock and no background eviction.
    """

    def __init__(self, ttl: float = 3600, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self._clock = clock
        self._data: Dict[str, CacheEntry] = {}

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._data.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl:
            self._data.pop(key, None)
            return None
        return entry

    def set(self, key: str, entry: CacheEntry) -> None:
        self._data[key] = entry

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def age(self, key: str) -> Optional[float]:
        entry = self._data.get(key)
        if entry is None:
            return None
        return self._clock() - entry.timestamp

    def __len__(self):
        return len(self._data)
