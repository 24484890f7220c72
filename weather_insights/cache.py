from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """In-process expiring cache shared by concurrent requests.

    Every dict access is serialised through a lock. ``get_or_fetch`` does not
    hold the lock while fetching, so two concurrent misses for the same key
    both fetch and the last writer wins.
    """

    def __init__(self, time_func: Callable[[], float] = time.monotonic) -> None:
        self._time_func = time_func
        self._storage: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any:
        with self._lock:
            item = self._storage.get(key)
            if not item:
                self._misses += 1
                return None
            expires_at, value = item
            if expires_at < self._time_func():
                self._storage.pop(key, None)
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        with self._lock:
            self._storage[key] = (self._time_func() + ttl, value)

    def get_or_fetch(self, key: str, fetch: Callable[[], Optional[Any]], ttl: float) -> Optional[Any]:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = fetch()
        if value is not None:
            self.set(key, value, ttl)
        return value

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "keys": len(self._storage)}

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)


__all__ = ["TTLCache"]
