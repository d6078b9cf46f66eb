from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """Small thread-safe in-memory cache with per-entry expiry.

    Entries beyond ``max_size`` evict the one closest to expiry.
    """

    def __init__(self, *, ttl_seconds: float, max_size: int = 1000, clock: Callable[[], float] = time.monotonic):
        self._ttl = float(ttl_seconds)
        self._max_size = int(max_size)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self.hits = 0
        self.misses = 0

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def get(self, key: str) -> Optional[Any]:
        if not self.enabled:
            return None
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                self.misses += 1
                return None
            expires_at, value = item
            if expires_at <= self._clock():
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return value

    def set(self, key: str, value: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._max_size:
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[oldest]
            self._entries[key] = (self._clock() + self._ttl, value)

    def stats(self) -> dict:
        with self._lock:
            total = self.hits + self.misses
            return {
                "enabled": self.enabled,
                "size": len(self._entries),
                "ttlSeconds": self._ttl,
                "hits": self.hits,
                "misses": self.misses,
                "hitRate": round(self.hits / total, 4) if total else 0.0,
            }
