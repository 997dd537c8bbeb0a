"""In-memory cache of external link check results."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..models import LinkCheckResult

DEFAULT_TTL = 5 * 60.0


@dataclass(frozen=True)
class CacheHit:
    """A live cache entry and how long ago (in seconds) it was stored."""

    result: LinkCheckResult
    age: float


class ResultCache:
    """Stores terminal results keyed by raw href; stale entries read as absent.

    Access is serialised with a lock because probes run on worker threads.
    Expiry is lazy: entries are checked and dropped on read.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[LinkCheckResult, float]] = {}
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    def get(self, key: str) -> Optional[CacheHit]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            result, stored_at = entry
            age = self._clock() - stored_at
            if age >= self._ttl:
                del self._entries[key]
                return None
            return CacheHit(result=result, age=age)

    def put(self, key: str, result: LinkCheckResult) -> None:
        with self._lock:
            self._entries[key] = (result, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_SHARED_CACHE = ResultCache()


def shared_cache() -> ResultCache:
    """Return the process-wide cache used when no cache is injected."""
    return _SHARED_CACHE


__all__ = ["CacheHit", "DEFAULT_TTL", "ResultCache", "shared_cache"]
