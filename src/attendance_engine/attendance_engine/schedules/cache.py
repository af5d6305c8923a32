from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

from ..common.validators import require_positive
from ..core.constants import SCHEDULE_CACHE_TTL_SECONDS

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Timer = Callable[[], float]


class TTLCache(Generic[K, V]):
    """Small thread-safe TTL map with an injectable monotonic timer.

    Every write replaces the whole entry for its key under the lock, so two
    resolutions racing on the same key cannot interleave a read-modify-write.
    Expiry is checked lazily on read.
    """

    def __init__(self, ttl_seconds: float = SCHEDULE_CACHE_TTL_SECONDS, *, timer: Optional[Timer] = None):
        self._ttl = float(require_positive(ttl_seconds, "ttl_seconds"))
        self._timer = timer or time.monotonic
        self._entries: Dict[K, Tuple[float, V]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: K, default: Any = None) -> Any:
        now = self._timer()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if now >= expires_at:
                del self._entries[key]
                return default
            return value

    def __contains__(self, key: object) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel  # type: ignore[arg-type]

    def set(self, key: K, value: V) -> None:
        expires_at = self._timer() + self._ttl
        with self._lock:
            self._entries[key] = (expires_at, value)

    def delete(self, key: K) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def delete_where(self, predicate: Callable[[K], bool]) -> int:
        with self._lock:
            doomed = [k for k in self._entries if predicate(k)]
            for k in doomed:
                del self._entries[k]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        now = self._timer()
        with self._lock:
            return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)
