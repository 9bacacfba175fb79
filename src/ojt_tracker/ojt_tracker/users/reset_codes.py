from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional, Protocol, Tuple


class CodeStore(Protocol):
    def put(self, key: str, value: str, *, ttl_seconds: int) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class ResetCodeStore:
    """In-process TTL map for password reset codes.

    Expired entries are dropped on every access. A lock guards the map since
    Flask may serve requests from several threads.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._items: Dict[str, Tuple[str, float]] = {}

    def _sweep(self, now: float) -> None:
        expired = [k for k, (_, expires_at) in self._items.items() if expires_at <= now]
        for k in expired:
            del self._items[k]

    def put(self, key: str, value: str, *, ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._items[key] = (value, now + ttl_seconds)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            self._sweep(self._clock())
            item = self._items.get(key)
            return item[0] if item else None

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            self._sweep(self._clock())
            return len(self._items)
