"""Key-value storage behind the rate limiter and violation tracker."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel

from collabhub.models import utc_now

Clock = Callable[[], datetime]


class RateLimitStore(ABC):
    """
    Minimal atomic store. Values are immutable pydantic models compared by
    equality; ``ttl`` is a hint for garbage collection, the caller's own
    window fields decide validity.

    A durable backend (e.g. a key-value server with TTL and atomic
    compare-and-set) only needs to implement these four methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[BaseModel]:
        ...

    @abstractmethod
    def set(self, key: str, value: BaseModel, ttl: timedelta) -> None:
        ...

    @abstractmethod
    def compare_and_swap(
        self,
        key: str,
        expected: Optional[BaseModel],
        new: BaseModel,
        ttl: timedelta,
    ) -> bool:
        """Store ``new`` only if the current value equals ``expected`` (None = absent)."""

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local store. State is lost on restart."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._data: dict[str, tuple[BaseModel, datetime]] = {}

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _live(self, key: str) -> Optional[BaseModel]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    def _put(self, key: str, value: BaseModel, ttl: timedelta) -> None:
        self._data[key] = (value, self._clock() + ttl)

    # ------------------------------------------------------------------
    # RateLimitStore
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[BaseModel]:
        with self._lock:
            return self._live(key)

    def set(self, key: str, value: BaseModel, ttl: timedelta) -> None:
        with self._lock:
            self._put(key, value, ttl)

    def compare_and_swap(
        self,
        key: str,
        expected: Optional[BaseModel],
        new: BaseModel,
        ttl: timedelta,
    ) -> bool:
        with self._lock:
            if self._live(key) != expected:
                return False
            self._put(key, new, ttl)
            return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

