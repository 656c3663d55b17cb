from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple


logger = logging.getLogger(__name__)

DEFAULT_CACHE_DURATION = 60.0

CacheKey = Tuple[int, str]


class EntryStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


@dataclass(frozen=True, slots=True)
class CacheEntry:
    status: EntryStatus
    created_at: float
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


def make_key(message_id: int, trigger: str) -> CacheKey:
    return (int(message_id), trigger)


class DedupCache:
    """
    Short-lived reservation table keyed by (message id, trigger emoji).

    A key is reserved before a translation starts, marked completed once the
    reply is out, and released when the attempt fails so a fresh reaction can
    retry. Expiry is checked on every read; ``sweep_expired`` only reclaims
    memory. None of the operations await, so under asyncio each one runs to
    completion without interleaving; the lock covers sweeps issued from other
    threads.
    """

    def __init__(
        self,
        duration: float = DEFAULT_CACHE_DURATION,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if duration <= 0:
            raise ValueError("cache duration must be positive")
        self._duration = float(duration)
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    @property
    def duration(self) -> float:
        return self._duration

    # ----------------------
    # Lifecycle operations
    # ----------------------

    def try_reserve(self, key: CacheKey) -> bool:
        with self._lock:
            now = self._clock()
            if self._live_entry(key, now) is not None:
                return False
            self._entries[key] = CacheEntry(
                status=EntryStatus.PENDING,
                created_at=now,
                expires_at=now + self._duration,
            )
        logger.debug("Reserved %s for %.0fs", key, self._duration)
        return True

    def mark_completed(self, key: CacheKey) -> None:
        with self._lock:
            entry = self._live_entry(key, self._clock())
            if entry is None:
                return
            # Expiry stays anchored to the reservation time.
            self._entries[key] = replace(entry, status=EntryStatus.COMPLETED)

    def release(self, key: CacheKey) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def sweep_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if not entry.is_live(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.info("Swept %d expired cache entries", len(expired))
        return len(expired)

    # ----------------------
    # Read helpers
    # ----------------------

    def status(self, key: CacheKey) -> Optional[EntryStatus]:
        with self._lock:
            entry = self._live_entry(key, self._clock())
            return entry.status if entry else None

    def keys(self) -> List[CacheKey]:
        with self._lock:
            now = self._clock()
            return [key for key, entry in self._entries.items() if entry.is_live(now)]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return self._live_entry(key, self._clock()) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self.keys())

    def _live_entry(self, key: CacheKey, now: float) -> Optional[CacheEntry]:
        # Caller holds the lock.
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_live(now):
            del self._entries[key]
            return None
        return entry


__all__ = ["CacheEntry", "CacheKey", "DedupCache", "EntryStatus", "make_key", "DEFAULT_CACHE_DURATION"]
