"""In-memory TTL store for upstream outcomes.

Entries are keyed by a request fingerprint and are never updated in
place: once an entry expires it is dropped on the next read and the
caller refetches it.  There is no size bound, TTL is the only removal
path.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from models.schemas import UpstreamOutcome


def fingerprint(relative_url: str) -> str:
    """Cache key for a relative upstream URL (path and query together)."""
    return f"github:{relative_url}"


@dataclass(frozen=True)
class _Entry:
    outcome: UpstreamOutcome
    expires_at: float


class ResponseCache:
    """Thread-safe fingerprint -> outcome store with absolute expiry."""

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = ttl_seconds
        self._clock = clock
        self._store: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> UpstreamOutcome | None:
        now = self._clock()
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if now >= entry.expires_at:
                del self._store[key]
                return None
            return entry.outcome

    def put(self, key: str, outcome: UpstreamOutcome, ttl: float | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        entry = _Entry(outcome=outcome, expires_at=self._clock() + ttl)
        with self._lock:
            self._store[key] = entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
