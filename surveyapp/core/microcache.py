"""In-process TTL cache used as the local tier.

- process-local (no cross-worker coherence)
- bounded by ``max_entries``; expired entries go first, then the oldest
- expired entries are swept at most once per ``check_period_seconds``
  while the cache is being used (no background thread)
"""

from __future__ import annotations

from dataclasses import dataclass
from time import monotonic
from typing import Any, Callable, Iterable, Optional


@dataclass
class _Entry:
    expires_at: float
    value: Any


@dataclass
class LocalCacheStats:
    hits: int = 0
    misses: int = 0
    keys: int = 0
    evictions: int = 0


class LocalCache:
    def __init__(
        self,
        *,
        default_ttl_seconds: float = 300,
        max_entries: int = 1000,
        check_period_seconds: float = 600,
        clock: Callable[[], float] = monotonic,
    ):
        self.default_ttl_seconds = default_ttl_seconds
        self.max_entries = max_entries
        self.check_period_seconds = check_period_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._last_sweep = clock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> Optional[Any]:
        now = self._clock()
        self._maybe_sweep(now)
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.expires_at <= now:
            self._entries.pop(key, None)
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> bool:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return False
        now = self._clock()
        self._maybe_sweep(now)
        if key not in self._entries and len(self._entries) >= self.max_entries:
            self._make_room(now)
        # Re-insert so dict order tracks write recency.
        self._entries.pop(key, None)
        self._entries[key] = _Entry(expires_at=now + ttl, value=value)
        return True

    def delete(self, keys: str | Iterable[str]) -> int:
        if isinstance(keys, str):
            keys = (keys,)
        removed = 0
        for key in keys:
            if self._entries.pop(key, None) is not None:
                removed += 1
        return removed

    def keys(self) -> list[str]:
        now = self._clock()
        return [key for key, entry in self._entries.items() if entry.expires_at > now]

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> LocalCacheStats:
        return LocalCacheStats(
            hits=self._hits,
            misses=self._misses,
            keys=len(self._entries),
            evictions=self._evictions,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep < self.check_period_seconds:
            return
        self._purge_expired(now)
        self._last_sweep = now

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def _make_room(self, now: float) -> None:
        self._purge_expired(now)
        while len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self._evictions += 1


__all__ = ["LocalCache", "LocalCacheStats"]
