"""In-process TTL cache — implements the AnalysisCache port."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from profile_analyzer.domain.entities import ProfileReport


@dataclass(slots=True)
class _Entry:
    value: ProfileReport
    expires_at: float


class InMemoryTTLCache:
    """Dictionary-backed cache whose entries expire lazily on access.

    Parameters
    ----------
    default_ttl:
        Lifetime in seconds applied when :meth:`set` gets no explicit ``ttl``.
    clock:
        Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        default_ttl: float = 86_400,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> ProfileReport | None:
        entry = self._live_entry(key)
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, key: str, value: ProfileReport, ttl: float | None = None) -> None:
        lifetime = self._default_ttl if ttl is None else ttl
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + lifetime)

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def delete(self, key: str) -> int:
        return 1 if self._entries.pop(key, None) is not None else 0

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> dict[str, int]:
        self._purge_expired()
        return {"keys": len(self._entries), "hits": self._hits, "misses": self._misses}

    def _live_entry(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            del self._entries[key]
