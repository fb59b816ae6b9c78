"""Port: analysis cache — a key/value store with per-entry expiry."""

from __future__ import annotations

from typing import Protocol

from profile_analyzer.domain.entities import ProfileReport


class AnalysisCache(Protocol):
    """Abstract contract for caching finished reports by login."""

    def get(self, key: str) -> ProfileReport | None:
        """Return the live entry for *key*, or ``None`` if absent or expired."""
        ...

    def set(self, key: str, value: ProfileReport, ttl: float | None = None) -> None:
        """Store *value*; ``ttl`` seconds overrides the cache default."""
        ...

    def has(self, key: str) -> bool:
        ...

    def delete(self, key: str) -> int:
        """Remove *key* and return the number of entries deleted (0 or 1)."""
        ...
