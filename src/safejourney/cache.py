"""Single-slot, time-boxed cache for the latest classified incident batch.

One ``IngestionCache`` is created at process start by whoever owns the
ingestion path and passed to it explicitly. The slot holds one batch and
the instant it was produced. Concurrent refreshes racing past expiry are
allowed to run redundantly; the last one to finish wins the slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable

from .models import CachedBatch, IncidentBatch

_log = logging.getLogger(__name__)

DEFAULT_FRESHNESS_WINDOW = timedelta(minutes=10)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class _CacheSlot:
    batch: IncidentBatch
    produced_at: datetime


class IngestionCache:
    def __init__(
        self,
        freshness_window: timedelta = DEFAULT_FRESHNESS_WINDOW,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if freshness_window <= timedelta(0):
            raise ValueError("freshness_window must be positive")
        self.freshness_window = freshness_window
        self._clock = clock
        self._slot: _CacheSlot | None = None

    def peek(self) -> CachedBatch | None:
        slot = self._slot
        if slot is None or not self._is_fresh(slot):
            return None
        return CachedBatch(batch=slot.batch, cached=True, as_of=slot.produced_at)

    def get_or_refresh(self, fetch: Callable[[], IncidentBatch]) -> CachedBatch:
        slot = self._slot
        if slot is not None and self._is_fresh(slot):
            _log.debug("Ingestion cache hit (as of %s)", slot.produced_at.isoformat())
            return CachedBatch(batch=slot.batch, cached=True, as_of=slot.produced_at)

        _log.info("Ingestion cache %s; refreshing batch", "expired" if slot else "empty")
        batch = fetch()
        fresh = _CacheSlot(batch=batch, produced_at=self._clock())
        self._slot = fresh
        return CachedBatch(batch=fresh.batch, cached=False, as_of=fresh.produced_at)

    def clear(self) -> None:
        self._slot = None

    def _is_fresh(self, slot: _CacheSlot) -> bool:
        return (self._clock() - slot.produced_at) < self.freshness_window


def get_or_refresh_batch(cache: IngestionCache, fetch: Callable[[], IncidentBatch]) -> CachedBatch:
    return cache.get_or_refresh(fetch)
