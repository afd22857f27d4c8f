"""
Result cache for the analysis orchestrator.

Results are keyed by (content_id, level). A key is computed at most once
while concurrent callers wait on a per-key lock; once stored, a result is
never replaced. Computations returning None are not stored, so a failed
analysis can be retried.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from ..models import FilteredSubtitleResult, FilterLevel

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, FilterLevel]
Compute = Callable[[], Optional[FilteredSubtitleResult]]


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    size: int


class ResultCache:
    """
    Thread-safe, insert-only cache of FilteredSubtitleResult objects.

    When more than max_entries results are stored, the oldest insertion
    is evicted. max_entries of 0 means unbounded.
    """

    def __init__(self, max_entries: int = 64):
        if max_entries < 0:
            raise ValueError(f"max_entries must be >= 0, got {max_entries}")
        self.max_entries = max_entries
        self._results: "OrderedDict[CacheKey, FilteredSubtitleResult]" = OrderedDict()
        self._key_locks: Dict[CacheKey, threading.Lock] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def make_key(content_id: Hashable, level: FilterLevel) -> CacheKey:
        return (content_id, FilterLevel.parse(level))

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._results

    def get(self, content_id: Hashable, level: FilterLevel) -> Optional[FilteredSubtitleResult]:
        key = self.make_key(content_id, level)
        with self._lock:
            result = self._results.get(key)
            if result is not None:
                self._hits += 1
            return result

    def put_if_absent(
        self,
        content_id: Hashable,
        level: FilterLevel,
        result: FilteredSubtitleResult,
    ) -> FilteredSubtitleResult:
        """Store result unless the key is already present. Returns the stored value."""
        key = self.make_key(content_id, level)
        with self._lock:
            return self._store(key, result)

    def get_or_compute(
        self,
        content_id: Hashable,
        level: FilterLevel,
        compute: Compute,
    ) -> Optional[FilteredSubtitleResult]:
        """
        Return the cached result for the key, computing it if needed.

        Concurrent calls for the same key run `compute` once; the others
        block until it finishes and then read the stored result.
        """
        key = self.make_key(content_id, level)

        with self._lock:
            cached = self._results.get(key)
            if cached is not None:
                self._hits += 1
                return cached
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                cached = self._results.get(key)
                if cached is not None:
                    self._hits += 1
                    return cached
                self._misses += 1

            try:
                result = compute()
            except BaseException:
                with self._lock:
                    self._release_key(key, key_lock)
                raise

            with self._lock:
                self._release_key(key, key_lock)
                if result is None:
                    logger.debug(f"Not caching empty result for {key[0]!r} at {key[1].value}")
                    return None
                return self._store(key, result)

    def invalidate(
        self,
        content_id: Optional[Hashable] = None,
        level: Optional[FilterLevel] = None,
    ) -> int:
        """
        Drop cached results.

        With no arguments everything is dropped. Otherwise only keys
        matching the given content_id and/or level are removed.

        Returns:
            Number of results removed
        """
        level = FilterLevel.parse(level) if level is not None else None
        with self._lock:
            doomed: List[CacheKey] = [
                key for key in self._results
                if (content_id is None or key[0] == content_id)
                and (level is None or key[1] is level)
            ]
            for key in doomed:
                del self._results[key]

        if doomed:
            logger.info(f"Invalidated {len(doomed)} cached result(s)")
        return len(doomed)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, size=len(self._results))

    def _release_key(self, key: CacheKey, key_lock: threading.Lock) -> None:
        # Caller holds self._lock
        if self._key_locks.get(key) is key_lock:
            del self._key_locks[key]

    def _store(self, key: CacheKey, result: FilteredSubtitleResult) -> FilteredSubtitleResult:
        # Caller holds self._lock
        existing = self._results.get(key)
        if existing is not None:
            return existing

        self._results[key] = result
        if self.max_entries and len(self._results) > self.max_entries:
            evicted, _ = self._results.popitem(last=False)
            logger.debug(f"Evicted cached result for {evicted[0]!r} at {evicted[1].value}")
        return result


class NullCache:
    """Cache stand-in that stores nothing. Every call computes."""

    def get(self, content_id: Hashable, level: FilterLevel) -> Optional[FilteredSubtitleResult]:
        return None

    def get_or_compute(
        self,
        content_id: Hashable,
        level: FilterLevel,
        compute: Compute,
    ) -> Optional[FilteredSubtitleResult]:
        return compute()

    def put_if_absent(self, content_id, level, result):
        return result

    def invalidate(self, content_id=None, level=None) -> int:
        return 0

    def stats(self) -> CacheStats:
        return CacheStats(hits=0, misses=0, size=0)

    def __len__(self) -> int:
        return 0
