"""Recommendation Cache - in-memory TTL cache for student match results."""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Any

from core.matcher.models import MatchResult

logger = logging.getLogger(__name__)

# 30 minutes in seconds
CACHE_TTL_SECONDS = 30 * 60
CACHE_MAX_ENTRIES = 100


@dataclass
class CacheEntry:
    results: List[MatchResult]
    created_at: float


class RecommendationCache:
    """
    Cache of matching results keyed by student and scholarship set.

    Entries expire `ttl_seconds` after they were written and are evicted
    lazily on lookup. When a write pushes the store past `max_entries`,
    every expired entry is purged; there is no LRU eviction.

    Ranking results are never cached here.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        max_entries: int = CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(student_id: str, scholarship_ids: Iterable[str]) -> str:
        """Create cache key; scholarship order does not matter."""
        return f"{student_id}:{','.join(sorted(str(i) for i in scholarship_ids))}"

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at < self.ttl_seconds

    def get(self, student_id: str, scholarship_ids: Iterable[str]) -> Optional[List[MatchResult]]:
        """Get cached results, or None on a miss or an expired entry."""
        key = self.make_key(student_id, scholarship_ids)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug(f"Cache miss for student {student_id}")
                return None
            if not self._is_fresh(entry, self._clock()):
                del self._entries[key]
                logger.debug(f"Cache entry expired for student {student_id}")
                return None
            results = entry.results

        logger.debug(f"Cache hit for student {student_id} ({len(results)} results)")
        return [r.model_copy(deep=True) for r in results]

    def set(self, student_id: str, scholarship_ids: Iterable[str], results: List[MatchResult]) -> None:
        """Store results with a fresh timestamp, overwriting any existing entry."""
        key = self.make_key(student_id, scholarship_ids)
        snapshot = [r.model_copy(deep=True) for r in results]
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(results=snapshot, created_at=now)
            if len(self._entries) > self.max_entries:
                self._purge_expired(now)

    def _purge_expired(self, now: float) -> int:
        expired = [k for k, e in self._entries.items() if not self._is_fresh(e, now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Purged {len(expired)} expired recommendation cache entries")
        return len(expired)

    def invalidate_student(self, student_id: str) -> int:
        """Drop every entry for one student (e.g. after a new assessment)."""
        prefix = f"{student_id}:"
        with self._lock:
            keys = [k for k in self._entries if k.startswith(prefix)]
            for key in keys:
                del self._entries[key]
        if keys:
            logger.info(f"Invalidated {len(keys)} cache entries for student {student_id}")
        return len(keys)

    def clear(self) -> int:
        """Drop every entry. Returns how many were dropped."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {count} entries from recommendation cache")
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            now = self._clock()
            size = len(self._entries)
            fresh = sum(1 for e in self._entries.values() if self._is_fresh(e, now))
        return {
            "entries": size,
            "fresh_entries": fresh,
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }
