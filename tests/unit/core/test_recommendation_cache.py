"""
Tests for the Recommendation Cache

In-memory TTL cache of matching results; time is driven by a fake clock.
"""
import threading

import pytest

from core.cache.recommendation_cache import RecommendationCache, CACHE_TTL_SECONDS, CACHE_MAX_ENTRIES
from core.matcher.models import MatchResult, Recommendation, ResultSource


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_result(scholarship_id="a", score=70.0):
    return MatchResult(
        scholarship_id=scholarship_id,
        scholarship_name=f"Grant {scholarship_id}",
        match_score=score,
        eligible=True,
        recommendation=Recommendation.RECOMMENDED,
        source=ResultSource.FALLBACK,
    )


class TestRecommendationCache:
    """Test suite for RecommendationCache."""

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def cache(self, clock):
        return RecommendationCache(ttl_seconds=60, max_entries=3, clock=clock)

    def test_01_defaults(self):
        cache = RecommendationCache()

        assert cache.ttl_seconds == CACHE_TTL_SECONDS == 1800
        assert cache.max_entries == CACHE_MAX_ENTRIES == 100
        assert len(cache) == 0

    def test_02_miss_returns_none(self, cache):
        assert cache.get("s1", ["a"]) is None

    def test_03_key_ignores_scholarship_order(self, cache):
        cache.set("s1", ["a", "b"], [make_result("a"), make_result("b")])

        hit = cache.get("s1", ["b", "a"])

        assert hit is not None
        assert [r.scholarship_id for r in hit] == ["a", "b"]

    def test_04_make_key(self):
        assert RecommendationCache.make_key("s1", ["b", "a"]) == "s1:a,b"

    def test_05_students_do_not_share_entries(self, cache):
        cache.set("s1", ["a"], [make_result("a")])

        assert cache.get("s2", ["a"]) is None

    def test_06_different_scholarship_set_misses(self, cache):
        cache.set("s1", ["a", "b"], [make_result("a"), make_result("b")])

        assert cache.get("s1", ["a"]) is None
        assert cache.get("s1", ["a", "b", "c"]) is None

    def test_07_entry_expires_after_ttl(self, cache, clock):
        cache.set("s1", ["a"], [make_result("a")])

        clock.advance(59)
        assert cache.get("s1", ["a"]) is not None

        clock.advance(1)
        assert cache.get("s1", ["a"]) is None
        # Expired entry is evicted on lookup
        assert len(cache) == 0

    def test_08_set_refreshes_timestamp(self, cache, clock):
        cache.set("s1", ["a"], [make_result("a", 50)])
        clock.advance(50)
        cache.set("s1", ["a"], [make_result("a", 90)])
        clock.advance(50)

        hit = cache.get("s1", ["a"])

        assert hit[0].match_score == 90

    def test_09_overflow_purges_only_expired_entries(self, cache, clock):
        cache.set("old1", ["a"], [make_result()])
        cache.set("old2", ["a"], [make_result()])
        clock.advance(61)
        cache.set("new1", ["a"], [make_result()])
        cache.set("new2", ["a"], [make_result()])

        # Fourth entry exceeds max_entries=3, both expired entries go
        assert len(cache) == 2
        assert cache.get("new1", ["a"]) is not None

    def test_10_overflow_without_expired_entries_keeps_everything(self, cache):
        for i in range(5):
            cache.set(f"s{i}", ["a"], [make_result()])

        # TTL-only sweep, no LRU eviction
        assert len(cache) == 5

    def test_11_returned_results_are_copies(self, cache):
        original = [make_result("a", 70)]
        cache.set("s1", ["a"], original)
        original[0].match_score = 10

        hit = cache.get("s1", ["a"])
        hit[0].match_score = 20

        assert cache.get("s1", ["a"])[0].match_score == 70

    def test_12_clear(self, cache):
        cache.set("s1", ["a"], [make_result()])
        cache.set("s2", ["a"], [make_result()])

        assert cache.clear() == 2
        assert len(cache) == 0
        assert cache.get("s1", ["a"]) is None

    def test_13_invalidate_student(self, cache):
        cache.set("s1", ["a"], [make_result()])
        cache.set("s1", ["a", "b"], [make_result()])
        cache.set("s10", ["a"], [make_result()])

        assert cache.invalidate_student("s1") == 2
        assert cache.get("s10", ["a"]) is not None

    def test_14_stats(self, cache, clock):
        cache.set("s1", ["a"], [make_result()])
        clock.advance(61)
        cache.set("s2", ["a"], [make_result()])

        stats = cache.get_cache_stats()

        assert stats == {
            "entries": 2,
            "fresh_entries": 1,
            "max_entries": 3,
            "ttl_seconds": 60,
        }

    def test_15_concurrent_writes(self):
        cache = RecommendationCache(ttl_seconds=60, max_entries=1000)

        def writer(n):
            for i in range(50):
                cache.set(f"s{n}-{i}", ["a"], [make_result()])

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 400
