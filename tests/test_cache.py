"""Tests for cache logic."""

from yt_summary_mcp.cache import SummaryCache


class TestSummaryCache:
    def test_set_and_get(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        cache.set("abc", "## Overview")
        assert cache.get("abc") == "## Overview"

    def test_miss(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        assert cache.get("nonexistent") is None

    def test_overwrite_keeps_one_entry(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        cache.set("abc", "first")
        cache.set("abc", "second")
        assert cache.get("abc") == "second"
        assert len(cache) == 1

    def test_discard(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        cache.set("abc", "first")
        cache.discard("abc")
        cache.discard("never-set")
        assert "abc" not in cache

    def test_stats_initial(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        stats = cache.stats()
        assert stats["size"] == 0
        assert stats["hits"] == 0
        assert stats["misses"] == 0

    def test_stats_after_operations(self):
        cache = SummaryCache(max_size=10, ttl=3600)
        cache.set("abc", "hi")
        cache.get("abc")  # hit
        cache.get("xyz")  # miss
        stats = cache.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 50.0

    def test_max_size(self):
        cache = SummaryCache(max_size=2, ttl=3600)
        cache.set("a", "1")
        cache.set("b", "2")
        cache.set("c", "3")
        # One of the first two should have been evicted
        assert cache.stats()["size"] == 2
