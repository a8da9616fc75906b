"""Tests for the FIFO query cache."""

import pytest

from taskquery.models import TermNode
from taskquery.search import QueryCache


def node(value: str) -> TermNode:
    return TermNode(value)


class TestQueryCache:
    """Bounded insertion-ordered cache."""

    def test_get_missing(self):
        assert QueryCache().get("nope") is None

    def test_put_and_get(self):
        cache = QueryCache(2)
        cache.put("a", node("a"))
        assert cache.get("a") == node("a")
        assert "a" in cache
        assert len(cache) == 1

    def test_default_capacity(self):
        assert QueryCache().capacity == 50

    def test_evicts_oldest(self):
        cache = QueryCache(2)
        cache.put("a", node("a"))
        cache.put("b", node("b"))
        cache.put("c", node("c"))
        assert cache.keys() == ["b", "c"]

    def test_reads_do_not_refresh(self):
        """Eviction follows insertion order, not access order."""
        cache = QueryCache(2)
        cache.put("a", node("a"))
        cache.put("b", node("b"))
        cache.get("a")
        cache.put("c", node("c"))
        assert "a" not in cache
        assert "b" in cache

    def test_reinsert_keeps_position(self):
        cache = QueryCache(2)
        cache.put("a", node("a"))
        cache.put("b", node("b"))
        cache.put("a", node("a2"))
        assert cache.keys() == ["a", "b"]
        assert cache.get("a") == node("a2")
        cache.put("c", node("c"))
        assert cache.keys() == ["b", "c"]

    def test_never_exceeds_capacity(self):
        cache = QueryCache(50)
        for i in range(120):
            cache.put(f"q{i}", node(str(i)))
            assert len(cache) <= 50
        assert cache.keys()[0] == "q70"

    def test_clear(self):
        cache = QueryCache()
        cache.put("a", node("a"))
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ValueError):
            QueryCache(capacity)
