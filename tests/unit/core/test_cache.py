"""Unit tests for core/cache.py"""

import pytest

from mdblog.core.cache import DEFAULT_MAX_SIZE, RenderCache


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(name="clock")
def clock_fixture():
    return FakeClock()


def test_missing_key_returns_none(clock):
    assert RenderCache(clock=clock).get("nope") is None


def test_hit_returns_content_and_counts_access(clock):
    cache = RenderCache(clock=clock)
    cache.set("k", "v")
    assert cache.get("k") == "v"
    assert cache.get("k") == "v"
    assert cache._entries["k"].access_count == 3


def test_zero_ttl_is_expired_immediately(clock):
    cache = RenderCache(clock=clock)
    cache.set("k", "v", ttl=0)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_entry_expires_after_ttl(clock):
    cache = RenderCache(default_ttl=10, clock=clock)
    cache.set("k", "v")
    clock.advance(9)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert "k" not in cache
    assert cache.get("k") is None
    assert len(cache) == 0


def test_per_entry_ttl_overrides_default(clock):
    cache = RenderCache(default_ttl=10, clock=clock)
    cache.set("short", "a", ttl=1)
    cache.set("long", "b")
    clock.advance(5)
    assert cache.get("short") is None
    assert cache.get("long") == "b"


def test_lru_eviction_respects_access(clock):
    """A recently read entry survives; the least recently used one goes."""
    cache = RenderCache(max_size=2, clock=clock)
    cache.set("a", 1)
    clock.advance(1)
    cache.set("b", 2)
    clock.advance(1)
    cache.get("a")
    clock.advance(1)
    cache.set("c", 3)
    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache


def test_lru_eviction_with_frozen_clock(clock):
    """Recency decides eviction even when every timestamp is equal."""
    cache = RenderCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)
    assert "a" in cache
    assert "b" not in cache
    assert "c" in cache


def test_overwrite_counts_as_recent_use(clock):
    cache = RenderCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    cache.set("c", 3)
    assert cache.get("a") == 10
    assert "b" not in cache


def test_overflow_evicts_only_least_recent(clock):
    """Adding one entry past capacity evicts exactly the least recently used one."""
    cache = RenderCache(max_size=DEFAULT_MAX_SIZE, clock=clock)
    for i in range(DEFAULT_MAX_SIZE + 1):
        cache.set(f"k{i}", i)
    assert len(cache) == DEFAULT_MAX_SIZE
    assert "k0" not in cache
    assert all(f"k{i}" in cache for i in range(1, DEFAULT_MAX_SIZE + 1))



def test_overwrite_when_full_does_not_evict(clock):
    cache = RenderCache(max_size=2, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    assert len(cache) == 2
    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_clear(clock):
    cache = RenderCache(clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert cache.get("a") is None


def test_stats(clock):
    cache = RenderCache(max_size=5, clock=clock)
    cache.set("a", 1)
    assert cache.stats() == {"size": 1, "max_size": 5}


@pytest.mark.parametrize("size", [0, -1])
def test_invalid_max_size(size):
    with pytest.raises(ValueError, match="max_size"):
        RenderCache(max_size=size)
