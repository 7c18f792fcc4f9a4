from __future__ import annotations

from backend.cache.store import CacheStore


def test_set_then_get_returns_value(store):
    value = {"data": "testData"}
    assert store.set("testKey", value) is True
    assert store.get("testKey") == value


def test_get_unknown_key_returns_none(store):
    assert store.get("nonExistentKey") is None


def test_set_overwrites_existing_entry(store):
    store.set("k", "first")
    store.set("k", "second")
    assert store.get("k") == "second"


def test_has_reflects_presence(store):
    store.set("existingKey", "someValue")
    assert store.has("existingKey") is True
    assert store.has("anotherNonExistentKey") is False


def test_delete_single_key(store):
    store.set("keyToDelete", "value")
    assert store.delete("keyToDelete") == 1
    assert store.has("keyToDelete") is False
    assert store.get("keyToDelete") is None


def test_delete_multiple_keys(store):
    store.set("key1", "val1")
    store.set("key2", "val2")
    assert store.delete(["key1", "key2", "missing"]) == 2
    assert store.list_keys() == []


def test_delete_missing_key_returns_zero(store):
    assert store.delete("nonExistentKeyForDel") == 0


def test_flush_clears_everything(store):
    store.set("keyA", "valA")
    store.set("keyB", "valB")
    store.flush()
    assert store.has("keyA") is False
    assert store.has("keyB") is False
    assert store.list_keys() == []


def test_entry_expires_after_default_ttl(store, clock):
    store.set("ttlKey", "v")
    clock.advance(3600)
    assert store.get("ttlKey") == "v"
    clock.advance(1)
    assert store.get("ttlKey") is None
    assert store.has("ttlKey") is False


def test_custom_ttl_overrides_default(store, clock):
    store.set("short", "v", ttl_seconds=10)
    clock.advance(11)
    assert store.get("short") is None


def test_expired_read_removes_entry(store, clock):
    store.set("stale", "v", ttl_seconds=5)
    clock.advance(6)
    assert "stale" in store.list_keys()
    store.get("stale")
    assert "stale" not in store.list_keys()


def test_sweep_removes_only_expired(store, clock):
    store.set("old", 1, ttl_seconds=5)
    store.set("fresh", 2, ttl_seconds=500)
    clock.advance(10)
    assert store.sweep_expired() == 1
    assert store.list_keys() == ["fresh"]


def test_stats_count_hits_and_misses(store):
    store.set("k", "v")
    store.get("k")
    store.get("k")
    store.get("nope")
    stats = store.stats()
    assert stats["size"] == 1
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 66.7


def test_separate_stores_are_isolated(clock):
    a = CacheStore(clock=clock)
    b = CacheStore(clock=clock)
    a.set("shared", "a")
    assert b.get("shared") is None


def test_zero_ttl_expires_immediately(store, clock):
    store.set("k", "v", ttl_seconds=0)
    clock.advance(10)
    assert store.get("k") is None


def test_omitted_ttl_uses_default(store, clock):
    store.set("k", "v")
    clock.advance(3599)
    assert store.get("k") == "v"
