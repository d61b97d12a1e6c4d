"""Contract tests shared by the in-memory and Redis key-value stores."""

from __future__ import annotations

import fakeredis
import pytest

from pressroom.infra.redis.redis_key_value_store import RedisKeyValueStore
from pressroom.services._shared.ports import InMemoryKeyValueStore


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture(params=["memory", "redis"])
def store(request):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return RedisKeyValueStore(fakeredis.FakeRedis(decode_responses=True))


def test_get_missing_returns_none(store):
    assert store.get("nope") is None


def test_set_then_get(store):
    assert store.set("k", "v") is True
    assert store.get("k") == "v"


def test_set_only_if_absent_does_not_overwrite(store):
    assert store.set("k", "first", ttl=30, only_if_absent=True) is True
    assert store.set("k", "second", ttl=30, only_if_absent=True) is False
    assert store.get("k") == "first"


def test_delete_counts_existing_keys(store):
    store.set("a", "1")
    store.set("b", "2")
    assert store.delete("a", "b", "missing") == 2
    assert store.get("a") is None
    assert store.delete() == 0


def test_keys_matches_glob_pattern(store):
    store.set("posts:list:1:10:true", "x")
    store.set("posts:list:2:10:true", "x")
    store.set("post:abc", "x")
    assert sorted(store.keys("posts:list:*")) == ["posts:list:1:10:true", "posts:list:2:10:true"]
    assert store.keys("nothing:*") == []


def test_compare_and_delete_only_matching_value(store):
    store.set("lock", "owner-a")
    assert store.compare_and_delete("lock", "owner-b") is False
    assert store.get("lock") == "owner-a"
    assert store.compare_and_delete("lock", "owner-a") is True
    assert store.get("lock") is None
    assert store.compare_and_delete("lock", "owner-a") is False


def test_in_memory_entries_expire_with_clock():
    clock = _Clock()
    store = InMemoryKeyValueStore(clock=clock)
    store.set("k", "v", ttl=10)
    assert store.ttl("k") == pytest.approx(10)

    clock.now += 9.9
    assert store.get("k") == "v"

    clock.now += 0.2
    assert store.get("k") is None
    assert store.keys("*") == []
    # expired key no longer blocks a set-if-absent
    assert store.set("k", "w", ttl=10, only_if_absent=True) is True


def test_redis_set_applies_expiry():
    client = fakeredis.FakeRedis(decode_responses=True)
    store = RedisKeyValueStore(client)
    store.set("k", "v", ttl=120)
    assert 0 < client.ttl("k") <= 120
    store.set("persistent", "v")
    assert client.ttl("persistent") == -1
