from __future__ import annotations

import json

import pytest

from pressroom.services._shared.cache import CacheAside
from pressroom.services._shared.ports import InMemoryKeyValueStore


@pytest.fixture()
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def cache(store) -> CacheAside:
    return CacheAside(store)


def test_miss_computes_and_stores_with_ttl(cache, store):
    calls = []

    def compute():
        calls.append(1)
        return {"id": "1", "title": "hello"}

    assert cache.get_or_compute("post:1", compute, 60) == {"id": "1", "title": "hello"}
    assert cache.get_or_compute("post:1", compute, 60) == {"id": "1", "title": "hello"}
    assert len(calls) == 1
    assert json.loads(store.get("post:1")) == {"id": "1", "title": "hello"}
    assert store.ttl("post:1") == pytest.approx(60, abs=1)


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entry_is_recomputed_once_ttl_elapses():
    clock = _Clock()
    cache = CacheAside(InMemoryKeyValueStore(clock=clock))
    calls = []

    def compute():
        calls.append(1)
        return len(calls)

    assert cache.get_or_compute("user:1", compute, 30) == 1
    clock.now += 29
    assert cache.get_or_compute("user:1", compute, 30) == 1

    clock.now += 2
    assert cache.get_or_compute("user:1", compute, 30) == 2
    assert len(calls) == 2


def test_compute_failure_writes_nothing(cache, store):
    def boom():
        raise LookupError("missing")

    with pytest.raises(LookupError):
        cache.get_or_compute("user:1", boom, 60)
    assert store.get("user:1") is None


def test_corrupt_entry_is_treated_as_miss(cache, store):
    store.set("user:1", "{not json", ttl=60)
    assert cache.get_or_compute("user:1", lambda: {"ok": True}, 60) == {"ok": True}
    assert json.loads(store.get("user:1")) == {"ok": True}


def test_deeply_nested_entry_is_treated_as_miss(cache, store):
    depth = 100_000
    store.set("user:1", "[" * depth + "]" * depth, ttl=60)
    assert cache.get_or_compute("user:1", lambda: {"ok": True}, 60) == {"ok": True}


def test_loader_failure_is_treated_as_miss(cache, store):
    store.set("user:1", json.dumps({"unexpected": 1}), ttl=60)
    value = cache.get_or_compute(
        "user:1",
        lambda: {"name": "fresh"},
        60,
        loads=lambda data: {"name": data["name"]},
    )
    assert value == {"name": "fresh"}


def test_dumps_and_loads_round_through_json(cache):
    class Box:
        def __init__(self, n):
            self.n = n

    cache.get_or_compute("box", lambda: Box(3), 60, dumps=lambda b: {"n": b.n}, loads=lambda d: Box(d["n"]))
    hit = cache.get_or_compute("box", lambda: Box(99), 60, dumps=lambda b: {"n": b.n}, loads=lambda d: Box(d["n"]))
    assert hit.n == 3


def test_invalidate_by_pattern_removes_only_matches(cache, store):
    for key in ("posts:list:1:10:true", "posts:list:2:10:true", "post:1"):
        store.set(key, "1")

    assert cache.invalidate_by_pattern("posts:list:*") == 2
    assert store.keys("*") == ["post:1"]
    assert cache.invalidate_by_pattern("posts:list:*") == 0


def test_invalidate_single_key(cache, store):
    store.set("user:1", "1")
    cache.invalidate("user:1")
    cache.invalidate("user:1")
    assert store.get("user:1") is None
