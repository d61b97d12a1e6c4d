"""Read-through cache over the shared key-value store."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pressroom.services._shared.ports import KeyValueStore

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _json_dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


class CacheAside:
    """
    Cache-aside helper.

    Entries are JSON strings with a TTL and are never a source of truth: a
    value that cannot be decoded is treated as a miss and recomputed.
    Concurrent misses on the same key may compute twice; the last write wins.

    :param store: Backing :class:`KeyValueStore`.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], T],
        ttl: int,
        *,
        dumps: Callable[[T], Any] | None = None,
        loads: Callable[[Any], T] | None = None,
    ) -> T:
        """
        Return the cached value for ``key`` or compute, store and return it.

        :param key: Cache key.
        :param compute: Producer called on a miss. Its exceptions propagate
            and nothing is written.
        :param ttl: Lifetime in seconds of the written entry.
        :param dumps: Converts the computed value to something JSON-encodable.
        :param loads: Rebuilds the value from the decoded JSON.
        """
        raw = self.store.get(key)
        if raw is not None:
            try:
                decoded = json.loads(raw)
                return loads(decoded) if loads else decoded
            except (ValueError, TypeError, KeyError, RecursionError):
                logger.warning("cache decode failed; recomputing", extra={"key": key})

        value = compute()
        payload = dumps(value) if dumps else value
        self.store.set(key, _json_dumps(payload), ttl=ttl)
        return value

    def invalidate(self, key: str) -> None:
        self.store.delete(key)

    def invalidate_by_pattern(self, pattern: str) -> int:
        """Delete every key matching ``pattern``; returns how many were removed."""
        keys = self.store.keys(pattern)
        if not keys:
            return 0
        count = self.store.delete(*keys)
        logger.debug("cache invalidated", extra={"pattern": pattern, "count": count})
        return count
