from __future__ import annotations

import fnmatch
import threading
import time
from collections.abc import Callable
from typing import Protocol


class KeyValueStore(Protocol):
    """
    Shared, expiring key-value store.

    Every method is a single atomic command on the backing store. Values are
    plain strings; callers own their encoding.
    """

    def get(self, key: str) -> str | None: ...

    def set(
        self,
        key: str,
        value: str,
        *,
        ttl: int | None = None,
        only_if_absent: bool = False,
    ) -> bool:
        """
        Store ``value`` under ``key``.

        :param ttl: Expiry in seconds; ``None`` keeps the key until deleted.
        :param only_if_absent: Write only when the key does not exist yet.
        :returns: ``False`` when ``only_if_absent`` and the key existed.
        """

    def delete(self, *keys: str) -> int:
        """Delete keys; returns how many existed."""

    def keys(self, pattern: str) -> list[str]:
        """Enumerate keys matching a glob-style pattern."""

    def compare_and_delete(self, key: str, expected: str) -> bool:
        """Delete ``key`` only if it currently holds ``expected``."""


class InMemoryKeyValueStore(KeyValueStore):
    """
    Process-local store for unit tests.

    A lock serializes commands so the atomicity contract holds across
    threads. ``clock`` returns seconds and can be replaced to fast-forward
    expiries.
    """

    def __init__(self, *, clock: Callable[[], float] | None = None) -> None:
        self._data: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()
        self._clock = clock or time.monotonic

    # ------------------------- helpers -------------------------

    def _alive(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, deadline = entry
        if deadline is not None and deadline <= self._clock():
            del self._data[key]
            return None
        return value

    # -------------------------- API ----------------------------

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._alive(key)

    def set(
        self,
        key: str,
        value: str,
        *,
        ttl: int | None = None,
        only_if_absent: bool = False,
    ) -> bool:
        with self._lock:
            if only_if_absent and self._alive(key) is not None:
                return False
            deadline = self._clock() + ttl if ttl is not None else None
            self._data[key] = (value, deadline)
            return True

    def delete(self, *keys: str) -> int:
        with self._lock:
            removed = 0
            for key in keys:
                if self._alive(key) is not None:
                    del self._data[key]
                    removed += 1
            return removed

    def keys(self, pattern: str) -> list[str]:
        with self._lock:
            return [k for k in list(self._data) if fnmatch.fnmatchcase(k, pattern) and self._alive(k) is not None]

    def compare_and_delete(self, key: str, expected: str) -> bool:
        with self._lock:
            if self._alive(key) != expected:
                return False
            del self._data[key]
            return True

    def ttl(self, key: str) -> float | None:
        """Remaining lifetime in seconds (``None`` if missing or persistent)."""
        with self._lock:
            if self._alive(key) is None:
                return None
            deadline = self._data[key][1]
            return None if deadline is None else deadline - self._clock()
