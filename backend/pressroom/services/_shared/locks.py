"""Best-effort distributed mutex on the shared key-value store."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Iterator
from contextlib import contextmanager

from pressroom.services._shared.ports import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TTL = 30


class DistributedLock:
    """
    Mutual exclusion keyed by name.

    ``acquire`` is a set-if-absent with expiry holding a random owner token;
    ``release`` deletes the key only while it still holds that token, so a
    caller whose lock already expired cannot free someone else's. A holder
    that outlives the TTL loses exclusivity.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def acquire(self, key: str, ttl: int = DEFAULT_LOCK_TTL) -> str | None:
        """Return an owner token, or ``None`` when another caller holds ``key``."""
        token = secrets.token_hex(16)
        if self.store.set(key, token, ttl=ttl, only_if_absent=True):
            return token
        return None

    def release(self, key: str, token: str) -> bool:
        """``True`` only if ``token`` still owned ``key``."""
        return self.store.compare_and_delete(key, token)

    @contextmanager
    def hold(self, key: str, ttl: int = DEFAULT_LOCK_TTL) -> Iterator[str | None]:
        """
        Acquire for the duration of a ``with`` block.

        Yields the owner token, or ``None`` when the lock is contended; the
        caller decides whether to skip the work.
        """
        token = self.acquire(key, ttl)
        if token is None:
            logger.info("lock contended", extra={"key": key})
        try:
            yield token
        finally:
            if token is not None and not self.release(key, token):
                logger.warning("lock expired before release", extra={"key": key})
