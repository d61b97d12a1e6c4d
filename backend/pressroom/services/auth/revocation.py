from __future__ import annotations

from pressroom.services._shared.ports import KeyValueStore

KEY_PREFIX = "blacklist:"


def revocation_key(token: str) -> str:
    return f"{KEY_PREFIX}{token}"


class RevocationRegistry:
    """
    Denylist of refresh tokens.

    Each entry lives only as long as the token could otherwise still verify,
    so the registry never outgrows the set of live tokens.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def revoke(self, token: str, ttl: int) -> None:
        """Add ``token`` for ``ttl`` seconds; a non-positive ttl is a no-op."""
        if ttl <= 0:
            return
        self.store.set(revocation_key(token), "1", ttl=ttl)

    def is_revoked(self, token: str) -> bool:
        return self.store.get(revocation_key(token)) is not None
