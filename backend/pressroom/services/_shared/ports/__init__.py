"""
pressroom.services._shared.ports
================================

Ports (hexagonal interfaces) the service layer depends on. Concrete adapters
live under ``pressroom.infra``; in-memory implementations here back the unit
tests.

Modules
-------
- :mod:`key_value_store`: :class:`~.KeyValueStore`, the shared expiring store
  behind caching, locking and token revocation.
- :mod:`refresh_token_store`: :class:`~.RefreshTokenStore` and
  :class:`~.RefreshTokenRecord`, persistence of outstanding refresh tokens.
- :mod:`user_store`: :class:`~.UserStore`, identity lookups for the token core.
- :mod:`token_provider`: :class:`~.TokenProvider`, JWT signing and decoding.
"""

from __future__ import annotations

from .key_value_store import InMemoryKeyValueStore, KeyValueStore
from .refresh_token_store import (
    InMemoryRefreshTokenStore,
    RefreshTokenRecord,
    RefreshTokenStore,
)
from .token_provider import TokenProvider
from .user_store import InMemoryUserStore, UserIdentity, UserStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "RefreshTokenRecord",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
    "TokenProvider",
    "UserIdentity",
    "UserStore",
    "InMemoryUserStore",
]
