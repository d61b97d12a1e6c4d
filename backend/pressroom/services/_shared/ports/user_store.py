from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class UserIdentity:
    """Fields the token core needs from a user row."""

    id: str
    email: str
    role: str
    is_active: bool


class UserStore(Protocol):
    """Read-only identity lookups for token issuance and rotation."""

    def get_identity(self, user_id: str) -> UserIdentity | None: ...


class InMemoryUserStore(UserStore):
    """Mutable mapping of identities for unit tests."""

    def __init__(self, *identities: UserIdentity) -> None:
        self._users = {u.id: u for u in identities}

    def put(self, identity: UserIdentity) -> None:
        self._users[identity.id] = identity

    def remove(self, user_id: str) -> None:
        self._users.pop(user_id, None)

    def get_identity(self, user_id: str) -> UserIdentity | None:
        return self._users.get(user_id)
