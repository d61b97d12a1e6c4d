from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol
from uuid import uuid4


@dataclass(frozen=True)
class RefreshTokenRecord:
    """
    Stored row for one outstanding refresh token.

    :ivar id: Primary key; rotation deletes by this value.
    :ivar token: The signed refresh token string.
    :ivar user_id: Owner user id (the token's ``sub``).
    :ivar expires_at: Absolute expiration (UTC).
    """

    token: str
    user_id: str
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))


class RefreshTokenStore(Protocol):
    """
    Persistent record of outstanding refresh tokens.

    Records are inserted and deleted, never updated. ``delete_by_id`` is the
    single-use gate of rotation and MUST report whether this caller removed
    the row.
    """

    def add(self, record: RefreshTokenRecord) -> None: ...

    def find_active(self, user_id: str, token: str, now: datetime) -> RefreshTokenRecord | None:
        """Return the record for ``(user_id, token)`` if ``expires_at > now``."""

    def delete_by_id(self, record_id: str) -> bool:
        """Delete one record; ``True`` only for the caller that removed it."""

    def delete_for_user(self, user_id: str, token: str | None = None) -> list[str]:
        """Delete one (``token`` given) or all records of a user; return deleted tokens."""

    def purge_expired(self, now: datetime) -> int:
        """Delete records whose ``expires_at <= now``; return how many."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """Dict-backed store for unit tests, serialized by a lock."""

    def __init__(self) -> None:
        self._by_id: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: RefreshTokenRecord) -> None:
        with self._lock:
            if any(r.token == record.token for r in self._by_id.values()):
                raise ValueError("duplicate refresh token")
            self._by_id[record.id] = record

    def find_active(self, user_id: str, token: str, now: datetime) -> RefreshTokenRecord | None:
        with self._lock:
            for record in self._by_id.values():
                if record.user_id == user_id and record.token == token and record.expires_at > now:
                    return record
            return None

    def delete_by_id(self, record_id: str) -> bool:
        with self._lock:
            return self._by_id.pop(record_id, None) is not None

    def delete_for_user(self, user_id: str, token: str | None = None) -> list[str]:
        with self._lock:
            doomed = [
                r
                for r in self._by_id.values()
                if r.user_id == user_id and (token is None or r.token == token)
            ]
            for record in doomed:
                del self._by_id[record.id]
            return [r.token for r in doomed]

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [rid for rid, r in self._by_id.items() if r.expires_at <= now]
            for rid in expired:
                del self._by_id[rid]
            return len(expired)

    def records_for(self, user_id: str) -> list[RefreshTokenRecord]:
        """Snapshot of a user's stored records (test inspection helper)."""
        with self._lock:
            return [r for r in self._by_id.values() if r.user_id == user_id]
