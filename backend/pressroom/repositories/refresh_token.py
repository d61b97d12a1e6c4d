"""Refresh-token rows: insert, lookup and single-statement deletes."""

from __future__ import annotations

from datetime import datetime
from typing import cast

from sqlalchemy import CursorResult, delete, select

from pressroom.models.refresh_token import RefreshToken
from pressroom.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Persistence-only repository for :class:`RefreshToken`.

    Deletes are issued as bulk ``DELETE`` statements so the reported row
    count reflects what this transaction actually removed.
    """

    model = RefreshToken

    def find_active(self, user_id: str, token: str, now: datetime) -> RefreshToken | None:
        stmt = select(RefreshToken).where(
            RefreshToken.user_id == user_id,
            RefreshToken.token == token,
            RefreshToken.expires_at > now,
        )
        return cast(RefreshToken | None, self.session.execute(stmt).scalars().first())

    def delete_by_id(self, record_id: str) -> int:
        """``DELETE ... WHERE id = :id``; returns the affected row count."""
        stmt = delete(RefreshToken).where(RefreshToken.id == record_id)
        result = cast(CursorResult, self.session.execute(stmt, execution_options={"synchronize_session": False}))
        return int(result.rowcount or 0)

    def delete_for_user(self, user_id: str, token: str | None = None) -> list[str]:
        """Delete one or all of a user's rows and return the deleted token strings."""
        where = [RefreshToken.user_id == user_id]
        if token is not None:
            where.append(RefreshToken.token == token)
        tokens = list(self.session.execute(select(RefreshToken.token).where(*where)).scalars())
        if tokens:
            self.session.execute(
                delete(RefreshToken).where(*where),
                execution_options={"synchronize_session": False},
            )
        return tokens

    def purge_expired(self, now: datetime) -> int:
        stmt = delete(RefreshToken).where(RefreshToken.expires_at <= now)
        result = cast(CursorResult, self.session.execute(stmt, execution_options={"synchronize_session": False}))
        return int(result.rowcount or 0)
