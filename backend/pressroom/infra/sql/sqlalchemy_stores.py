"""Relational adapters for the token-core ports, built on the Unit of Work."""

from __future__ import annotations

from datetime import UTC, datetime

from pressroom.models.refresh_token import RefreshToken
from pressroom.services._shared.ports import (
    RefreshTokenRecord,
    RefreshTokenStore,
    UserIdentity,
    UserStore,
)
from pressroom.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written in UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def _to_record(row: RefreshToken) -> RefreshTokenRecord:
    return RefreshTokenRecord(
        id=row.id,
        token=row.token,
        user_id=row.user_id,
        expires_at=_as_utc(row.expires_at),
    )


class SQLAlchemyRefreshTokenStore(RefreshTokenStore):
    """:class:`RefreshTokenStore` on the ``refresh_tokens`` table.

    Each call is its own committed transaction.
    """

    def add(self, record: RefreshTokenRecord) -> None:
        with SQLAlchemyUnitOfWork() as uow:
            uow.refresh_tokens.add(
                RefreshToken(
                    id=record.id,
                    token=record.token,
                    user_id=record.user_id,
                    expires_at=record.expires_at,
                )
            )

    def find_active(self, user_id: str, token: str, now: datetime) -> RefreshTokenRecord | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.refresh_tokens.find_active(user_id, token, now)
            return _to_record(row) if row is not None else None

    def delete_by_id(self, record_id: str) -> bool:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.refresh_tokens.delete_by_id(record_id) == 1

    def delete_for_user(self, user_id: str, token: str | None = None) -> list[str]:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.refresh_tokens.delete_for_user(user_id, token)

    def purge_expired(self, now: datetime) -> int:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.refresh_tokens.purge_expired(now)


class SQLAlchemyUserStore(UserStore):
    """:class:`UserStore` reading the ``users`` table."""

    def get_identity(self, user_id: str) -> UserIdentity | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            user = uow.users.get(user_id)
            if user is None:
                return None
            return UserIdentity(
                id=user.id,
                email=user.email,
                role=user.role.value,
                is_active=user.is_active,
            )
