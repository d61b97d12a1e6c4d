"""SQL-backed refresh-token and identity stores."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from pressroom.infra.sql.sqlalchemy_stores import SQLAlchemyRefreshTokenStore, SQLAlchemyUserStore
from pressroom.models.user import Role
from pressroom.services._shared.ports import RefreshTokenRecord
from tests.factories.user import UserFactory

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def store() -> SQLAlchemyRefreshTokenStore:
    return SQLAlchemyRefreshTokenStore()


def _record(user_id: str, token: str, *, ttl: int = 3600) -> RefreshTokenRecord:
    return RefreshTokenRecord(token=token, user_id=user_id, expires_at=NOW + timedelta(seconds=ttl))


def test_find_active_honours_expiry(store):
    user = UserFactory()
    store.add(_record(user.id, "tok-1", ttl=60))

    found = store.find_active(user.id, "tok-1", NOW)
    assert found is not None
    assert found.expires_at == NOW + timedelta(seconds=60)
    assert found.expires_at.tzinfo is not None

    assert store.find_active(user.id, "tok-1", NOW + timedelta(seconds=60)) is None
    assert store.find_active("someone-else", "tok-1", NOW) is None


def test_delete_by_id_succeeds_once(store):
    user = UserFactory()
    record = _record(user.id, "tok-1")
    store.add(record)

    assert store.delete_by_id(record.id) is True
    assert store.delete_by_id(record.id) is False
    assert store.find_active(user.id, "tok-1", NOW) is None


def test_delete_for_user_single_and_all(store):
    user = UserFactory()
    other = UserFactory()
    for token in ("a", "b", "c"):
        store.add(_record(user.id, token))
    store.add(_record(other.id, "z"))

    assert store.delete_for_user(user.id, "b") == ["b"]
    assert store.delete_for_user(user.id, "b") == []
    assert sorted(store.delete_for_user(user.id)) == ["a", "c"]
    assert store.find_active(other.id, "z", NOW) is not None


def test_purge_expired_keeps_live_rows(store):
    user = UserFactory()
    store.add(_record(user.id, "old", ttl=-1))
    store.add(_record(user.id, "live", ttl=60))

    assert store.purge_expired(NOW) == 1
    assert store.find_active(user.id, "live", NOW) is not None


def test_duplicate_token_is_rejected(store):
    user = UserFactory()
    store.add(_record(user.id, "same"))
    with pytest.raises(IntegrityError):
        store.add(_record(user.id, "same"))


def test_user_store_reports_identity():
    user = UserFactory(role=Role.ADMIN, is_active=False)
    identity = SQLAlchemyUserStore().get_identity(user.id)

    assert identity is not None
    assert identity.email == user.email
    assert identity.role == "ADMIN"
    assert identity.is_active is False
    assert SQLAlchemyUserStore().get_identity("missing") is None
