"""Flask extension instances and the shared key-value client lifecycle."""

from __future__ import annotations

import atexit
import logging
import sqlite3

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData, event
from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Import-safe extension objects; bound to an app in ``init_app``.
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

REDIS_EXTENSION_KEY = "redis_client"


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection.
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, and JWT extensions.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`pressroom.models` package to ensure SQLAlchemy metadata is ready
        for migrations.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from pressroom import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)


def init_redis(app: Flask, client: redis.Redis | None = None) -> redis.Redis:
    """Acquire the process-wide Redis client once and register its release.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``REDIS_URL`` is used when ``client`` is omitted.
    client: redis.Redis | None
        Pre-built client (tests pass a ``fakeredis`` instance).

    Returns
    -------
    redis.Redis
        Connected client, also stored under ``app.extensions["redis_client"]``.

    Raises
    ------
    RuntimeError
        When no client is given and ``REDIS_URL`` is empty or unreachable.
    """
    if client is None:
        redis_url = app.config.get("REDIS_URL")
        if not redis_url:
            raise RuntimeError("REDIS_URL is not configured and no Redis client was provided.")
        client = redis.Redis.from_url(redis_url, decode_responses=True)
        try:
            client.ping()
        except RedisError as exc:
            raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
        # Only clients we opened are closed by us.
        atexit.register(_close_redis, client)
        log.info("redis.connected")

    app.extensions[REDIS_EXTENSION_KEY] = client
    return client


def _close_redis(client: redis.Redis) -> None:
    """Close the connection pool at interpreter shutdown."""
    try:
        client.close()
    except RedisError:  # pragma: no cover - shutdown path
        log.warning("redis.close_failed", exc_info=True)


def get_redis(app: Flask) -> redis.Redis:
    """Return the Redis client bound to ``app``."""
    client = app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        raise RuntimeError("Redis client is not initialized. Call init_redis() first.")
    return client
