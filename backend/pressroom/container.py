"""Composition root: wires adapters into the services once per app."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import redis  # type: ignore[import-untyped]

from pressroom.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from pressroom.infra.redis.redis_key_value_store import RedisKeyValueStore
from pressroom.infra.sql.sqlalchemy_stores import SQLAlchemyRefreshTokenStore, SQLAlchemyUserStore
from pressroom.services._shared.cache import CacheAside
from pressroom.services._shared.locks import DistributedLock
from pressroom.services._shared.ports import KeyValueStore
from pressroom.services.auth.dto import TokenLifetimes
from pressroom.services.auth.revocation import RevocationRegistry
from pressroom.services.auth.service import AuthService
from pressroom.services.auth.tokens import TokenIssuer
from pressroom.services.posts.service import PostService
from pressroom.services.users.service import UserService


@dataclass(slots=True)
class Container:
    """Long-lived collaborators shared by every request."""

    store: KeyValueStore
    cache: CacheAside
    lock: DistributedLock
    issuer: TokenIssuer
    auth: AuthService
    users: UserService
    posts: PostService
    maintenance_lock_ttl: int


def build_container(config: Mapping[str, Any], redis_client: redis.Redis) -> Container:
    """Assemble the object graph from app config and a connected Redis client."""
    store = RedisKeyValueStore(redis_client)
    cache = CacheAside(store)
    issuer = TokenIssuer(
        tokens=PyJWTTokenProvider(
            access_secret=config["JWT_SECRET_KEY"],
            refresh_secret=config["JWT_REFRESH_SECRET_KEY"],
        ),
        refresh_store=SQLAlchemyRefreshTokenStore(),
        registry=RevocationRegistry(store),
        users=SQLAlchemyUserStore(),
        lifetimes=TokenLifetimes.from_config(config),
    )
    return Container(
        store=store,
        cache=cache,
        lock=DistributedLock(store),
        issuer=issuer,
        auth=AuthService(issuer=issuer),
        users=UserService(cache=cache, ttl=int(config["USER_CACHE_TTL"])),
        posts=PostService(cache=cache, ttl=int(config["POST_CACHE_TTL"])),
        maintenance_lock_ttl=int(config["MAINTENANCE_LOCK_TTL"]),
    )
