"""
UserService
===========

Profile management plus the admin operations on the ``User`` aggregate.
Single-user reads go through the cache (``user:<id>``); every write drops
that entry after the transaction commits.
"""

from __future__ import annotations

import logging

from pressroom.models.user import Role
from pressroom.repositories.base import Pagination
from pressroom.repositories.user import UserRepository
from pressroom.services._shared.base import BaseService, ServiceContext
from pressroom.services._shared.cache import CacheAside
from pressroom.services._shared.cache_keys import POSTS_LIST_PATTERN, post_key, user_key
from pressroom.services._shared.dto import PageMeta, PageOut
from pressroom.services._shared.errors import ForbiddenError, NotFoundError, ServiceError
from pressroom.services._shared.policies.common import is_admin
from pressroom.services.users.dto import PasswordChangeIn, ProfileUpdateIn, UserOut

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """
    Application service for users.

    :param cache: Cache-aside helper on the shared key-value store.
    :param ttl: Lifetime of cached users in seconds.
    """

    def __init__(self, *, cache: CacheAside, ttl: int) -> None:
        self.cache = cache
        self.ttl = ttl

    # --------------------------------------------------------------------- #
    # Reads
    # --------------------------------------------------------------------- #

    def get_user(self, user_id: str) -> UserOut:
        """
        Return a user, from cache when possible.

        :raises NotFoundError: If the user does not exist.
        """
        return self.cache.get_or_compute(
            user_key(user_id),
            lambda: self._load(user_id),
            self.ttl,
            dumps=UserOut.to_dict,
            loads=UserOut.from_dict,
        )

    def _load(self, user_id: str) -> UserOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserOut.from_model(user)

    def list_users(self, page: int = 1, limit: int = 10) -> PageOut[UserOut]:
        """Newest-first page of all users (not cached)."""
        p = self.ensure_pagination(page, limit)
        with self.ro_uow() as uow:
            result = uow.users.paginate(Pagination(page=p.page, limit=p.limit, sort=["-created_at"]))
            return PageOut(
                items=[UserOut.from_model(u) for u in result.items],
                meta=PageMeta.build(total=result.total, page=p.page, limit=p.limit),
            )

    # --------------------------------------------------------------------- #
    # Self-service writes
    # --------------------------------------------------------------------- #

    def update_profile(self, user_id: str, dto: ProfileUpdateIn) -> UserOut:
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            repo.assign_updates(user, dto.changes())
            out = UserOut.from_model(user)

        self.cache.invalidate(user_key(user_id))
        return out

    def change_password(self, user_id: str, dto: PasswordChangeIn) -> None:
        """
        Replace the password after verifying the old one.

        :raises ServiceError: When the old password does not match.
        """
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if not user.verify_password(dto.old_password):
                raise ServiceError("Old password is incorrect.")
            user.password = dto.new_password
            uow.users.flush()

    # --------------------------------------------------------------------- #
    # Admin writes
    # --------------------------------------------------------------------- #

    def change_role(self, ctx: ServiceContext, user_id: str, role: Role) -> UserOut:
        """Only a ``SUPER_ADMIN`` may change roles."""
        if ctx.actor_role != Role.SUPER_ADMIN.value:
            raise ForbiddenError("Only a super admin can change roles.")
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            user.role = role
            uow.users.flush()
            out = UserOut.from_model(user)

        self.cache.invalidate(user_key(user_id))
        logger.info("user role changed", extra={"target_user_id": user_id})
        return out

    def toggle_status(self, ctx: ServiceContext, user_id: str) -> UserOut:
        """Flip ``is_active``; deactivated users can no longer refresh tokens."""
        if not is_admin(ctx.actor_role):
            raise ForbiddenError("Only an admin can change account status.")
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            user.is_active = not user.is_active
            uow.users.flush()
            out = UserOut.from_model(user)

        self.cache.invalidate(user_key(user_id))
        logger.info("user status changed", extra={"target_user_id": user_id})
        return out

    def delete_user(self, ctx: ServiceContext, user_id: str) -> None:
        """Delete a user together with their posts and refresh tokens."""
        if ctx.actor_role != Role.SUPER_ADMIN.value:
            raise ForbiddenError("Only a super admin can delete users.")
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            post_ids = uow.posts.ids_by_author(user_id)
            uow.users.delete(user)

        self.cache.invalidate(user_key(user_id))
        for post_id in post_ids:
            self.cache.invalidate(post_key(post_id))
        if post_ids:
            self.cache.invalidate_by_pattern(POSTS_LIST_PATTERN)
        logger.info("user deleted", extra={"target_user_id": user_id})
