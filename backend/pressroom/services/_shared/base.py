from __future__ import annotations

from dataclasses import dataclass

from pressroom.services._shared.dto import PaginationIn
from pressroom.services._shared.errors import ForbiddenError
from pressroom.services._shared.policies.common import is_admin, is_owner
from pressroom.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

MAX_PAGE_SIZE = 100


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data about who is calling.

    :param actor_id: Authenticated user id (the access token ``sub``).
    :param actor_role: Role claim of the access token.
    :param request_id: Correlation id for logging.
    """

    actor_id: str | None = None
    actor_role: str | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Shared validation helpers (pagination) and ownership checks.

    Services never touch the global session directly; they go through a
    Unit of Work.
    """

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    def ensure_pagination(self, page: int, limit: int) -> PaginationIn:
        """
        Clamp ``page`` to ``>= 1`` and ``limit`` to ``1..MAX_PAGE_SIZE``.

        :returns: Normalized pagination input.
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), MAX_PAGE_SIZE)
        return PaginationIn(page=page, limit=limit)

    def ensure_owner_or_admin(self, ctx: ServiceContext, owner_id: str, *, msg: str | None = None) -> None:
        """
        Allow the resource owner or any ``ADMIN``/``SUPER_ADMIN``.

        :raises ForbiddenError: Otherwise.
        """
        if is_owner(actor_id=ctx.actor_id, owner_id=owner_id) or is_admin(ctx.actor_role):
            return
        raise ForbiddenError(msg or "You can only modify your own resources.")
