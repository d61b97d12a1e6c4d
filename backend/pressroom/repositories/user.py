"""User repository: lookups by email and whitelisted profile updates."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from pressroom.models.user import User
from pressroom.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens; that belongs to the auth service.
    """

    model = User

    def _sortable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _updatable_fields(self):
        """Profile fields a user may change on themselves."""
        return {"username", "avatar"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email.lower().strip())
        return self.session.execute(stmt).first() is not None

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``password`` matches, else ``None``."""
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user
