from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from pressroom.models.user import User
from pressroom.repositories.user import UserRepository
from pressroom.services._shared.base import BaseService
from pressroom.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    TokenError,
    violates,
)
from pressroom.services.auth.dto import (
    AuthOut,
    AuthUserOut,
    LoginIn,
    RegisterIn,
    TokenPairOut,
)
from pressroom.services.auth.tokens import TokenIssuer

logger = logging.getLogger(__name__)


def _auth_user(user: User) -> AuthUserOut:
    return AuthUserOut(id=user.id, email=user.email, username=user.username, role=user.role.value)


class AuthService(BaseService):
    """
    Authentication lifecycle (register / login / refresh / logout).

    Credential checks go through the user repository; everything about
    tokens is delegated to :class:`TokenIssuer`.
    """

    def __init__(self, *, issuer: TokenIssuer) -> None:
        self.issuer = issuer

    # ------------------------------------------------------------------ #
    # Register / Login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> AuthOut:
        """
        Create a ``USER`` account and sign it in.

        :raises ConflictError: If the email is already registered.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "email already in use")
            try:
                user = repo.add(User(email=dto.email, password=dto.password, username=dto.username))
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "email already in use") from exc
                raise
            out = _auth_user(user)

        logger.info("user registered", extra={"target_user_id": out.id})
        return AuthOut(user=out, tokens=self.issuer.issue(out.id, out.email, out.role))

    def login(self, dto: LoginIn) -> AuthOut:
        """
        Verify credentials and issue a fresh pair.

        :raises AuthenticationError: Wrong email/password, or the account is disabled.
        """
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                raise AuthenticationError("Invalid email or password")
            if not user.is_active:
                raise AuthenticationError("Account is disabled")
            out = _auth_user(user)

        return AuthOut(user=out, tokens=self.issuer.issue(out.id, out.email, out.role))

    # ------------------------------------------------------------------ #
    # Refresh / Logout
    # ------------------------------------------------------------------ #

    def refresh(self, refresh_token: str) -> TokenPairOut:
        """
        Rotate a refresh token.

        Every rejection reaches the client as the same
        :class:`AuthenticationError`; the specific reason is only logged.
        """
        try:
            return self.issuer.rotate(refresh_token)
        except TokenError as exc:
            logger.info("refresh rejected", extra={"reason": exc.reason})
            raise AuthenticationError("Token refresh failed") from exc

    def logout(self, user_id: str, refresh_token: str | None = None) -> int:
        """Revoke one refresh token, or all of the user's sessions when none is given."""
        return self.issuer.revoke(user_id, refresh_token)
