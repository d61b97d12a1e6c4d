"""
Refresh-token lifecycle: issuance, rotation and logout.

A refresh token string is usable at most once. Rotation consumes it by
deleting its stored record (the delete's row count decides concurrent
races) and then denylisting it for the rest of its natural lifetime.
Access tokens are never looked up anywhere; they expire on their own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from pressroom.services._shared.errors import (
    TokenInvalid,
    TokenRevoked,
    TokenUnknown,
    UserInactiveOrMissing,
)
from pressroom.services._shared.ports import (
    RefreshTokenRecord,
    RefreshTokenStore,
    TokenProvider,
    UserStore,
)
from pressroom.services.auth.dto import TokenLifetimes, TokenPairOut
from pressroom.services.auth.revocation import RevocationRegistry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenIssuer:
    """
    Issues, rotates and revokes token pairs.

    :param tokens: JWT signer/verifier.
    :param refresh_store: Persistent record of outstanding refresh tokens.
    :param registry: Denylist of consumed or logged-out refresh tokens.
    :param users: Identity lookups for rotation.
    :param lifetimes: Access/refresh lifetimes in seconds.
    :param clock: Returns the current aware UTC time.
    """

    def __init__(
        self,
        *,
        tokens: TokenProvider,
        refresh_store: RefreshTokenStore,
        registry: RevocationRegistry,
        users: UserStore,
        lifetimes: TokenLifetimes,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.tokens = tokens
        self.refresh_store = refresh_store
        self.registry = registry
        self.users = users
        self.lifetimes = lifetimes
        self._clock = clock

    # ------------------------------------------------------------------ #
    # Issuance
    # ------------------------------------------------------------------ #

    def issue(self, user_id: str, email: str, role: str) -> TokenPairOut:
        """
        Sign a new pair and record the refresh token.

        The record's ``expires_at`` is ``now + refresh lifetime``.
        """
        claims = {"sub": str(user_id), "email": email, "role": role}
        access = self.tokens.create_access_token(
            claims, expires_in=self.lifetimes.access_expires_in
        )
        refresh = self.tokens.create_refresh_token(
            claims, expires_in=self.lifetimes.refresh_expires_in
        )
        self.refresh_store.add(
            RefreshTokenRecord(
                token=refresh,
                user_id=str(user_id),
                expires_at=self._clock() + timedelta(seconds=self.lifetimes.refresh_expires_in),
            )
        )
        return TokenPairOut(
            access_token=access,
            refresh_token=refresh,
            access_expires_in=self.lifetimes.access_expires_in,
            refresh_expires_in=self.lifetimes.refresh_expires_in,
        )

    # ------------------------------------------------------------------ #
    # Rotation
    # ------------------------------------------------------------------ #

    def rotate(self, refresh_token: str) -> TokenPairOut:
        """
        Exchange a refresh token for a new pair, consuming it.

        :raises TokenInvalid: Signature, expiry or token type is wrong.
        :raises TokenRevoked: The token is denylisted.
        :raises TokenUnknown: No active record, or a concurrent rotation
            consumed it first.
        :raises UserInactiveOrMissing: The subject is gone or deactivated.
        """
        claims = self.tokens.decode_refresh_token(refresh_token)

        if self.registry.is_revoked(refresh_token):
            raise TokenRevoked()

        user_id = str(claims["sub"])
        now = self._clock()
        record = self.refresh_store.find_active(user_id, refresh_token, now)
        if record is None:
            raise TokenUnknown()

        identity = self.users.get_identity(user_id)
        if identity is None or not identity.is_active:
            raise UserInactiveOrMissing()

        # Exactly one concurrent caller sees the row disappear.
        if not self.refresh_store.delete_by_id(record.id):
            raise TokenUnknown("refresh token already consumed")

        remaining = int((record.expires_at - now).total_seconds())
        self.registry.revoke(refresh_token, max(0, remaining))

        return self.issue(identity.id, identity.email, identity.role)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def revoke(self, user_id: str, refresh_token: str | None = None) -> int:
        """
        Delete one (``refresh_token`` given) or all of a user's refresh tokens.

        Every deleted token is denylisted for the configured refresh lifetime.
        A supplied token whose record is already gone is denylisted too, but
        only when it verifies and belongs to ``user_id``. Repeating the call
        is harmless.

        :returns: Number of stored records removed.
        """
        deleted = self.refresh_store.delete_for_user(str(user_id), refresh_token)
        doomed = set(deleted)
        if refresh_token and refresh_token not in doomed and self._owned_by(refresh_token, str(user_id)):
            doomed.add(refresh_token)
        for token in doomed:
            self.registry.revoke(token, self.lifetimes.refresh_expires_in)
        logger.info("refresh tokens revoked", extra={"count": len(deleted)})
        return len(deleted)

    def _owned_by(self, refresh_token: str, user_id: str) -> bool:
        try:
            claims = self.tokens.decode_refresh_token(refresh_token)
        except TokenInvalid:
            return False
        return str(claims.get("sub")) == user_id

    # ------------------------------------------------------------------ #
    # Maintenance
    # ------------------------------------------------------------------ #

    def purge_expired(self) -> int:
        """Drop stored refresh records whose ``expires_at`` has passed."""
        removed = self.refresh_store.purge_expired(self._clock())
        logger.info("expired refresh tokens purged", extra={"count": removed})
        return removed
