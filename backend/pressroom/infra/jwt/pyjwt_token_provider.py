from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

import jwt
from jwt.exceptions import InvalidTokenError

from pressroom.services._shared.errors import TokenInvalid
from pressroom.services._shared.ports import TokenProvider

ALGORITHM = "HS256"


@dataclass(slots=True)
class PyJWTTokenProvider(TokenProvider):
    """
    HS256 JWT adapter with separate access and refresh secrets.

    Access tokens are shaped so Flask-JWT-Extended (configured with the same
    ``JWT_SECRET_KEY``) accepts them on protected routes: string ``sub``,
    ``type="access"``, and a ``jti``.

    :param access_secret: Signing key for access tokens.
    :param refresh_secret: Signing key for refresh tokens.
    """

    access_secret: str
    refresh_secret: str

    def _encode(self, claims: dict[str, Any], *, secret: str, ttype: str, expires_in: int) -> str:
        if not secret:
            raise RuntimeError(f"No signing secret configured for {ttype} tokens.")
        now = datetime.now(UTC)
        payload = dict(claims)
        payload.update(
            {
                "type": ttype,
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
                # random jti keeps two tokens minted in the same second distinct
                "jti": secrets.token_hex(16),
            }
        )
        return cast(str, jwt.encode(payload, secret, algorithm=ALGORITHM))

    def _decode(self, token: str, *, secret: str, ttype: str) -> dict[str, Any]:
        try:
            payload = cast(
                dict[str, Any],
                jwt.decode(
                    token,
                    secret,
                    algorithms=[ALGORITHM],
                    options={"require": ["exp", "sub"]},
                ),
            )
        except InvalidTokenError as exc:
            raise TokenInvalid(str(exc)) from exc
        if payload.get("type") != ttype:
            raise TokenInvalid(f"expected a {ttype} token")
        return payload

    def create_access_token(self, claims: dict[str, Any], *, expires_in: int) -> str:
        return self._encode(claims, secret=self.access_secret, ttype="access", expires_in=expires_in)

    def create_refresh_token(self, claims: dict[str, Any], *, expires_in: int) -> str:
        return self._encode(
            claims, secret=self.refresh_secret, ttype="refresh", expires_in=expires_in
        )

    def decode_access_token(self, token: str) -> dict[str, Any]:
        return self._decode(token, secret=self.access_secret, ttype="access")

    def decode_refresh_token(self, token: str) -> dict[str, Any]:
        return self._decode(token, secret=self.refresh_secret, ttype="refresh")
