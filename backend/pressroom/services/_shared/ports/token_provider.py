from __future__ import annotations

from typing import Any, Protocol


class TokenProvider(Protocol):
    """
    Port for signing and verifying JWTs.

    Access and refresh tokens are signed with distinct secrets. ``decode_*``
    raise :class:`pressroom.services._shared.errors.TokenInvalid` on any
    signature, expiry, or shape problem.
    """

    def create_access_token(self, claims: dict[str, Any], *, expires_in: int) -> str: ...

    def create_refresh_token(self, claims: dict[str, Any], *, expires_in: int) -> str: ...

    def decode_access_token(self, token: str) -> dict[str, Any]: ...

    def decode_refresh_token(self, token: str) -> dict[str, Any]: ...
