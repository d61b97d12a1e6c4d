from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pressroom.core.durations import parse_duration

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param email: Login email.
    :type email: str
    :param password: Raw password (hashed by the model).
    :type password: str
    :param username: Optional display name.
    :type username: str | None
    """

    email: str
    password: str
    username: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access/refresh pair with their lifetimes in seconds.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded refresh JWT.
    :param access_expires_in: Access lifetime in seconds.
    :param refresh_expires_in: Refresh lifetime in seconds.
    """

    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int


@dataclass(frozen=True, slots=True)
class AuthUserOut:
    """Identity summary returned next to a token pair."""

    id: str
    email: str
    username: str | None
    role: str


@dataclass(frozen=True, slots=True)
class AuthOut:
    """Result of register/login: the user plus a fresh token pair."""

    user: AuthUserOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenLifetimes:
    """
    Token lifetimes in seconds.

    :param access_expires_in: Access token lifetime.
    :param refresh_expires_in: Refresh token lifetime; also the revocation
        TTL used on logout.
    """

    access_expires_in: int
    refresh_expires_in: int

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> TokenLifetimes:
        """Parse ``JWT_ACCESS_EXPIRES_IN``/``JWT_REFRESH_EXPIRES_IN`` duration strings."""
        return cls(
            access_expires_in=parse_duration(config.get("JWT_ACCESS_EXPIRES_IN")),
            refresh_expires_in=parse_duration(config.get("JWT_REFRESH_EXPIRES_IN")),
        )
